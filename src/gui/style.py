"""
Drawing style for the NanoMol canvas.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from PyQt6.QtCore import Qt


DEFAULT_ELEMENT_COLORS: Dict[str, str] = {
    "C": "#2d3748",
    "N": "#3182ce",
    "O": "#e53e3e",
    "H": "#718096",
}


@dataclass(frozen=True)
class DrawingStyle:
    bond_color: str = "#4a5568"
    bond_stroke_px: float = 2.5
    background_color: str = "#ffffff"
    grid_color: str = "#edf2f7"
    grid_step: float = 40.0
    label_font_family: str = "Arial"
    label_font_px: int = 16
    label_radius: float = 14.0
    hover_color: str = "#3182ce"
    vertex_color: str = "#cbd5e0"
    preview_color: str = "#cbd5e0"
    snap_color: str = "#3182ce"
    snap_radius: float = 18.0
    ghost_radius: float = 12.0
    cap_style: Qt.PenCapStyle = Qt.PenCapStyle.RoundCap
    element_colors: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ELEMENT_COLORS))

    def element_color(self, element: str) -> str:
        return self.element_colors.get(element, "#000000")


NANOMOL_STYLE = DrawingStyle()
