"""
NanoMol Canvas
QWidget surface that forwards pointer input to `MolEditor` and paints the
current graph with the editor's pan/zoom transform.
"""
from __future__ import annotations

import math

from PyQt6.QtCore import QLineF, QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPainter, QPen, QWheelEvent
from PyQt6.QtWidgets import QWidget

from chemcalc.formula import atom_label
from core.model import Tool
from gui.bond_geometry import snapshot_lines
from gui.editor import EditorState, MolEditor
from gui.style import NANOMOL_STYLE, DrawingStyle


class MolEditorCanvas(QWidget):
    """
    Drawing surface for molecules.
    Emits `state_changed` with every `EditorState` the editor publishes and
    `smiles_changed` whenever the derived notation changes.
    """

    state_changed = pyqtSignal(object)
    smiles_changed = pyqtSignal(str)

    def __init__(
        self,
        parent=None,
        read_only: bool = False,
        drawing_style: DrawingStyle = NANOMOL_STYLE,
    ) -> None:
        super().__init__(parent)
        self.editor = MolEditor(on_change=self._on_editor_change, read_only=read_only)
        self.drawing_style = drawing_style
        self._last_smiles = self.editor.smiles

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(400, 300)
        self._update_cursor()

    # --- Editor bridge ---

    def _on_editor_change(self, state: EditorState) -> None:
        self.state_changed.emit(state)

    def _after_event(self) -> None:
        smiles = self.editor.smiles
        if smiles != self._last_smiles:
            self._last_smiles = smiles
            self.smiles_changed.emit(smiles)
        self._update_cursor()
        self.update()

    def _update_cursor(self) -> None:
        if self.editor.read_only:
            self.setCursor(Qt.CursorShape.ArrowCursor)
        elif self.editor.interaction.is_panning:
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
        elif self.editor.tool == Tool.SELECT:
            self.setCursor(Qt.CursorShape.SizeAllCursor)
        else:
            self.setCursor(Qt.CursorShape.CrossCursor)

    def refresh(self) -> None:
        """Repaint after the editor was changed behind the canvas' back."""
        self._after_event()

    def set_read_only(self, read_only: bool) -> None:
        self.editor.read_only = read_only
        self._after_event()

    def set_value(self, value) -> bool:
        adopted = self.editor.set_value(value)
        self._after_event()
        return adopted

    def set_current_tool(self, tool) -> None:
        self.editor.set_tool(tool)
        self._after_event()

    def set_active_element(self, element: str) -> None:
        self.editor.set_active_element(element)
        self._after_event()

    def undo(self) -> None:
        self.editor.undo()
        self._after_event()

    def redo(self) -> None:
        self.editor.redo()
        self._after_event()

    def clear_canvas(self) -> None:
        self.editor.clear()
        self._after_event()

    # --- Qt events ---

    def mousePressEvent(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        self.editor.pointer_down(pos.x(), pos.y())
        self._after_event()

    def mouseMoveEvent(self, event) -> None:
        pos = event.position()
        self.editor.pointer_move(pos.x(), pos.y())
        self._after_event()

    def mouseReleaseEvent(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        pos = event.position()
        self.editor.pointer_up(pos.x(), pos.y())
        self._after_event()

    def leaveEvent(self, event) -> None:
        self.editor.pointer_leave()
        self._after_event()
        super().leaveEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        pos = event.position()
        # Qt reports wheel-up as positive; the editor zooms in on negative deltas.
        self.editor.wheel(pos.x(), pos.y(), -event.angleDelta().y())
        self._after_event()

    # --- Painting ---

    def paintEvent(self, event) -> None:
        style = self.drawing_style
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        painter.fillRect(self.rect(), QColor(style.background_color))
        self._paint_grid(painter)

        view = self.editor.view
        painter.translate(view.x, view.y)
        painter.scale(view.k, view.k)
        self._paint_bonds(painter)
        self._paint_preview(painter)
        self._paint_atoms(painter)
        painter.end()

    def _paint_grid(self, painter: QPainter) -> None:
        view = self.editor.view
        step = self.drawing_style.grid_step * view.k
        if step < 4:
            return
        painter.setPen(QPen(QColor(self.drawing_style.grid_color), 1))
        x = math.fmod(view.x, step)
        while x < self.width():
            painter.drawLine(QLineF(x, 0, x, self.height()))
            x += step
        y = math.fmod(view.y, step)
        while y < self.height():
            painter.drawLine(QLineF(0, y, self.width(), y))
            y += step

    def _paint_bonds(self, painter: QPainter) -> None:
        style = self.drawing_style
        pen = QPen(QColor(style.bond_color), style.bond_stroke_px)
        pen.setCapStyle(style.cap_style)
        painter.setPen(pen)
        for lines in snapshot_lines(self.editor.snapshot, self.editor.options.bond_line_offset).values():
            for (x1, y1), (x2, y2) in lines:
                painter.drawLine(QLineF(x1, y1, x2, y2))

    def _paint_preview(self, painter: QPainter) -> None:
        editor = self.editor
        inter = editor.interaction
        if (
            editor.read_only
            or editor.tool != Tool.DRAW
            or not inter.is_dragging
            or inter.drag_anchor is None
            or inter.pointer is None
        ):
            return
        style = self.drawing_style
        if inter.snap_target_id is None:
            pen = QPen(QColor(style.preview_color), 2)
            pen.setDashPattern([5, 5])
        else:
            color = QColor(style.snap_color)
            color.setAlphaF(0.5)
            pen = QPen(color, 3)
        painter.setPen(pen)
        ax, ay = inter.drag_anchor.position
        px, py = inter.pointer
        painter.drawLine(QLineF(ax, ay, px, py))

    def _paint_atoms(self, painter: QPainter) -> None:
        editor = self.editor
        style = self.drawing_style
        inter = editor.interaction
        snapshot = editor.snapshot

        font = QFont(style.label_font_family)
        font.setPixelSize(style.label_font_px)
        font.setBold(True)
        painter.setFont(font)

        for atom in snapshot.atoms:
            center = QPointF(atom.x, atom.y)
            hovered = not editor.read_only and inter.hovered_atom_id == atom.id
            if not editor.read_only and inter.snap_target_id == atom.id:
                color = QColor(style.snap_color)
                color.setAlphaF(0.6)
                painter.setPen(QPen(color, 2))
                painter.setBrush(Qt.BrushStyle.NoBrush)
                painter.drawEllipse(center, style.snap_radius, style.snap_radius)

            label = atom_label(atom, snapshot.incident_bonds(atom.id))
            if label is None and not hovered:
                continue
            if label is not None:
                painter.setPen(Qt.PenStyle.NoPen)
                painter.setBrush(QBrush(QColor(style.background_color)))
                painter.drawEllipse(center, style.label_radius, style.label_radius)
                painter.setPen(QColor(style.element_color(atom.element)))
                painter.drawText(
                    QRectF(atom.x - 40, atom.y - 12, 80, 24),
                    Qt.AlignmentFlag.AlignCenter,
                    label,
                )
            else:
                painter.setPen(QPen(QColor(style.hover_color), 1))
                painter.setBrush(QBrush(QColor(style.background_color)))
                painter.drawEllipse(center, 6, 6)
                painter.setPen(Qt.PenStyle.NoPen)
                painter.setBrush(QBrush(QColor(style.vertex_color)))
                painter.drawEllipse(center, 3, 3)

        self._paint_ghost_atom(painter)

    def _paint_ghost_atom(self, painter: QPainter) -> None:
        editor = self.editor
        inter = editor.interaction
        if (
            editor.read_only
            or editor.tool != Tool.DRAW
            or not inter.is_dragging
            or inter.pointer is None
            or inter.snap_target_id is not None
        ):
            return
        style = self.drawing_style
        px, py = inter.pointer
        painter.setOpacity(0.6)
        pen = QPen(QColor(style.snap_color), 2)
        pen.setDashPattern([4, 2])
        painter.setPen(pen)
        painter.setBrush(QBrush(QColor(style.background_color)))
        painter.drawEllipse(QPointF(px, py), style.ghost_radius, style.ghost_radius)
        painter.setPen(QColor(style.element_color(editor.active_element)))
        painter.drawText(
            QRectF(px - 20, py - 12, 40, 24), Qt.AlignmentFlag.AlignCenter, editor.active_element
        )
        painter.setOpacity(1.0)

    def render_image(self):
        """Render the widget, grid and overlays included, into a `QPixmap`."""
        return self.grab()
