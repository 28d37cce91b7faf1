"""Transformación de vista (desplazamiento y zoom) entre pantalla y mundo."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Tuple

from core.options import MAX_ZOOM, MIN_ZOOM, ZOOM_SENSITIVITY


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class ViewState:
    """Desplazamiento `(x, y)` en pantalla y escala `k` de la vista.

    Un punto de mundo `w` se dibuja en `w * k + (x, y)`.
    """
    x: float = 0.0
    y: float = 0.0
    k: float = 1.0

    def screen_to_world(self, px: float, py: float) -> Tuple[float, float]:
        """Convierte coordenadas de pantalla (ratón) a coordenadas de mundo."""
        return ((px - self.x) / self.k, (py - self.y) / self.k)

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        return (wx * self.k + self.x, wy * self.k + self.y)

    def zoomed(
        self,
        px: float,
        py: float,
        delta: float,
        *,
        min_zoom: float = MIN_ZOOM,
        max_zoom: float = MAX_ZOOM,
        sensitivity: float = ZOOM_SENSITIVITY,
    ) -> "ViewState":
        """Aplica un paso de rueda centrado en el puntero.

        Args:
            px: Posición X del puntero en pantalla.
            py: Posición Y del puntero en pantalla.
            delta: Desplazamiento de la rueda (positivo aleja).

        Returns:
            Una vista nueva en la que el punto de mundo bajo el puntero sigue
            bajo el puntero.
        """
        new_k = _clamp(self.k * (1 - delta * sensitivity), min_zoom, max_zoom)
        wx, wy = self.screen_to_world(px, py)
        return ViewState(x=px - wx * new_k, y=py - wy * new_k, k=new_k)

    def panned(self, dx: float, dy: float) -> "ViewState":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "k": self.k}

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        min_zoom: float = MIN_ZOOM,
        max_zoom: float = MAX_ZOOM,
    ) -> "ViewState":
        """Raises: KeyError, TypeError, ValueError si los datos no son válidos
        o la escala cae fuera de [min_zoom, max_zoom]."""
        k = float(data["k"])
        if not min_zoom <= k <= max_zoom:
            raise ValueError(f"Escala de vista inválida: {k}")
        return cls(x=float(data["x"]), y=float(data["y"]), k=k)
