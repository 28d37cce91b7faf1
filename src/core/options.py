"""Opciones de configuración de la interacción y el dibujo del editor."""

from dataclasses import dataclass


# Radio de acierto sobre el centro de un átomo (unidades de mundo).
ATOM_HIT_RADIUS = 15.0
# Distancia perpendicular máxima al segmento de un enlace.
BOND_HIT_DISTANCE = 8.0
# Radio para "enganchar" el final de un enlace a un átomo existente.
BOND_SNAP_DISTANCE = 20.0
# Longitud estándar de un enlace dibujado (40 * 1.5).
STANDARD_BOND_LENGTH = 60.0
# Por debajo de esta distancia el gesto se interpreta como clic.
CLICK_THRESHOLD = 5.0
# Paso angular del dibujo de enlaces (30 grados).
ANGLE_STEP_DEG = 30.0
# Separación entre líneas de enlaces múltiples.
BOND_LINE_OFFSET = 6.0
MIN_ZOOM = 0.1
MAX_ZOOM = 5.0
ZOOM_SENSITIVITY = 0.001


@dataclass(frozen=True)
class EditorOptions:
    """Constantes ajustables del editor.

    Los valores por defecto reproducen el comportamiento de referencia;
    solo deberían cambiarse si el producto lo exige.
    """

    atom_hit_radius: float = ATOM_HIT_RADIUS
    bond_hit_distance: float = BOND_HIT_DISTANCE
    bond_snap_distance: float = BOND_SNAP_DISTANCE
    bond_length: float = STANDARD_BOND_LENGTH
    click_threshold: float = CLICK_THRESHOLD
    angle_step_deg: float = ANGLE_STEP_DEG
    bond_line_offset: float = BOND_LINE_OFFSET
    min_zoom: float = MIN_ZOOM
    max_zoom: float = MAX_ZOOM
    zoom_sensitivity: float = ZOOM_SENSITIVITY


DEFAULT_OPTIONS = EditorOptions()
