"""
Utilidades geométricas para el motor de dibujo de NanoMol.

Álgebra de vectores 2D sobre tuplas `(x, y)` y funciones puras para
snapping angular y selección de elementos. No dependen de Qt para poder
usarse desde el núcleo interactivo y desde las pruebas.
"""
from __future__ import annotations

import math
from typing import Iterable, Optional, Tuple

Point = Tuple[float, float]
Segment = Tuple[Point, Point]

ZERO: Point = (0.0, 0.0)


def add(v1: Point, v2: Point) -> Point:
    return (v1[0] + v2[0], v1[1] + v2[1])


def sub(v1: Point, v2: Point) -> Point:
    return (v1[0] - v2[0], v1[1] - v2[1])


def scale(v: Point, s: float) -> Point:
    return (v[0] * s, v[1] * s)


def length(v: Point) -> float:
    return math.hypot(v[0], v[1])


def normalize(v: Point) -> Point:
    """Vector unitario; el vector nulo se devuelve como nulo."""
    n = length(v)
    if n == 0:
        return ZERO
    return (v[0] / n, v[1] / n)


def dot(v1: Point, v2: Point) -> float:
    return v1[0] * v2[0] + v1[1] * v2[1]


def cross(v1: Point, v2: Point) -> float:
    """Componente z del producto vectorial (positiva hacia la derecha en pantalla)."""
    return v1[0] * v2[1] - v1[1] * v2[0]


def angle_between(v1: Point, v2: Point) -> float:
    """Ángulo entre dos vectores en radianes, en el rango [0, pi]."""
    cos_value = dot(normalize(v1), normalize(v2))
    return math.acos(max(-1.0, min(1.0, cos_value)))


def distance(a: Point, b: Point) -> float:
    return length(sub(a, b))


def snap_to_angle(origin: Point, target: Point, step_rad: float, bond_length: float) -> Point:
    """Punto a `bond_length` de `origin` en la dirección de `target` ajustada al paso.

    Args:
        origin: Átomo de partida del enlace.
        target: Posición del cursor.
        step_rad: Paso angular (p. ej., pi/6 para 30 grados).
        bond_length: Longitud fija del enlace resultante.

    Returns:
        Coordenadas del extremo propuesto.
    """
    angle = math.atan2(target[1] - origin[1], target[0] - origin[0])
    if step_rad > 0:
        angle = round(angle / step_rad) * step_rad
    return (
        origin[0] + math.cos(angle) * bond_length,
        origin[1] + math.sin(angle) * bond_length,
    )


def distance_point_to_segment(p: Point, a: Point, b: Point) -> float:
    """Distancia de un punto al segmento AB (no a la recta infinita)."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    if dx == 0 and dy == 0:
        return distance(p, a)
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / (dx * dx + dy * dy)
    t = max(0.0, min(1.0, t))
    proj = (a[0] + t * dx, a[1] + t * dy)
    return distance(p, proj)


def first_atom_within(
    pos: Point, atoms: Iterable[Tuple[str, float, float]], threshold: float
) -> Optional[str]:
    """ID del primer átomo (en orden) a menos de `threshold` de `pos`."""
    for atom_id, x, y in atoms:
        if math.hypot(pos[0] - x, pos[1] - y) < threshold:
            return atom_id
    return None


def first_bond_within(
    pos: Point, bonds: Iterable[Tuple[str, Point, Point]], threshold: float
) -> Optional[str]:
    """ID del primer enlace cuyo segmento queda a menos de `threshold`."""
    for bond_id, a, b in bonds:
        if distance_point_to_segment(pos, a, b) < threshold:
            return bond_id
    return None
