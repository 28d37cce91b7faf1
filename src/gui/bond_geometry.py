"""
Geometría de enlaces simples, dobles y triples.

Calcula los segmentos que representan un enlace teniendo en cuenta los
enlaces vecinos: el lado de la línea pi de un doble enlace y el recorte de
las líneas desplazadas para no solapar a los vecinos.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from core.model import Bond, GraphSnapshot
from core.options import BOND_LINE_OFFSET
from gui.geom import Point, Segment, add, angle_between, cross, length, normalize, scale, sub


@dataclass(frozen=True)
class SideAngles:
    """Ángulo mínimo de los vecinos a cada lado del eje en un extremo."""
    min_right: float = math.pi
    min_left: float = math.pi
    exists_right: bool = False
    exists_left: bool = False

    def minimum(self, right: bool) -> float:
        return self.min_right if right else self.min_left

    def exists(self, right: bool) -> bool:
        return self.exists_right if right else self.exists_left


def side_angles(bond: Bond, atom_id: str, snapshot: GraphSnapshot, axis: Point) -> SideAngles:
    """Clasifica los vecinos de un extremo a la derecha o izquierda del eje.

    Args:
        bond: Enlace que se está dibujando (se excluye de los vecinos).
        atom_id: Extremo evaluado (origen o destino del enlace).
        snapshot: Grafo completo.
        axis: Vector origen -> destino del enlace.

    Returns:
        Ángulos mínimos por lado, medidos respecto al eje saliente del
        extremo (`axis` en el origen, `-axis` en el destino).
    """
    me = snapshot.atom(atom_id)
    if me is None:
        return SideAngles()
    my_axis = axis if atom_id == bond.source else scale(axis, -1)

    min_right = min_left = math.pi
    exists_right = exists_left = False
    for neighbor_bond in snapshot.incident_bonds(atom_id):
        if neighbor_bond.id == bond.id:
            continue
        other = snapshot.atom(neighbor_bond.other(atom_id))
        if other is None:
            continue
        nb = sub(other.position, me.position)
        ang = angle_between(my_axis, nb)
        if cross(axis, nb) > 0:
            min_right = min(min_right, ang)
            exists_right = True
        else:
            min_left = min(min_left, ang)
            exists_left = True
    return SideAngles(min_right, min_left, exists_right, exists_left)


def trim_distance(bond_len: float, offset: float, min_angle: float) -> float:
    """Recorte de una línea desplazada frente a un vecino a `min_angle`."""
    denominator = math.tan((math.pi - min_angle) / 2)
    if abs(denominator) < 1e-12:
        return bond_len * 0.5
    return min(bond_len * 0.5, offset / denominator)


def _offset_line(
    start: Point,
    end: Point,
    unit: Point,
    perp: Point,
    shift: float,
    right: bool,
    start_angles: SideAngles,
    end_angles: SideAngles,
    bond_len: float,
    offset: float,
) -> Segment:
    p1 = add(start, scale(perp, shift))
    p2 = add(end, scale(perp, shift))
    if start_angles.exists(right):
        p1 = add(p1, scale(unit, trim_distance(bond_len, offset, start_angles.minimum(right))))
    if end_angles.exists(right):
        p2 = sub(p2, scale(unit, trim_distance(bond_len, offset, end_angles.minimum(right))))
    return (p1, p2)


def bond_lines(
    bond: Bond,
    snapshot: GraphSnapshot,
    offset: float = BOND_LINE_OFFSET,
) -> Optional[List[Segment]]:
    """Calcula los segmentos (1 a 3) que dibujan un enlace.

    Args:
        bond: Enlace a dibujar.
        snapshot: Grafo completo (necesario para los ángulos de los vecinos).
        offset: Separación perpendicular entre líneas.

    Returns:
        Lista de segmentos `((x1, y1), (x2, y2))`, o `None` si algún extremo
        no existe en la instantánea.
    """
    s = snapshot.atom(bond.source)
    t = snapshot.atom(bond.target)
    if s is None or t is None:
        return None

    start = s.position
    end = t.position
    center = (start, end)
    if bond.order == 1:
        return [center]

    axis = sub(end, start)
    bond_len = length(axis)
    unit = normalize(axis)
    perp = (-unit[1], unit[0])
    hetero = s.element != "C" and t.element != "C"

    if bond.order == 3 and hetero:
        return [
            center,
            (add(start, scale(perp, offset)), add(end, scale(perp, offset))),
            (add(start, scale(perp, -offset)), add(end, scale(perp, -offset))),
        ]

    if bond.order == 2 and hetero:
        half = offset * 0.5
        return [
            (add(start, scale(perp, half)), add(end, scale(perp, half))),
            (add(start, scale(perp, -half)), add(end, scale(perp, -half))),
        ]

    s_angles = side_angles(bond, s.id, snapshot, axis)
    t_angles = side_angles(bond, t.id, snapshot, axis)

    if bond.order == 3:
        lines = [center]
        for right in (True, False):
            shift = offset if right else -offset
            lines.append(
                _offset_line(start, end, unit, perp, shift, right, s_angles, t_angles, bond_len, offset)
            )
        return lines

    # Doble enlace asimétrico: la línea pi va al lado más "interior".
    score_right = s_angles.min_right + t_angles.min_right
    score_left = s_angles.min_left + t_angles.min_left
    right = score_right < score_left
    shift = offset if right else -offset
    return [
        center,
        _offset_line(start, end, unit, perp, shift, right, s_angles, t_angles, bond_len, offset),
    ]


def snapshot_lines(
    snapshot: GraphSnapshot, offset: float = BOND_LINE_OFFSET
) -> Dict[str, List[Segment]]:
    """Segmentos de todos los enlaces dibujables, indexados por ID de enlace."""
    result: Dict[str, List[Segment]] = {}
    for bond in snapshot.bonds:
        lines = bond_lines(bond, snapshot, offset)
        if lines is not None:
            result[bond.id] = lines
    return result
