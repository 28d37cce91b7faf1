"""Cálculo de hidrógenos implícitos según valencias típicas."""

from __future__ import annotations

from typing import Dict, Iterable

from core.model import Atom, Bond

# Valencias típicas usadas para inferir H implícitos.
# Nota: no es un validador químico; el fósforo se toma pentavalente.
TYPICAL_VALENCE: Dict[str, int] = {
    "C": 4,
    "N": 3,
    "O": 2,
    "H": 1,
    "S": 2,
    "Cl": 1,
    "F": 1,
    "P": 5,
    "Br": 1,
    "I": 1,
}


def bond_order_sum(atom: Atom, bonds: Iterable[Bond]) -> int:
    """Suma de órdenes de los enlaces que tocan al átomo."""
    return sum(bond.order for bond in bonds if bond.touches(atom.id))


def implicit_h_count(atom: Atom, bonds: Iterable[Bond]) -> int:
    """Calcula los hidrógenos implícitos para un átomo.

    Args:
        atom: Átomo a evaluar.
        bonds: Enlaces del grafo (basta con los incidentes; el resto se ignora).

    Returns:
        Número de H implícitos estimados (>= 0). Los elementos sin valencia
        típica conocida devuelven 0.

    Side Effects:
        No tiene efectos laterales.
    """
    typical = TYPICAL_VALENCE.get(atom.element)
    if typical is None:
        return 0
    implicit = typical - bond_order_sum(atom, bonds)
    if implicit < 0:
        return 0
    return int(implicit)
