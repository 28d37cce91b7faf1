"""Etiquetas de átomos y fórmulas moleculares.

Este módulo formatea el texto que el lienzo dibuja sobre cada átomo
(convención esquelética con hidrógenos implícitos en subíndice) y calcula
la fórmula molecular del dibujo siguiendo el orden de Hill.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from core.model import Atom, Bond, GraphSnapshot
from .valence import implicit_h_count

SUBSCRIPT_DIGITS = {
    "0": "₀",
    "1": "₁",
    "2": "₂",
    "3": "₃",
    "4": "₄",
    "5": "₅",
    "6": "₆",
    "7": "₇",
    "8": "₈",
    "9": "₉",
}

# Elementos que, aislados, escriben los H detrás del símbolo (NH3, H2).
_H_AFTER_WHEN_ISOLATED = {"N", "H"}


def to_subscript(number: int) -> str:
    """Sustituye cada dígito por su glifo en subíndice."""
    return "".join(SUBSCRIPT_DIGITS.get(ch, ch) for ch in str(number))


def atom_label(atom: Atom, bonds: Iterable[Bond]) -> Optional[str]:
    """Texto a mostrar para un átomo, o `None` si no lleva etiqueta.

    Reglas de presentación (no químicas):

    * Carbono con enlaces: sin etiqueta (dibujo esquelético).
    * Carbono aislado: ``"CH₄"``.
    * Resto: símbolo seguido de ``H`` y del número de H en subíndice si es
      mayor que 1. En el hidrógeno la parte de H se escribe como ``₂``.
    * Átomos sin enlaces que no son N ni H anteponen los hidrógenos
      (``"H₂O"``, ``"HCl"``).

    Args:
        atom: Átomo a etiquetar.
        bonds: Enlaces del grafo (se filtran los incidentes).

    Returns:
        La etiqueta formateada o `None`.
    """
    incident = [bond for bond in bonds if bond.touches(atom.id)]
    valence_used = sum(bond.order for bond in incident)
    implicit_h = implicit_h_count(atom, incident)

    if atom.element == "C":
        if not incident:
            return "CH" + to_subscript(4)
        return None

    label_h = ""
    if implicit_h > 0:
        label_h = to_subscript(2) if atom.element == "H" else "H"
        if implicit_h > 1:
            label_h += to_subscript(implicit_h)

    if valence_used == 0 and atom.element not in _H_AFTER_WHEN_ISOLATED:
        return label_h + atom.element
    return atom.element + label_h


def molecular_formula(snapshot: GraphSnapshot) -> Dict[str, int]:
    """Calcula la fórmula molecular como diccionario de elemento -> conteo.

    Args:
        snapshot: Instantánea del grafo.

    Returns:
        Diccionario con símbolos atómicos y sus cantidades totales,
        incluyendo los hidrógenos implícitos de cada átomo pesado.
    """
    counts: Dict[str, int] = {}
    for atom in snapshot.atoms:
        counts[atom.element] = counts.get(atom.element, 0) + 1
    for atom in snapshot.atoms:
        if atom.element == "H":
            continue
        implicit = implicit_h_count(atom, snapshot.incident_bonds(atom.id))
        if implicit:
            counts["H"] = counts.get("H", 0) + implicit
    return {element: count for element, count in counts.items() if count > 0}


def format_formula(formula_dict: Dict[str, int], subscripts: bool = False) -> str:
    """Formatea una fórmula usando el orden de Hill (C, H, luego alfabético).

    Args:
        formula_dict: Diccionario con símbolos de elementos y cantidades.
        subscripts: Si los conteos se escriben con dígitos en subíndice.

    Returns:
        Cadena con la fórmula formateada (p. ej., "C2H6O").
    """
    if not formula_dict:
        return ""
    order = []
    if "C" in formula_dict:
        order.append("C")
        if "H" in formula_dict:
            order.append("H")
    remaining = sorted(e for e in formula_dict if e not in order)
    order.extend(remaining)

    parts = []
    for element in order:
        count = formula_dict.get(element, 0)
        if count <= 0:
            continue
        if count == 1:
            parts.append(element)
        else:
            parts.append(element + (to_subscript(count) if subscripts else str(count)))
    return "".join(parts)
