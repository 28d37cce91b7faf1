"""Serialización lineal del grafo en una notación tipo SMILES.

Recorrido en profundidad por componentes conexas, sin corchetes ni
aromaticidad: solo símbolos de elemento, órdenes de enlace (`=`, `#`),
etiquetas numéricas de cierre de anillo y ramas entre paréntesis.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from core.model import Atom, Bond, GraphSnapshot

logger = logging.getLogger(__name__)

BOND_SYMBOLS = {1: "", 2: "=", 3: "#"}


def bond_symbol(order: int) -> str:
    return BOND_SYMBOLS.get(order, "")


def linearize(atoms: Iterable[Atom], bonds: Iterable[Bond]) -> str:
    """Genera la notación lineal de un grafo.

    Args:
        atoms: Átomos del grafo; su orden fija las raíces del recorrido.
        bonds: Enlaces; su orden fija el orden de visita de los vecinos.

    Returns:
        Componentes separadas por ``.``; cadena vacía si no hay átomos.

    Side Effects:
        No tiene efectos laterales. Los enlaces con un extremo inexistente
        se ignoran.
    """
    atom_list = list(atoms)
    if not atom_list:
        return ""

    atom_index: Dict[str, Atom] = {atom.id: atom for atom in atom_list}
    adjacency: Dict[str, List[Tuple[str, Bond]]] = {atom.id: [] for atom in atom_list}
    for bond in bonds:
        if bond.source not in atom_index or bond.target not in atom_index:
            logger.debug("Enlace %s ignorado: extremo inexistente", bond.id)
            continue
        adjacency[bond.source].append((bond.target, bond))
        adjacency[bond.target].append((bond.source, bond))

    visited: Set[str] = set()
    ring_labels: Dict[FrozenSet[str], int] = {}
    ring_counter = 1

    def dfs(current_id: str, parent_id: Optional[str]) -> str:
        nonlocal ring_counter
        visited.add(current_id)
        text = atom_index[current_id].element
        branches: List[str] = []
        for neighbor_id, bond in adjacency[current_id]:
            if neighbor_id == parent_id:
                continue
            symbol = bond_symbol(bond.order)
            if neighbor_id in visited:
                key = frozenset((current_id, neighbor_id))
                if key not in ring_labels:
                    ring_labels[key] = ring_counter
                    ring_counter += 1
                text += f"{symbol}{ring_labels[key]}"
            else:
                branches.append(symbol + dfs(neighbor_id, current_id))
        if branches:
            last = branches.pop()
            text += "".join(f"({branch})" for branch in branches) + last
        return text

    parts = []
    for atom in atom_list:
        if atom.id not in visited:
            parts.append(dfs(atom.id, None))
    return ".".join(parts)


def snapshot_to_smiles(snapshot: GraphSnapshot) -> str:
    return linearize(snapshot.atoms, snapshot.bonds)
