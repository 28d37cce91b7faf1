"""Modelos de datos base del editor molecular NanoMol.

Este módulo concentra las estructuras que representan el grafo molecular
(átomos y enlaces) como instantáneas inmutables. El historial, el editor
interactivo, el renderizado y la serialización trabajan siempre sobre
`GraphSnapshot`: cada edición produce una instantánea nueva en lugar de
modificar la existente.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from core.errors import InvalidElementError

# Elementos que el editor permite dibujar, en el orden de la paleta.
ELEMENTS: Tuple[str, ...] = ("C", "N", "O", "H", "S", "Cl", "F", "P", "Br", "I")

BOND_ORDERS: Tuple[int, ...] = (1, 2, 3)


class Tool(str, Enum):
    """Herramientas de interacción disponibles en el lienzo."""
    SELECT = "select"
    DRAW = "draw"
    ERASE = "erase"


def new_id() -> str:
    """Genera un identificador opaco y único dentro del proceso."""
    return uuid.uuid4().hex[:12]


def validate_element(element: str) -> str:
    """Comprueba que el símbolo pertenezca a `ELEMENTS`.

    Raises:
        InvalidElementError: Si el símbolo no está soportado.
    """
    if element not in ELEMENTS:
        raise InvalidElementError(f"Elemento no soportado: {element!r}")
    return element


def next_bond_order(order: int) -> int:
    """Orden siguiente en el ciclo 1 -> 2 -> 3 -> 1."""
    return 1 if order >= 3 else order + 1


@dataclass(frozen=True)
class Atom:
    """Representa un átomo en el grafo molecular."""
    id: str
    element: str
    x: float
    y: float

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def moved_to(self, x: float, y: float) -> "Atom":
        return replace(self, x=float(x), y=float(y))

    def with_element(self, element: str) -> "Atom":
        return replace(self, element=validate_element(element))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "element": self.element, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Atom":
        """Construye un átomo a partir de datos planos (p. ej., JSON).

        Raises:
            KeyError: Si falta algún campo obligatorio.
            TypeError, ValueError: Si algún campo no es convertible.
        """
        return cls(
            id=str(data["id"]),
            element=validate_element(data["element"]),
            x=float(data["x"]),
            y=float(data["y"]),
        )


@dataclass(frozen=True)
class Bond:
    """Representa un enlace químico entre dos átomos distintos."""
    id: str
    source: str
    target: str
    order: int = 1

    def touches(self, atom_id: str) -> bool:
        return self.source == atom_id or self.target == atom_id

    def other(self, atom_id: str) -> str:
        """Devuelve el extremo opuesto a `atom_id`."""
        return self.target if self.source == atom_id else self.source

    def connects(self, a1_id: str, a2_id: str) -> bool:
        return {self.source, self.target} == {a1_id, a2_id}

    def cycled(self) -> "Bond":
        return replace(self, order=next_bond_order(self.order))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Bond":
        """Construye un enlace a partir de datos planos.

        Acepta `type` como sinónimo de `order` para estados heredados.

        Raises:
            KeyError: Si falta algún campo obligatorio.
            ValueError: Si el orden no es 1, 2 o 3 o ambos extremos coinciden.
        """
        order = int(data["order"] if "order" in data else data["type"])
        if order not in BOND_ORDERS:
            raise ValueError(f"Orden de enlace inválido: {order}")
        source = str(data["source"])
        target = str(data["target"])
        if source == target:
            raise ValueError("Un enlace necesita dos átomos distintos")
        return cls(id=str(data["id"]), source=source, target=target, order=order)


def new_atom(x: float, y: float, element: str = "C") -> Atom:
    """Crea un átomo con un identificador nuevo.

    Args:
        x: Posición X en coordenadas de mundo.
        y: Posición Y en coordenadas de mundo.
        element: Símbolo del elemento (debe estar en `ELEMENTS`).

    Returns:
        El átomo creado; no se añade a ninguna instantánea.
    """
    return Atom(id=new_id(), element=validate_element(element), x=float(x), y=float(y))


def new_bond(source: str, target: str, order: int = 1) -> Bond:
    """Crea un enlace nuevo entre dos átomos distintos."""
    if source == target:
        raise ValueError("Un enlace necesita dos átomos distintos")
    return Bond(id=new_id(), source=source, target=target, order=order)


def _coerce_atom(value: Any) -> Atom:
    return value if isinstance(value, Atom) else Atom.from_dict(value)


def _coerce_bond(value: Any) -> Bond:
    return value if isinstance(value, Bond) else Bond.from_dict(value)


def _check_unique_ids(items: Iterable[Any], kind: str) -> None:
    seen = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"ID de {kind} repetido: {item.id}")
        seen.add(item.id)


@dataclass(frozen=True)
class GraphSnapshot:
    """Instantánea inmutable del dibujo: lista de átomos y lista de enlaces.

    Al construirse se indexan los átomos por ID y los enlaces incidentes de
    cada átomo, de modo que las consultas no recorren las listas completas.
    El orden de `atoms` y `bonds` se conserva: determina el recorrido del
    SMILES y la prioridad del hit-testing.
    """
    atoms: Tuple[Atom, ...] = ()
    bonds: Tuple[Bond, ...] = ()
    _atom_index: Dict[str, Atom] = field(init=False, repr=False, compare=False)
    _incident: Dict[str, Tuple[Bond, ...]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        atoms = tuple(self.atoms)
        bonds = tuple(self.bonds)
        object.__setattr__(self, "atoms", atoms)
        object.__setattr__(self, "bonds", bonds)
        object.__setattr__(self, "_atom_index", {atom.id: atom for atom in atoms})
        incident: Dict[str, List[Bond]] = {}
        for bond in bonds:
            incident.setdefault(bond.source, []).append(bond)
            if bond.target != bond.source:
                incident.setdefault(bond.target, []).append(bond)
        object.__setattr__(
            self, "_incident", {atom_id: tuple(items) for atom_id, items in incident.items()}
        )

    # --- Consultas ---

    def atom(self, atom_id: Optional[str]) -> Optional[Atom]:
        """Obtiene un átomo por ID, o `None` si no existe."""
        if atom_id is None:
            return None
        return self._atom_index.get(atom_id)

    def has_atom(self, atom_id: str) -> bool:
        return atom_id in self._atom_index

    def incident_bonds(self, atom_id: str) -> Tuple[Bond, ...]:
        """Enlaces conectados a un átomo, en el orden de `bonds`."""
        return self._incident.get(atom_id, ())

    def find_bond_between(self, a1_id: str, a2_id: str) -> Optional[Bond]:
        """Busca un enlace existente entre dos átomos (en cualquier sentido)."""
        for bond in self.incident_bonds(a1_id):
            if bond.connects(a1_id, a2_id):
                return bond
        return None

    def bond(self, bond_id: str) -> Optional[Bond]:
        for bond in self.bonds:
            if bond.id == bond_id:
                return bond
        return None

    def dangling_bonds(self) -> List[str]:
        """IDs de enlaces cuyos extremos no están en esta instantánea."""
        return [
            bond.id
            for bond in self.bonds
            if bond.source not in self._atom_index or bond.target not in self._atom_index
        ]

    def is_empty(self) -> bool:
        return not self.atoms and not self.bonds

    # --- Ediciones (devuelven una instantánea nueva) ---

    def with_atom(self, atom: Atom) -> "GraphSnapshot":
        return GraphSnapshot(self.atoms + (atom,), self.bonds)

    def replace_atom(self, atom: Atom) -> "GraphSnapshot":
        """Sustituye el átomo con el mismo ID conservando su posición en la lista."""
        atoms = tuple(atom if existing.id == atom.id else existing for existing in self.atoms)
        return GraphSnapshot(atoms, self.bonds)

    def without_atom(self, atom_id: str) -> "GraphSnapshot":
        """Elimina un átomo y, en cascada, todos sus enlaces incidentes."""
        atoms = tuple(atom for atom in self.atoms if atom.id != atom_id)
        bonds = tuple(bond for bond in self.bonds if not bond.touches(atom_id))
        return GraphSnapshot(atoms, bonds)

    def with_bond(self, bond: Bond) -> "GraphSnapshot":
        return GraphSnapshot(self.atoms, self.bonds + (bond,))

    def replace_bond(self, bond: Bond) -> "GraphSnapshot":
        bonds = tuple(bond if existing.id == bond.id else existing for existing in self.bonds)
        return GraphSnapshot(self.atoms, bonds)

    def without_bond(self, bond_id: str) -> "GraphSnapshot":
        return GraphSnapshot(self.atoms, tuple(bond for bond in self.bonds if bond.id != bond_id))

    # --- Serialización ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "atoms": [atom.to_dict() for atom in self.atoms],
            "bonds": [bond.to_dict() for bond in self.bonds],
        }

    @classmethod
    def from_parts(cls, atoms: Iterable[Any], bonds: Iterable[Any]) -> "GraphSnapshot":
        """Construye una instantánea a partir de `Atom`/`Bond` o diccionarios.

        Raises:
            KeyError, TypeError, ValueError: Si algún elemento está mal formado
                o hay IDs de átomo o de enlace repetidos.
        """
        atom_items = tuple(_coerce_atom(atom) for atom in atoms)
        bond_items = tuple(_coerce_bond(bond) for bond in bonds)
        _check_unique_ids(atom_items, "átomo")
        _check_unique_ids(bond_items, "enlace")
        return cls(atom_items, bond_items)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GraphSnapshot":
        return cls.from_parts(data.get("atoms", []), data.get("bonds", []))


EMPTY_SNAPSHOT = GraphSnapshot()
