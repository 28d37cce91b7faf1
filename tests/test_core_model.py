"""Pruebas unitarias para test_core_model."""

import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from core.errors import InvalidElementError
from core.model import (
    Atom,
    Bond,
    EMPTY_SNAPSHOT,
    GraphSnapshot,
    new_atom,
    new_bond,
    next_bond_order,
)


class GraphSnapshotTest(unittest.TestCase):
    """Casos de prueba para GraphSnapshotTest."""
    def test_add_atom_and_bond(self):
        """Verifica add atom and bond.

        Returns:
            None.

        """
        a1 = new_atom(0.0, 0.0, "C")
        a2 = new_atom(60.0, 0.0, "O")
        bond = new_bond(a1.id, a2.id, order=2)
        graph = EMPTY_SNAPSHOT.with_atom(a1).with_atom(a2).with_bond(bond)

        self.assertEqual(len(graph.atoms), 2)
        self.assertEqual(len(graph.bonds), 1)
        self.assertEqual(graph.bond(bond.id).order, 2)
        self.assertEqual(len(EMPTY_SNAPSHOT.atoms), 0)

    def test_fresh_ids_are_unique(self):
        """Verifica que cada átomo nuevo reciba un ID distinto."""
        ids = {new_atom(0, 0).id for _ in range(200)}
        self.assertEqual(len(ids), 200)

    def test_invalid_element_rejected(self):
        """Verifica que un elemento fuera de la paleta se rechace."""
        with self.assertRaises(InvalidElementError):
            new_atom(0, 0, "Xe")
        with self.assertRaises(ValueError):
            new_atom(0, 0, "Xe")

    def test_bond_needs_distinct_endpoints(self):
        """Verifica que no se puedan crear enlaces de un átomo consigo mismo."""
        a = new_atom(0, 0)
        with self.assertRaises(ValueError):
            new_bond(a.id, a.id)

    def test_remove_atom_cascades_bonds(self):
        """Verifica que eliminar un átomo elimine sus enlaces incidentes."""
        a = new_atom(0, 0)
        b = new_atom(60, 0)
        c = new_atom(0, 60)
        ab = new_bond(a.id, b.id)
        bc = new_bond(b.id, c.id)
        graph = GraphSnapshot((a, b, c), (ab, bc))

        graph = graph.without_atom(b.id)

        self.assertEqual([atom.id for atom in graph.atoms], [a.id, c.id])
        self.assertEqual(graph.bonds, ())
        self.assertEqual(graph.dangling_bonds(), [])

    def test_incident_and_find_bond_between(self):
        """Verifica el índice de enlaces incidentes en ambos sentidos."""
        a = new_atom(0, 0)
        b = new_atom(60, 0)
        c = new_atom(0, 60)
        ab = new_bond(a.id, b.id)
        ca = new_bond(c.id, a.id)
        graph = GraphSnapshot((a, b, c), (ab, ca))

        self.assertEqual(graph.incident_bonds(a.id), (ab, ca))
        self.assertEqual(graph.find_bond_between(b.id, a.id), ab)
        self.assertEqual(graph.find_bond_between(a.id, c.id), ca)
        self.assertIsNone(graph.find_bond_between(b.id, c.id))

    def test_replace_keeps_order(self):
        """Verifica que reemplazar un átomo conserve su posición en la lista."""
        a = new_atom(0, 0)
        b = new_atom(60, 0)
        graph = GraphSnapshot((a, b), ())
        graph = graph.replace_atom(a.moved_to(10, 20))

        self.assertEqual(graph.atoms[0].id, a.id)
        self.assertEqual(graph.atoms[0].position, (10.0, 20.0))
        self.assertEqual(graph.atom(a.id).x, 10.0)

    def test_dangling_bonds_detected(self):
        """Verifica la detección de enlaces con extremos inexistentes."""
        a = new_atom(0, 0)
        bond = Bond(id="b1", source=a.id, target="missing")
        graph = GraphSnapshot((a,), (bond,))
        self.assertEqual(graph.dangling_bonds(), ["b1"])

    def test_bond_order_cycle(self):
        """Verifica el ciclo 1 -> 2 -> 3 -> 1."""
        self.assertEqual(next_bond_order(1), 2)
        self.assertEqual(next_bond_order(2), 3)
        self.assertEqual(next_bond_order(3), 1)
        bond = Bond(id="b", source="a", target="c", order=3)
        self.assertEqual(bond.cycled().order, 1)
        self.assertEqual(bond.cycled().id, "b")


class SerializationTest(unittest.TestCase):
    """Casos de prueba para SerializationTest."""
    def test_dict_roundtrip(self):
        """Verifica que to_dict/from_dict conserven IDs, orden y coordenadas."""
        a = new_atom(1.5, 2.5, "N")
        b = new_atom(3.0, 4.0, "C")
        graph = GraphSnapshot((a, b), (new_bond(a.id, b.id, 3),))

        restored = GraphSnapshot.from_dict(graph.to_dict())

        self.assertEqual(restored, graph)

    def test_bond_type_alias(self):
        """Verifica que `type` se acepte como sinónimo de `order`."""
        bond = Bond.from_dict({"id": "b", "source": "x", "target": "y", "type": 2})
        self.assertEqual(bond.order, 2)

    def test_invalid_bond_order(self):
        """Verifica que un orden fuera de 1..3 se rechace."""
        with self.assertRaises(ValueError):
            Bond.from_dict({"id": "b", "source": "x", "target": "y", "order": 4})

    def test_atom_missing_field(self):
        """Verifica que un átomo incompleto lance KeyError."""
        with self.assertRaises(KeyError):
            Atom.from_dict({"id": "a", "element": "C", "x": 0})

    def test_duplicate_ids_rejected(self):
        """Verifica que from_parts rechace IDs de átomo o de enlace repetidos."""
        atoms = [
            {"id": "a", "element": "C", "x": 0, "y": 0},
            {"id": "a", "element": "O", "x": 60, "y": 0},
        ]
        with self.assertRaises(ValueError):
            GraphSnapshot.from_parts(atoms, [])

        atoms = [atoms[0], {"id": "b", "element": "O", "x": 60, "y": 0}]
        bonds = [
            {"id": "x", "source": "a", "target": "b", "order": 1},
            {"id": "x", "source": "b", "target": "a", "order": 2},
        ]
        with self.assertRaises(ValueError):
            GraphSnapshot.from_parts(atoms, bonds)
        self.assertEqual(len(GraphSnapshot.from_parts(atoms, bonds[:1]).bonds), 1)


if __name__ == "__main__":
    unittest.main()
