"""Pruebas unitarias para la notación lineal."""

import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from chemio.smiles import linearize, snapshot_to_smiles
from core.model import Atom, Bond, GraphSnapshot


def _atoms(*elements):
    return [Atom(id=f"a{i}", element=el, x=i * 60.0, y=0.0) for i, el in enumerate(elements)]


def _bond(n, i, j, order=1):
    return Bond(id=f"b{n}", source=f"a{i}", target=f"a{j}", order=order)


class LinearizeTest(unittest.TestCase):
    """Casos de prueba para LinearizeTest."""
    def test_empty_graph(self):
        """Verifica que un grafo vacío produzca una cadena vacía."""
        self.assertEqual(linearize([], []), "")

    def test_single_atoms_and_components(self):
        """Verifica que los componentes desconectados se unan con '.'."""
        self.assertEqual(linearize(_atoms("C"), []), "C")
        self.assertEqual(linearize(_atoms("C", "O"), []), "C.O")

    def test_chain_with_bond_orders(self):
        """Verifica los símbolos de doble y triple enlace."""
        atoms = _atoms("C", "C", "O")
        bonds = [_bond(0, 0, 1), _bond(1, 1, 2, order=2)]
        self.assertEqual(linearize(atoms, bonds), "CC=O")

        atoms = _atoms("C", "N")
        self.assertEqual(linearize(atoms, [_bond(0, 0, 1, order=3)]), "C#N")

    def test_branches(self):
        """Verifica que todas las ramas salvo la última vayan entre paréntesis."""
        atoms = _atoms("C", "C", "O", "N")
        bonds = [_bond(0, 0, 1), _bond(1, 1, 2), _bond(2, 1, 3)]
        self.assertEqual(linearize(atoms, bonds), "CC(O)N")

    def test_ring_closure_shares_label(self):
        """Verifica que ambos extremos de un cierre de anillo usen la misma etiqueta."""
        atoms = _atoms("C", "C", "C")
        bonds = [_bond(0, 0, 1), _bond(1, 1, 2), _bond(2, 2, 0)]
        self.assertEqual(linearize(atoms, bonds), "C1CC1")

    def test_ring_closure_with_double_bond(self):
        """Verifica que el símbolo del enlace preceda a la etiqueta de anillo."""
        atoms = _atoms("C", "C", "C")
        bonds = [_bond(0, 0, 1), _bond(1, 1, 2), _bond(2, 2, 0, order=2)]
        self.assertEqual(linearize(atoms, bonds), "C=1CC=1")

    def test_dangling_bond_skipped(self):
        """Verifica que los enlaces hacia átomos inexistentes se ignoren."""
        atoms = _atoms("C", "O")
        bonds = [Bond(id="x", source="a0", target="ghost"), _bond(0, 0, 1)]
        self.assertEqual(linearize(atoms, bonds), "CO")

    def test_linearize_is_deterministic(self):
        """Verifica que el mismo grafo produzca siempre la misma cadena."""
        atoms = _atoms("C", "C", "C", "C", "O", "N", "Cl")
        bonds = [
            _bond(0, 0, 1),
            _bond(1, 1, 2, order=2),
            _bond(2, 2, 3),
            _bond(3, 3, 0),
            _bond(4, 1, 4),
            _bond(5, 2, 5, order=3),
        ]
        first = linearize(atoms, bonds)
        second = linearize(list(atoms), list(bonds))

        self.assertEqual(first, second)
        self.assertEqual(first, "C1C(=C(C1)#N)O.Cl")

    def test_root_follows_atom_order(self):
        """Verifica que el recorrido empiece por el primer átomo de la lista."""
        atoms = _atoms("O", "C")
        graph = GraphSnapshot(tuple(atoms), (_bond(0, 0, 1),))
        self.assertEqual(snapshot_to_smiles(graph), "OC")


if __name__ == "__main__":
    unittest.main()
