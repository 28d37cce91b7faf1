"""Pruebas de hidrógenos implícitos, etiquetas de átomos y fórmula molecular."""

import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from chemcalc.formula import atom_label, format_formula, molecular_formula, to_subscript
from chemcalc.valence import TYPICAL_VALENCE, implicit_h_count
from core.model import ELEMENTS, Atom, Bond, GraphSnapshot


def _atom(atom_id, element):
    return Atom(id=atom_id, element=element, x=0.0, y=0.0)


@pytest.mark.parametrize(
    "element, order, expected",
    [
        ("C", 1, 3),
        ("C", 2, 2),
        ("C", 3, 1),
        ("N", 1, 2),
        ("O", 2, 0),
        ("O", 3, 0),
        ("P", 1, 4),
        ("Cl", 1, 0),
    ],
)
def test_implicit_h_single_bond(element, order, expected):
    atom = _atom("a", element)
    bonds = [Bond(id="b", source="a", target="z", order=order)]
    assert implicit_h_count(atom, bonds) == expected


def test_implicit_h_ignores_unrelated_bonds():
    atom = _atom("a", "C")
    bonds = [Bond(id="b", source="x", target="y", order=3)]
    assert implicit_h_count(atom, bonds) == 4


def test_subscript_digits():
    assert to_subscript(4) == "₄"
    assert to_subscript(12) == "₁₂"


@pytest.mark.parametrize(
    "element, expected",
    [
        ("C", "CH₄"),
        ("O", "H₂O"),
        ("S", "H₂S"),
        ("Cl", "HCl"),
        ("N", "NH₃"),
        ("H", "H₂"),
        ("P", "H₅P"),
    ],
)
def test_isolated_atom_labels(element, expected):
    assert atom_label(_atom("a", element), []) == expected


def test_bonded_carbon_has_no_label():
    bonds = [Bond(id="b", source="a", target="z", order=1)]
    assert atom_label(_atom("a", "C"), bonds) is None


def test_bonded_heteroatom_labels():
    single = [Bond(id="b", source="a", target="z", order=1)]
    double = [Bond(id="b", source="a", target="z", order=2)]
    assert atom_label(_atom("a", "O"), single) == "OH"
    assert atom_label(_atom("a", "N"), single) == "NH₂"
    assert atom_label(_atom("a", "O"), double) == "O"
    assert atom_label(_atom("a", "Cl"), single) == "Cl"
    assert atom_label(_atom("a", "H"), single) == "H"


def test_molecular_formula_ethanol():
    atoms = (
        Atom(id="c1", element="C", x=0, y=0),
        Atom(id="c2", element="C", x=60, y=0),
        Atom(id="o", element="O", x=120, y=0),
    )
    bonds = (
        Bond(id="b1", source="c1", target="c2"),
        Bond(id="b2", source="c2", target="o"),
    )
    formula = molecular_formula(GraphSnapshot(atoms, bonds))
    assert formula == {"C": 2, "O": 1, "H": 6}
    assert format_formula(formula) == "C2H6O"
    assert format_formula(formula, subscripts=True) == "C₂H₆O"


def test_hill_order_without_carbon():
    assert format_formula({"O": 1, "H": 2}) == "H2O"
    assert format_formula({"Cl": 1, "H": 1}) == "ClH"
    assert format_formula({}) == ""


@pytest.mark.parametrize("element", ELEMENTS)
def test_isolated_atom_h_count_equals_valence(element):
    assert implicit_h_count(_atom("a", element), []) == TYPICAL_VALENCE[element]
