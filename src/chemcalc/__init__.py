"""API pública de cálculos químicos auxiliares."""

from .formula import atom_label, format_formula, molecular_formula, to_subscript
from .valence import TYPICAL_VALENCE, implicit_h_count

__all__ = [
    "atom_label",
    "format_formula",
    "molecular_formula",
    "to_subscript",
    "implicit_h_count",
    "TYPICAL_VALENCE",
]
