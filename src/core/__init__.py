"""API pública del núcleo de NanoMol.

Reexpone el modelo de grafo, el historial y la vista para facilitar
importaciones.
"""

from core.errors import DanglingBondError, InvalidElementError, InvalidStateError, NanoMolError
from core.history import HistoryStack
from core.model import (
    ELEMENTS,
    EMPTY_SNAPSHOT,
    Atom,
    Bond,
    GraphSnapshot,
    Tool,
    new_atom,
    new_bond,
    new_id,
)
from core.options import DEFAULT_OPTIONS, EditorOptions
from core.view import ViewState

__all__ = [
    "Atom",
    "Bond",
    "DEFAULT_OPTIONS",
    "DanglingBondError",
    "ELEMENTS",
    "EMPTY_SNAPSHOT",
    "EditorOptions",
    "GraphSnapshot",
    "HistoryStack",
    "InvalidElementError",
    "InvalidStateError",
    "NanoMolError",
    "Tool",
    "ViewState",
    "new_atom",
    "new_bond",
    "new_id",
]
