"""Persistencia del estado del editor en archivos `.nmol`.

Este módulo serializa el estado completo del editor (grafo, historial,
herramienta y vista) y lo restaura a través del mismo contrato de valor
que usa cualquier aplicación anfitriona.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict

from core.errors import InvalidStateError

if TYPE_CHECKING:
    from gui.editor import MolEditor

APPLICATION = "NanoMol"
FILE_SUFFIX = ".nmol"


class PersistenceManager:
    """Gestiona el guardado y carga de archivos `.nmol`."""

    VERSION = "0.1.0"

    @staticmethod
    def save_to_dict(editor: "MolEditor") -> Dict[str, Any]:
        """Serializa el estado del editor en un diccionario.

        Args:
            editor: Instancia activa del editor.

        Returns:
            Diccionario serializable en JSON.

        Side Effects:
            No tiene efectos laterales; solo lee el estado del editor.
        """
        return {
            "application": APPLICATION,
            "version": PersistenceManager.VERSION,
            "state": editor.state().to_dict(),
        }

    @staticmethod
    def load_from_dict(data: Dict[str, Any], editor: "MolEditor") -> bool:
        """Restaura el estado del editor desde un diccionario.

        Args:
            data: Diccionario de estado (resultado de `save_to_dict`).
            editor: Editor donde se cargará la información.

        Returns:
            True si el editor adoptó el estado.

        Raises:
            InvalidStateError: Si el documento no corresponde a NanoMol.

        Side Effects:
            Sustituye el grafo, el historial y la vista del editor.
        """
        if not isinstance(data, dict) or data.get("application") != APPLICATION:
            raise InvalidStateError("Not a valid NanoMol file")
        state = data.get("state")
        if not isinstance(state, dict):
            raise InvalidStateError("NanoMol file without editor state")
        return editor.set_value(state)

    @staticmethod
    def save_to_file(filepath: str, editor: "MolEditor") -> None:
        """Guarda el estado del editor en un archivo `.nmol`.

        Side Effects:
            Escribe en disco el archivo indicado.
        """
        data = PersistenceManager.save_to_dict(editor)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @staticmethod
    def load_from_file(filepath: str, editor: "MolEditor") -> bool:
        """Carga un archivo `.nmol` y restaura el editor.

        Raises:
            InvalidStateError: Si el contenido no es un documento NanoMol.
        """
        with open(filepath, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise InvalidStateError(f"Not a valid NanoMol file: {exc}") from exc
        return PersistenceManager.load_from_dict(data, editor)
