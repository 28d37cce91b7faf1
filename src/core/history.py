"""Historial lineal de deshacer/rehacer sobre instantáneas del grafo."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from core.errors import DanglingBondError
from core.model import EMPTY_SNAPSHOT, GraphSnapshot

logger = logging.getLogger(__name__)


class HistoryStack:
    """Pila lineal (no árbol) de estados confirmados.

    `entries[index]` es el estado vigente; las entradas posteriores son
    "futuros" que se descartan en el siguiente `commit`.
    """

    def __init__(self, initial: GraphSnapshot = EMPTY_SNAPSHOT) -> None:
        self._entries: List[GraphSnapshot] = [initial]
        self._index = 0

    @property
    def entries(self) -> Tuple[GraphSnapshot, ...]:
        return tuple(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> GraphSnapshot:
        return self._entries[self._index]

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def commit(self, snapshot: GraphSnapshot) -> GraphSnapshot:
        """Confirma una instantánea como nuevo estado vigente.

        Args:
            snapshot: Estado completo del grafo tras la edición.

        Returns:
            La misma instantánea, ya convertida en el estado vigente.

        Raises:
            DanglingBondError: Si algún enlace apunta a un átomo ausente.

        Side Effects:
            Descarta las entradas posteriores al índice actual.
        """
        dangling = snapshot.dangling_bonds()
        if dangling:
            raise DanglingBondError(dangling)
        del self._entries[self._index + 1:]
        self._entries.append(snapshot)
        self._index = len(self._entries) - 1
        return snapshot

    def undo(self) -> Optional[GraphSnapshot]:
        """Retrocede un paso; devuelve `None` si ya está en el primero."""
        if not self.can_undo():
            return None
        self._index -= 1
        return self.current

    def redo(self) -> Optional[GraphSnapshot]:
        """Avanza un paso; devuelve `None` si ya está en el último."""
        if not self.can_redo():
            return None
        self._index += 1
        return self.current

    def restore(self, entries: Iterable[GraphSnapshot], index: Optional[int] = None) -> None:
        """Adopta un historial suministrado desde fuera.

        El índice se ajusta al rango válido; una lista vacía se sustituye por
        un único estado vacío.
        """
        items = list(entries) or [EMPTY_SNAPSHOT]
        if index is None:
            index = len(items) - 1
        clamped = max(0, min(int(index), len(items) - 1))
        if clamped != index:
            logger.debug("Índice de historial %s fuera de rango; se usa %s", index, clamped)
        self._entries = items
        self._index = clamped
