"""Entrada/salida del grafo: notación lineal, archivos y exportación RDKit."""

from .persistence import PersistenceManager
from .smiles import linearize, snapshot_to_smiles

__all__ = ["PersistenceManager", "linearize", "snapshot_to_smiles"]
