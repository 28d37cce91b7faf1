"""Excepciones específicas del núcleo del editor NanoMol."""


class NanoMolError(Exception):
    """Base de todos los errores propios del editor."""


class DanglingBondError(NanoMolError):
    """Se lanza al confirmar un estado con enlaces hacia átomos inexistentes."""

    def __init__(self, bond_ids):
        self.bond_ids = tuple(bond_ids)
        super().__init__(f"Enlaces colgantes: {', '.join(self.bond_ids)}")


class InvalidElementError(NanoMolError, ValueError):
    """Se lanza cuando se solicita un elemento fuera del conjunto soportado."""


class InvalidStateError(NanoMolError, ValueError):
    """Se lanza cuando un documento o estado externo no es reconocible."""
