"""Punto de entrada del editor de estructuras NanoMol.

Este módulo configura el registro, inicializa PyQt6, carga la ventana
principal y arranca el bucle de eventos.
"""

import logging
import os
import sys

# Aseguramos que Python encuentre los módulos dentro de `src` al ejecutar
# el archivo directamente.
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from PyQt6.QtWidgets import QApplication
from gui.main_window import NanoMolWindow


def main():
    """
    Arranca la aplicación Qt y muestra la ventana principal.

    El nivel de registro se toma de la variable de entorno
    `NANOMOL_LOG_LEVEL` (por defecto `WARNING`).

    Side Effects:
        Configura `logging`, crea la instancia de `QApplication`, muestra la
        ventana y entra en el bucle de eventos de Qt.
    """
    logging.basicConfig(
        level=os.environ.get("NANOMOL_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    app = QApplication(sys.argv)
    app.setApplicationName("NanoMol")

    window = NanoMolWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
