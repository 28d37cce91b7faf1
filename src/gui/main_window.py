"""
NanoMol Main Window
Thin desktop shell around the editor canvas: menus for tools, elements,
history and files, plus a status bar with the derived notation.
"""
from __future__ import annotations

import logging

from PyQt6.QtCore import QMimeData
from PyQt6.QtGui import QAction, QActionGroup, QKeySequence
from PyQt6.QtWidgets import QApplication, QFileDialog, QLabel, QMainWindow, QMessageBox

from chemcalc.formula import format_formula, molecular_formula
from chemio.persistence import FILE_SUFFIX, PersistenceManager
from chemio import rdkit_io
from core.errors import InvalidStateError
from core.model import ELEMENTS, Tool
from gui.canvas import MolEditorCanvas

logger = logging.getLogger(__name__)

_TOOL_LABELS = {
    Tool.SELECT: "Seleccionar / mover",
    Tool.DRAW: "Dibujar",
    Tool.ERASE: "Borrar",
}


class NanoMolWindow(QMainWindow):
    """
    Main window for the NanoMol structure editor.
    """
    def __init__(self, read_only: bool = False) -> None:
        super().__init__()
        self.setWindowTitle("NanoMol - Editor de estructuras")
        self.resize(1000, 760)

        self.canvas = MolEditorCanvas(read_only=read_only)
        self.setCentralWidget(self.canvas)

        self.smiles_label = QLabel("")
        self.formula_label = QLabel("")
        self.statusBar().addPermanentWidget(self.formula_label)
        self.statusBar().addPermanentWidget(self.smiles_label)

        self._create_actions()
        self._create_menu_bar()

        self.canvas.state_changed.connect(self._on_state_changed)
        self.canvas.smiles_changed.connect(self._on_smiles_changed)
        self._on_state_changed(self.canvas.editor.state())
        self._on_smiles_changed(self.canvas.editor.smiles)

    def _create_actions(self) -> None:
        self.action_open = QAction("Abrir...", self)
        self.action_open.setShortcut(QKeySequence.StandardKey.Open)
        self.action_open.triggered.connect(self._on_file_open)

        self.action_save = QAction("Guardar...", self)
        self.action_save.setShortcut(QKeySequence.StandardKey.Save)
        self.action_save.triggered.connect(self._on_file_save)

        self.action_undo = QAction("Deshacer", self)
        self.action_undo.setShortcut(QKeySequence.StandardKey.Undo)
        self.action_undo.triggered.connect(self.canvas.undo)

        self.action_redo = QAction("Rehacer", self)
        self.action_redo.setShortcut(QKeySequence.StandardKey.Redo)
        self.action_redo.triggered.connect(self.canvas.redo)

        self.action_clear = QAction("Limpiar lienzo", self)
        self.action_clear.triggered.connect(self.canvas.clear_canvas)

        self.action_copy_smiles = QAction("SMILES", self)
        self.action_copy_smiles.triggered.connect(lambda: self._on_copy_as("smiles"))
        self.action_copy_canonical = QAction("SMILES canónico (RDKit)", self)
        self.action_copy_canonical.triggered.connect(lambda: self._on_copy_as("canonical"))
        self.action_copy_molfile = QAction("Molfile (RDKit)", self)
        self.action_copy_molfile.triggered.connect(lambda: self._on_copy_as("molfile"))

        self.tool_group = QActionGroup(self)
        self.tool_actions = {}
        for tool, label in _TOOL_LABELS.items():
            action = QAction(label, self, checkable=True)
            action.triggered.connect(lambda _checked, t=tool: self.canvas.set_current_tool(t))
            self.tool_group.addAction(action)
            self.tool_actions[tool] = action

        self.element_group = QActionGroup(self)
        self.element_actions = {}
        for element in ELEMENTS:
            action = QAction(element, self, checkable=True)
            action.triggered.connect(lambda _checked, e=element: self.canvas.set_active_element(e))
            self.element_group.addAction(action)
            self.element_actions[element] = action

    def _create_menu_bar(self) -> None:
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("Archivo")
        file_menu.addAction(self.action_open)
        file_menu.addAction(self.action_save)

        edit_menu = menu_bar.addMenu("Editar")
        edit_menu.addAction(self.action_undo)
        edit_menu.addAction(self.action_redo)
        edit_menu.addSeparator()
        edit_menu.addAction(self.action_clear)
        copy_as_menu = edit_menu.addMenu("Copiar como")
        copy_as_menu.addAction(self.action_copy_smiles)
        copy_as_menu.addAction(self.action_copy_canonical)
        copy_as_menu.addAction(self.action_copy_molfile)

        tools_menu = menu_bar.addMenu("Herramientas")
        for action in self.tool_actions.values():
            tools_menu.addAction(action)

        element_menu = menu_bar.addMenu("Elemento")
        for action in self.element_actions.values():
            element_menu.addAction(action)

    # -------------------------------------------------------------------------
    # Editor notifications
    # -------------------------------------------------------------------------
    def _on_state_changed(self, state) -> None:
        editable = not self.canvas.editor.read_only
        history = self.canvas.editor.history
        self.action_undo.setEnabled(editable and history.can_undo())
        self.action_redo.setEnabled(editable and history.can_redo())
        self.action_clear.setEnabled(editable)
        for action in list(self.tool_actions.values()) + list(self.element_actions.values()):
            action.setEnabled(editable)
        self.tool_actions[state.tool].setChecked(True)
        self.element_actions[state.active_element].setChecked(True)
        self.formula_label.setText(format_formula(molecular_formula(state.snapshot), subscripts=True))

    def _on_smiles_changed(self, smiles: str) -> None:
        self.smiles_label.setText(f"SMILES: {smiles}" if smiles else "")
        self.formula_label.setText(
            format_formula(molecular_formula(self.canvas.editor.snapshot), subscripts=True)
        )

    # -------------------------------------------------------------------------
    # File Menu Handlers
    # -------------------------------------------------------------------------
    def _on_file_open(self) -> None:
        filepath, _ = QFileDialog.getOpenFileName(
            self, "Abrir archivo", "", f"Archivos NanoMol (*{FILE_SUFFIX});;Todos los archivos (*.*)"
        )
        if not filepath:
            return
        try:
            PersistenceManager.load_from_file(filepath, self.canvas.editor)
        except (OSError, InvalidStateError) as e:
            QMessageBox.critical(self, "Error", f"No se pudo abrir el archivo:\n{e}")
            return
        self.canvas.refresh()
        self._on_state_changed(self.canvas.editor.state())
        self.statusBar().showMessage(f"Abierto: {filepath}")

    def _on_file_save(self) -> None:
        filepath, _ = QFileDialog.getSaveFileName(
            self, "Guardar archivo", "", f"Archivo NanoMol (*{FILE_SUFFIX})"
        )
        if not filepath:
            return
        if not filepath.endswith(FILE_SUFFIX):
            filepath += FILE_SUFFIX
        try:
            PersistenceManager.save_to_file(filepath, self.canvas.editor)
        except OSError as e:
            QMessageBox.critical(self, "Error", f"No se pudo guardar:\n{e}")
            return
        self.statusBar().showMessage(f"Guardado: {filepath}")

    # -------------------------------------------------------------------------
    # Edit Menu Handlers
    # -------------------------------------------------------------------------
    def _on_copy_as(self, format: str) -> None:
        """Copy the molecule in the specified format to the clipboard."""
        snapshot = self.canvas.editor.snapshot
        try:
            if format == "canonical":
                text = rdkit_io.snapshot_to_canonical_smiles(snapshot)
            elif format == "molfile":
                text = rdkit_io.snapshot_to_molfile(snapshot)
            else:
                text = self.canvas.editor.smiles
        except RuntimeError as e:
            logger.warning("Export as %s failed: %s", format, e)
            self.statusBar().showMessage(f"Error: {e}")
            return
        mime = QMimeData()
        mime.setText(text)
        if format == "molfile":
            mime.setData("chemical/x-mdl-molfile", text.encode("utf-8"))
        QApplication.clipboard().setMimeData(mime)
        self.statusBar().showMessage(f"Copiado como {format.upper()}")
