import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtWidgets import QApplication

from core.model import Tool
from gui.canvas import MolEditorCanvas
from gui.main_window import NanoMolWindow


def _mouse(kind, x, y, button=Qt.MouseButton.LeftButton):
    pos = QPointF(x, y)
    buttons = Qt.MouseButton.NoButton if kind == QMouseEvent.Type.MouseButtonRelease else button
    return QMouseEvent(kind, pos, pos, button, buttons, Qt.KeyboardModifier.NoModifier)


class MolEditorCanvasTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._app = QApplication.instance() or QApplication([])

    def setUp(self):
        self.canvas = MolEditorCanvas()
        self.canvas.resize(400, 300)
        self.states = []
        self.smiles = []
        self.canvas.state_changed.connect(self.states.append)
        self.canvas.smiles_changed.connect(self.smiles.append)

    def _press_release(self, x, y):
        self.canvas.mousePressEvent(_mouse(QMouseEvent.Type.MouseButtonPress, x, y))
        self.canvas.mouseReleaseEvent(_mouse(QMouseEvent.Type.MouseButtonRelease, x, y))

    def test_click_emits_state_and_smiles(self):
        self._press_release(100, 100)

        self.assertEqual(len(self.canvas.editor.atoms), 1)
        self.assertEqual(len(self.states), 1)
        self.assertEqual(self.smiles, ["C"])

    def test_right_button_ignored(self):
        event = _mouse(QMouseEvent.Type.MouseButtonPress, 100, 100, Qt.MouseButton.RightButton)
        self.canvas.mousePressEvent(event)
        self.assertEqual(self.canvas.editor.atoms, ())

    def test_undo_redo_update_smiles(self):
        self._press_release(100, 100)
        self.canvas.undo()
        self.canvas.redo()
        self.assertEqual(self.smiles, ["C", "", "C"])

    def test_set_value_and_paint(self):
        value = {
            "atoms": [
                {"id": "a", "element": "C", "x": 50, "y": 50},
                {"id": "b", "element": "O", "x": 110, "y": 50},
            ],
            "bonds": [{"id": "ab", "source": "a", "target": "b", "order": 2}],
        }
        self.assertTrue(self.canvas.set_value(value))
        self.assertEqual(self.smiles, ["C=O"])
        self.assertEqual(self.states, [])

        pixmap = self.canvas.render_image()
        self.assertFalse(pixmap.isNull())

    def test_read_only_blocks_drawing(self):
        self.canvas.set_read_only(True)
        self._press_release(100, 100)
        self.assertEqual(self.canvas.editor.atoms, ())
        self.assertEqual(self.canvas.cursor().shape(), Qt.CursorShape.ArrowCursor)


class NanoMolWindowTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._app = QApplication.instance() or QApplication([])

    def test_status_bar_follows_drawing(self):
        window = NanoMolWindow()
        canvas = window.canvas
        self.assertFalse(window.action_undo.isEnabled())

        canvas.mousePressEvent(_mouse(QMouseEvent.Type.MouseButtonPress, 100, 100))
        canvas.mouseMoveEvent(_mouse(QMouseEvent.Type.MouseMove, 160, 100))
        canvas.mouseReleaseEvent(_mouse(QMouseEvent.Type.MouseButtonRelease, 160, 100))

        self.assertEqual(window.smiles_label.text(), "SMILES: CC")
        self.assertEqual(window.formula_label.text(), "C₂H₆")
        self.assertTrue(window.action_undo.isEnabled())

    def test_tool_and_element_actions(self):
        window = NanoMolWindow()
        window.tool_actions[Tool.ERASE].trigger()
        self.assertEqual(window.canvas.editor.tool, Tool.ERASE)

        window.element_actions["N"].trigger()
        self.assertEqual(window.canvas.editor.active_element, "N")
        self.assertEqual(window.canvas.editor.tool, Tool.DRAW)
        self.assertTrue(window.tool_actions[Tool.DRAW].isChecked())

    def test_copy_smiles_to_clipboard(self):
        window = NanoMolWindow()
        window.canvas.set_value({"atoms": [{"id": "a", "element": "O", "x": 0, "y": 0}], "bonds": []})
        window.action_copy_smiles.trigger()
        self.assertEqual(QApplication.clipboard().text(), "O")


if __name__ == "__main__":
    unittest.main()
