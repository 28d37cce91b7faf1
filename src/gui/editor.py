"""
NanoMol editor core.

Tool-driven interaction state machine over an immutable graph snapshot:
pointer events come in as screen coordinates, are mapped to world
coordinates through the current view, and every graph change goes through
the history stack. Hosts talk to the editor through a plain value-in /
notify-out contract (`set_value` and the `on_change` callback).
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from chemio.smiles import snapshot_to_smiles
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
    validate_element,
)
from core.options import DEFAULT_OPTIONS, EditorOptions
from core.view import ViewState
from gui.geom import Point, distance, first_atom_within, first_bond_within, snap_to_angle

logger = logging.getLogger(__name__)

_PARSE_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


@dataclass(frozen=True)
class DragAnchor:
    """Atom a gesture started on, with its world position at that moment."""
    atom_id: str
    x: float
    y: float

    @property
    def position(self) -> Point:
        return (self.x, self.y)


@dataclass
class InteractionState:
    """Ephemeral per-gesture state; never exported to the host."""
    drag_anchor: Optional[DragAnchor] = None
    pointer: Optional[Point] = None
    hovered_atom_id: Optional[str] = None
    snap_target_id: Optional[str] = None
    is_dragging: bool = False
    is_panning: bool = False
    pan_anchor: Optional[Point] = None

    def reset(self) -> None:
        self.drag_anchor = None
        self.pointer = None
        self.hovered_atom_id = None
        self.snap_target_id = None
        self.is_dragging = False
        self.is_panning = False
        self.pan_anchor = None


@dataclass(frozen=True)
class EditorState:
    """Full editor state handed to the host after every change."""
    atoms: Tuple[Atom, ...]
    bonds: Tuple[Bond, ...]
    history: Tuple[GraphSnapshot, ...]
    history_index: int
    tool: Tool
    active_element: str
    view: ViewState

    @property
    def snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(self.atoms, self.bonds)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "atoms": [atom.to_dict() for atom in self.atoms],
            "bonds": [bond.to_dict() for bond in self.bonds],
            "history": [entry.to_dict() for entry in self.history],
            "history_index": self.history_index,
            "tool": self.tool.value,
            "active_element": self.active_element,
            "view": self.view.to_dict(),
        }


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _parse_snapshot(value: Any) -> GraphSnapshot:
    if isinstance(value, GraphSnapshot):
        return value
    atoms = value["atoms"]
    bonds = value["bonds"]
    if not (_is_sequence(atoms) and _is_sequence(bonds)):
        raise TypeError("history entry without atom/bond lists")
    return GraphSnapshot.from_parts(atoms, bonds)


class MolEditor:
    """Interactive molecule editor without any widget dependency.

    The widget layer (`gui.canvas.MolEditorCanvas`) forwards pointer and wheel
    events here and paints whatever `snapshot`, `view` and `interaction`
    describe.
    """

    def __init__(
        self,
        on_change: Optional[Callable[[EditorState], None]] = None,
        *,
        read_only: bool = False,
        options: EditorOptions = DEFAULT_OPTIONS,
    ) -> None:
        self.options = options
        self.on_change = on_change
        self._read_only = read_only
        self._history = HistoryStack()
        self._graph: GraphSnapshot = self._history.current
        self._smiles = ""
        self._tool = Tool.DRAW
        self._active_element = "C"
        self._view = ViewState()
        self.interaction = InteractionState()

    # --- Read access ---

    @property
    def snapshot(self) -> GraphSnapshot:
        return self._graph

    @property
    def atoms(self) -> Tuple[Atom, ...]:
        return self._graph.atoms

    @property
    def bonds(self) -> Tuple[Bond, ...]:
        return self._graph.bonds

    @property
    def history(self) -> HistoryStack:
        return self._history

    @property
    def tool(self) -> Tool:
        return self._tool

    @property
    def active_element(self) -> str:
        return self._active_element

    @property
    def view(self) -> ViewState:
        return self._view

    @property
    def smiles(self) -> str:
        """Linear notation of the live graph."""
        return self._smiles

    @property
    def read_only(self) -> bool:
        return self._read_only

    @read_only.setter
    def read_only(self, value: bool) -> None:
        self._read_only = bool(value)
        if self._read_only:
            self._cancel_gesture()

    def state(self) -> EditorState:
        return EditorState(
            atoms=self._graph.atoms,
            bonds=self._graph.bonds,
            history=self._history.entries,
            history_index=self._history.index,
            tool=self._tool,
            active_element=self._active_element,
            view=self._view,
        )

    # --- Graph mutation ---

    def _set_graph(self, snapshot: GraphSnapshot) -> None:
        changed = snapshot.atoms != self._graph.atoms or snapshot.bonds != self._graph.bonds
        self._graph = snapshot
        if changed:
            self._smiles = snapshot_to_smiles(snapshot)

    def _cancel_gesture(self) -> None:
        """Drop the gesture in progress and any uncommitted edit it made."""
        if self.interaction.is_dragging:
            self._set_graph(self._history.current)
        self.interaction.reset()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.state())

    def commit(self, snapshot: GraphSnapshot) -> GraphSnapshot:
        """Record `snapshot` in history, make it the live graph and notify."""
        self._set_graph(self._history.commit(snapshot))
        self._notify()
        return self._graph

    def undo(self) -> bool:
        if self._read_only:
            return False
        snapshot = self._history.undo()
        if snapshot is None:
            return False
        self._set_graph(snapshot)
        self._notify()
        return True

    def redo(self) -> bool:
        if self._read_only:
            return False
        snapshot = self._history.redo()
        if snapshot is None:
            return False
        self._set_graph(snapshot)
        self._notify()
        return True

    def clear(self) -> None:
        if self._read_only:
            return
        self.commit(EMPTY_SNAPSHOT)

    # --- Tools ---

    def set_tool(self, tool: Tool | str) -> None:
        if self._read_only:
            return
        self._tool = Tool(tool)
        self._cancel_gesture()
        self._notify()

    def set_active_element(self, element: str) -> None:
        """Select the element for new atoms and switch to the draw tool."""
        if self._read_only:
            return
        self._active_element = validate_element(element)
        self._tool = Tool.DRAW
        self._cancel_gesture()
        self._notify()

    # --- Hit testing (world coordinates) ---

    def atom_at(self, pos: Point) -> Optional[str]:
        return first_atom_within(
            pos,
            ((atom.id, atom.x, atom.y) for atom in self._graph.atoms),
            self.options.atom_hit_radius,
        )

    def bond_at(self, pos: Point) -> Optional[str]:
        def segments():
            for bond in self._graph.bonds:
                s = self._graph.atom(bond.source)
                t = self._graph.atom(bond.target)
                if s is None or t is None:
                    continue
                yield bond.id, s.position, t.position

        return first_bond_within(pos, segments(), self.options.bond_hit_distance)

    # --- Pointer events (screen coordinates) ---

    def pointer_down(self, px: float, py: float) -> None:
        if self._read_only:
            return
        world = self._view.screen_to_world(px, py)
        inter = self.interaction
        atom_id = self.atom_at(world)
        bond_id = None if atom_id is not None else self.bond_at(world)

        if self._tool != Tool.DRAW and atom_id is None and bond_id is None:
            inter.is_panning = True
            inter.pan_anchor = (px, py)
            return

        if self._tool == Tool.ERASE:
            if atom_id is not None:
                self.commit(self._graph.without_atom(atom_id))
            elif bond_id is not None:
                self.commit(self._graph.without_bond(bond_id))
            return

        if self._tool == Tool.SELECT:
            if atom_id is not None:
                atom = self._graph.atom(atom_id)
                inter.drag_anchor = DragAnchor(atom.id, atom.x, atom.y)
                inter.is_dragging = True
            inter.pointer = world
            return

        if atom_id is not None:
            atom = self._graph.atom(atom_id)
            inter.drag_anchor = DragAnchor(atom.id, atom.x, atom.y)
        elif bond_id is not None:
            bond = self._graph.bond(bond_id)
            self.commit(self._graph.replace_bond(bond.cycled()))
            return
        else:
            atom = new_atom(world[0], world[1], self._active_element)
            self._set_graph(self._graph.with_atom(atom))
            inter.drag_anchor = DragAnchor(atom.id, atom.x, atom.y)
        inter.is_dragging = True
        inter.pointer = world

    def pointer_move(self, px: float, py: float) -> None:
        if self._read_only:
            return
        inter = self.interaction

        if inter.is_panning and inter.pan_anchor is not None:
            dx = px - inter.pan_anchor[0]
            dy = py - inter.pan_anchor[1]
            self._view = self._view.panned(dx, dy)
            inter.pan_anchor = (px, py)
            return

        world = self._view.screen_to_world(px, py)
        anchor = inter.drag_anchor

        if self._tool == Tool.SELECT and inter.is_dragging and anchor is not None:
            atom = self._graph.atom(anchor.atom_id)
            if atom is not None:
                self._set_graph(self._graph.replace_atom(atom.moved_to(*world)))
            inter.pointer = world
            return

        if self._tool != Tool.DRAW:
            return

        if not inter.is_dragging or anchor is None:
            inter.hovered_atom_id = self.atom_at(world)
            return

        snapped = snap_to_angle(
            anchor.position,
            world,
            math.radians(self.options.angle_step_deg),
            self.options.bond_length,
        )
        target = self._find_snap_target(anchor.atom_id, world, snapped)
        if target is not None:
            inter.pointer = target.position
            inter.snap_target_id = target.id
        else:
            inter.pointer = snapped
            inter.snap_target_id = None

    def _find_snap_target(self, anchor_id: str, raw: Point, snapped: Point) -> Optional[Atom]:
        radius = self.options.bond_snap_distance
        for atom in self._graph.atoms:
            if atom.id == anchor_id:
                continue
            if distance(atom.position, raw) < radius or distance(atom.position, snapped) < radius:
                return atom
        return None

    def pointer_up(self, px: Optional[float] = None, py: Optional[float] = None) -> None:
        """End the current gesture.

        The tracked pointer position (snapped while drawing) decides the
        outcome; the release coordinates are accepted for symmetry with the
        other handlers but not used.
        """
        if self._read_only:
            return
        inter = self.interaction

        if inter.is_panning:
            inter.is_panning = False
            inter.pan_anchor = None
            self._notify()
            return

        try:
            if self._tool == Tool.SELECT and inter.is_dragging:
                self.commit(self._graph)
            elif (
                self._tool == Tool.DRAW
                and inter.is_dragging
                and inter.drag_anchor is not None
                and inter.pointer is not None
            ):
                self._finish_draw_gesture(inter.drag_anchor, inter.pointer, inter.snap_target_id)
        finally:
            inter.reset()

    def pointer_leave(self) -> None:
        """Leaving the surface ends the gesture at the last known position."""
        self.pointer_up()

    def _finish_draw_gesture(
        self, anchor: DragAnchor, pointer: Point, snap_target_id: Optional[str]
    ) -> None:
        graph = self._graph
        anchor_atom = graph.atom(anchor.atom_id)
        if anchor_atom is None:
            logger.debug("Gesture anchor %s no longer exists; gesture dropped", anchor.atom_id)
            return

        if distance(anchor.position, pointer) < self.options.click_threshold:
            self.commit(graph.replace_atom(anchor_atom.with_element(self._active_element)))
            return

        target_id = snap_target_id
        if target_id is None or not graph.has_atom(target_id):
            atom = new_atom(pointer[0], pointer[1], self._active_element)
            graph = graph.with_atom(atom)
            target_id = atom.id

        if target_id != anchor.atom_id:
            existing = graph.find_bond_between(anchor.atom_id, target_id)
            if existing is not None:
                graph = graph.replace_bond(existing.cycled())
            else:
                graph = graph.with_bond(new_bond(anchor.atom_id, target_id))
        self.commit(graph)

    def wheel(self, px: float, py: float, delta: float) -> None:
        """Zoom around the pointer; positive `delta` zooms out."""
        if self._read_only:
            return
        self._view = self._view.zoomed(
            px,
            py,
            delta,
            min_zoom=self.options.min_zoom,
            max_zoom=self.options.max_zoom,
            sensitivity=self.options.zoom_sensitivity,
        )
        self._notify()

    # --- Value-in contract ---

    def set_value(self, value: EditorState | Mapping[str, Any] | None) -> bool:
        """Adopt a (possibly partial) state supplied by the host.

        `atoms` and `bonds` must be present and list-shaped; anything else is
        ignored silently. Optional fields that fail to parse fall back to the
        current value. No notification is emitted.

        Returns:
            True if the editor adopted the value, False if it was ignored or
            identical to the current state.
        """
        if value is None:
            return False
        if isinstance(value, EditorState):
            value = {
                "atoms": value.atoms,
                "bonds": value.bonds,
                "history": value.history,
                "history_index": value.history_index,
                "tool": value.tool,
                "active_element": value.active_element,
                "view": value.view,
            }
        if not isinstance(value, Mapping):
            logger.debug("Ignoring editor value of type %s", type(value).__name__)
            return False

        atoms = value.get("atoms")
        bonds = value.get("bonds")
        if not (_is_sequence(atoms) and _is_sequence(bonds)):
            logger.debug("Ignoring editor value without atom/bond lists")
            return False
        try:
            graph = GraphSnapshot.from_parts(atoms, bonds)
        except _PARSE_ERRORS as exc:
            logger.debug("Ignoring malformed editor value: %s", exc)
            return False

        history = self._parse_history(value.get("history"))
        history_index = value.get("history_index")
        if not isinstance(history_index, int) or isinstance(history_index, bool):
            history_index = None
        tool = self._parse_tool(value.get("tool"))
        element = value.get("active_element")
        if element not in ELEMENTS:
            element = None
        view = self._parse_view(value.get("view"))

        new_entries = history if history is not None else self._history.entries
        incoming = (
            graph.atoms,
            graph.bonds,
            tuple(new_entries),
            history_index if history_index is not None else self._history.index,
            tool or self._tool,
            element or self._active_element,
            view or self._view,
        )
        current = (
            self._graph.atoms,
            self._graph.bonds,
            self._history.entries,
            self._history.index,
            self._tool,
            self._active_element,
            self._view,
        )
        if incoming == current:
            return False

        self._set_graph(graph)
        if history is not None or history_index is not None:
            self._history.restore(new_entries, incoming[3])
        self._tool = incoming[4]
        self._active_element = incoming[5]
        self._view = incoming[6]
        self.interaction.reset()
        return True

    @staticmethod
    def _parse_history(value: Any) -> Optional[Sequence[GraphSnapshot]]:
        if not _is_sequence(value):
            return None
        try:
            return [_parse_snapshot(entry) for entry in value]
        except _PARSE_ERRORS as exc:
            logger.debug("Ignoring malformed history: %s", exc)
            return None

    @staticmethod
    def _parse_tool(value: Any) -> Optional[Tool]:
        if value is None:
            return None
        try:
            return Tool(value)
        except ValueError:
            logger.debug("Ignoring unknown tool %r", value)
            return None

    def _parse_view(self, value: Any) -> Optional[ViewState]:
        if value is None:
            return None
        if isinstance(value, ViewState):
            value = value.to_dict()
        try:
            return ViewState.from_dict(
                value, min_zoom=self.options.min_zoom, max_zoom=self.options.max_zoom
            )
        except _PARSE_ERRORS as exc:
            logger.debug("Ignoring malformed view: %s", exc)
            return None
