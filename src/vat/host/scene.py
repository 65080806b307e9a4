"""In-memory modelling host.

Simulates the subset of a 3D modelling application the chat room drives:
a flat list of entities, a selection, shape creation, named groups and
components, tool actions and opened URLs.
"""

import asyncio
import copy
import itertools
import re
from dataclasses import dataclass, field
from typing import Any, Callable
from urllib.parse import quote_plus

from .base import CommandResult, CommandStatus, HostCommand
from .registry import CommandRegistry

SEARCH_URL = "https://extensions.sketchup.com/search/?q="

KNOWN_ACTIONS = frozenset({
    "selectSelectionTool:",
    "selectEraseTool:",
    "selectPaintTool:",
    "selectLineTool:",
    "selectArcTool:",
    "selectRectangleTool:",
    "selectCircleTool:",
    "selectPolygonTool:",
    "selectPushPullTool:",
    "selectMoveTool:",
    "selectRotateTool:",
    "selectScaleTool:",
    "selectOffsetTool:",
    "selectExtrudeTool:",
    "selectMeasureTool:",
    "selectProtractorTool:",
    "selectAxisTool:",
    "selectDimensionTool:",
    "selectTextTool:",
    "selectOrbitTool:",
    "selectDollyTool:",
    "selectZoomTool:",
})

_LENGTH_RE = re.compile(
    r"^([-+]?\d+(?:[.,]\d+)?)\s*(mm|cm|m|km|in|inch|inches|\"|ft|feet|foot|')?$"
)

_UNITS_IN_METERS = {
    None: 1.0,
    "m": 1.0,
    "mm": 0.001,
    "cm": 0.01,
    "km": 1000.0,
    "in": 0.0254,
    "inch": 0.0254,
    "inches": 0.0254,
    '"': 0.0254,
    "ft": 0.3048,
    "feet": 0.3048,
    "foot": 0.3048,
    "'": 0.3048,
}

TRANSFORMABLE = ("group", "component")


def parse_length(text: str) -> float:
    """Convert a length like '2m', '-50cm' or '3ft' to meters.

    A bare number is read as meters.

    Raises:
        ValueError: If the text is not a length.
    """
    found = _LENGTH_RE.match(text.strip().lower())
    if found is None:
        raise ValueError(f"Not a length: {text!r}")
    number = float(found.group(1).replace(",", "."))
    return number * _UNITS_IN_METERS[found.group(2)]


@dataclass
class Entity:
    """One drawable thing in the scene."""

    id: int
    kind: str
    name: str = ""
    position: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    rotation: float = 0.0
    scale: float = 1.0
    dimensions: dict[str, float] = field(default_factory=dict)


class Scene:
    """A tiny model the host commands operate on."""

    def __init__(self, latency: float = 0.0) -> None:
        self.latency = latency
        self.entities: list[Entity] = []
        self.selection: list[Entity] = []
        self.actions: list[str] = []
        self.opened_urls: list[str] = []
        self.model_open = False
        self.closed = False
        self._ids = itertools.count(1)

    def add(self, kind: str, name: str = "", **dimensions: float) -> Entity:
        entity = Entity(id=next(self._ids), kind=kind, name=name, dimensions=dict(dimensions))
        self.entities.append(entity)
        return entity

    def find(self, kind: str | None = None, name: str | None = None) -> list[Entity]:
        return [
            e for e in self.entities
            if (kind is None or e.kind == kind)
            and (name is None or e.name.casefold() == name.casefold())
        ]

    def _select(self, entities: list[Entity]) -> CommandStatus:
        if not entities:
            return CommandStatus.NOT_FOUND
        for entity in entities:
            if entity not in self.selection:
                self.selection.append(entity)
        return CommandStatus.DONE

    def _transform_target(self) -> Entity | CommandStatus:
        if not self.selection:
            return CommandStatus.NOTHING_SELECTED
        target = self.selection[0]
        if target.kind not in TRANSFORMABLE:
            return CommandStatus.NOT_FOUND
        return target

    def open_model(self) -> CommandStatus:
        self.model_open = True
        return CommandStatus.DONE

    def clean_model(self) -> CommandStatus:
        """Purge loose edges and empty texts."""
        kept = [
            e for e in self.entities
            if e.kind != "edge" and not (e.kind == "text" and not e.name.strip())
        ]
        self.selection = [e for e in self.selection if e in kept]
        self.entities = kept
        return CommandStatus.DONE

    def select_first_entity(self) -> CommandStatus:
        return self._select(self.entities[:1])

    def select_first_group(self) -> CommandStatus:
        return self._select(self.find("group")[:1])

    def select_groups_named(self, name: str) -> CommandStatus:
        return self._select(self.find("group", name))

    def select_first_component(self) -> CommandStatus:
        return self._select(self.find("component")[:1])

    def select_components_named(self, name: str) -> CommandStatus:
        return self._select(self.find("component", name))

    def move_selection(self, dx: str, dy: str, dz: str) -> CommandStatus:
        offsets = [parse_length(dx), parse_length(dy), parse_length(dz)]
        target = self._transform_target()
        if isinstance(target, CommandStatus):
            return target
        target.position = [p + o for p, o in zip(target.position, offsets)]
        return CommandStatus.DONE

    def rotate_selection(self, angle: int) -> CommandStatus:
        target = self._transform_target()
        if isinstance(target, CommandStatus):
            return target
        target.rotation = (target.rotation + angle) % 360
        return CommandStatus.DONE

    def scale_selection(self, factor: float) -> CommandStatus:
        if factor <= 0:
            raise ValueError(f"Scale factor must be positive: {factor}")
        target = self._transform_target()
        if isinstance(target, CommandStatus):
            return target
        target.scale *= factor
        return CommandStatus.DONE

    def rename_selection(self, name: str) -> CommandStatus:
        target = self._transform_target()
        if isinstance(target, CommandStatus):
            return target
        target.name = name
        return CommandStatus.DONE

    def copy_selection(self, name: str) -> CommandStatus:
        target = self._transform_target()
        if isinstance(target, CommandStatus):
            return target
        duplicate = copy.deepcopy(target)
        duplicate.id = next(self._ids)
        duplicate.name = name
        self.entities.append(duplicate)
        return CommandStatus.DONE

    def clear_selection(self) -> CommandStatus:
        self.selection.clear()
        return CommandStatus.DONE

    def erase_selected(self) -> CommandStatus:
        if not self.selection:
            return CommandStatus.NOTHING_SELECTED
        self.entities = [e for e in self.entities if e not in self.selection]
        self.selection.clear()
        return CommandStatus.DONE

    def send_action(self, action: str) -> CommandStatus:
        if action not in KNOWN_ACTIONS:
            return CommandStatus.NOT_FOUND
        self.actions.append(action)
        return CommandStatus.DONE

    def draw_box(self, width: str, depth: str, height: str) -> CommandStatus:
        self.add(
            "group", "Box",
            width=parse_length(width), depth=parse_length(depth), height=parse_length(height),
        )
        return CommandStatus.DONE

    def draw_cone(self, radius: str, height: str) -> CommandStatus:
        self.add("group", "Cone", radius=parse_length(radius), height=parse_length(height))
        return CommandStatus.DONE

    def draw_cylinder(self, radius: str, height: str) -> CommandStatus:
        self.add("group", "Cylinder", radius=parse_length(radius), height=parse_length(height))
        return CommandStatus.DONE

    def _draw_polyhedron(self, name: str, radius: str, height: str, sides: int) -> CommandStatus:
        if sides < 3:
            raise ValueError(f"A {name.lower()} needs at least 3 sides, got {sides}")
        self.add(
            "group", name,
            radius=parse_length(radius), height=parse_length(height), sides=float(sides),
        )
        return CommandStatus.DONE

    def draw_prism(self, radius: str, height: str, sides: int) -> CommandStatus:
        return self._draw_polyhedron("Prism", radius, height, sides)

    def draw_pyramid(self, radius: str, height: str, sides: int) -> CommandStatus:
        return self._draw_polyhedron("Pyramid", radius, height, sides)

    def draw_sphere(self, radius: str) -> CommandStatus:
        self.add("group", "Sphere", radius=parse_length(radius))
        return CommandStatus.DONE

    def write_text(self, text: str) -> CommandStatus:
        if not text.strip():
            return CommandStatus.FAILED
        self.add("text", text)
        return CommandStatus.DONE

    def search_extension(self, topic: str) -> CommandStatus:
        self.opened_urls.append(SEARCH_URL + quote_plus(topic))
        return CommandStatus.DONE

    def close_session(self) -> CommandStatus:
        self.closed = True
        return CommandStatus.DONE


class SceneCommand(HostCommand):
    """A host command backed by a Scene method."""

    def __init__(
        self,
        scene: Scene,
        name: str,
        description: str,
        parameters: dict[str, str] | None = None,
        not_found_message: str = "Nothing found!",
        silent: bool = False,
    ) -> None:
        self.scene = scene
        self._name = name
        self._description = description
        self._param_types = parameters or {}
        self._handler: Callable[..., CommandStatus] = getattr(scene, name)
        self.not_found_message = not_found_message
        self.silent = silent

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {key: {"type": kind} for key, kind in self._param_types.items()},
            "required": list(self._param_types),
        }

    async def execute(self, **kwargs: Any) -> CommandResult:
        if self.scene.latency:
            await asyncio.sleep(self.scene.latency)
        status = self._handler(**kwargs)
        return CommandResult(status=status, output=f"{self.name}: {status.value}")


_NO_GROUPONENT = "No group or component found!"

# name, description, parameter types, not-found message, silent
SCENE_COMMANDS: list[tuple[str, str, dict[str, str], str, bool]] = [
    ("open_model", "Open a model file", {}, "Nothing found!", False),
    ("clean_model", "Purge loose geometry from the model", {}, "Nothing found!", False),
    ("select_first_entity", "Select the first entity", {}, "No entity found!", False),
    ("select_first_group", "Select the first group", {}, "No group found!", False),
    ("select_groups_named", "Select groups by name", {"name": "string"}, "No matching group!", False),
    ("select_first_component", "Select the first component", {}, "No component found!", False),
    (
        "select_components_named", "Select components by name",
        {"name": "string"}, "No matching component!", False,
    ),
    (
        "move_selection", "Translate the selection",
        {"dx": "string", "dy": "string", "dz": "string"}, _NO_GROUPONENT, False,
    ),
    ("rotate_selection", "Rotate the selection about Z", {"angle": "integer"}, _NO_GROUPONENT, False),
    ("scale_selection", "Scale the selection", {"factor": "number"}, _NO_GROUPONENT, False),
    ("rename_selection", "Rename the selection", {"name": "string"}, _NO_GROUPONENT, False),
    ("copy_selection", "Duplicate the selection under a name", {"name": "string"}, _NO_GROUPONENT, False),
    ("clear_selection", "Clear the selection", {}, "Nothing found!", True),
    ("erase_selected", "Erase selected entities", {}, "Nothing found!", False),
    ("send_action", "Activate a tool by action name", {"action": "string"}, "No matching action!", False),
    (
        "draw_box", "Draw a box",
        {"width": "string", "depth": "string", "height": "string"}, "Nothing found!", False,
    ),
    ("draw_cone", "Draw a cone", {"radius": "string", "height": "string"}, "Nothing found!", False),
    ("draw_cylinder", "Draw a cylinder", {"radius": "string", "height": "string"}, "Nothing found!", False),
    (
        "draw_prism", "Draw a prism",
        {"radius": "string", "height": "string", "sides": "integer"}, "Nothing found!", False,
    ),
    (
        "draw_pyramid", "Draw a pyramid",
        {"radius": "string", "height": "string", "sides": "integer"}, "Nothing found!", False,
    ),
    ("draw_sphere", "Draw a sphere", {"radius": "string"}, "Nothing found!", False),
    ("write_text", "Add a text entity", {"text": "string"}, "Nothing found!", False),
    ("search_extension", "Search the extension store", {"topic": "string"}, "Nothing found!", False),
    ("close_session", "Close the chat session", {}, "Nothing found!", True),
]


def build_scene_registry(scene: Scene) -> CommandRegistry:
    """Register every scene command in a new registry."""
    registry = CommandRegistry()
    for name, description, params, not_found, silent in SCENE_COMMANDS:
        registry.register(
            SceneCommand(
                scene,
                name,
                description,
                parameters=params,
                not_found_message=not_found,
                silent=silent,
            )
        )
    return registry
