"""Tests for the in-memory scene host."""

import pytest

from vat.host import CommandStatus, Scene, build_scene_registry, parse_length
from vat.host.scene import SCENE_COMMANDS, SEARCH_URL


@pytest.fixture
def scene() -> Scene:
    return Scene()


@pytest.fixture
def furnished(scene: Scene) -> Scene:
    scene.add("edge")
    scene.add("group", "Wall")
    scene.add("component", "Door")
    scene.add("group", "wall")
    scene.add("text", "")
    return scene


class TestParseLength:
    """Tests for parse_length."""

    @pytest.mark.parametrize(
        "text, meters",
        [
            ("2", 2.0),
            ("2m", 2.0),
            ("-2m", -2.0),
            ("50cm", 0.5),
            ("1,5m", 1.5),
            ("1km", 1000.0),
            ("10mm", 0.01),
            ("1ft", 0.3048),
            ("2'", 0.6096),
            ('1"', 0.0254),
        ],
    )
    def test_units(self, text: str, meters: float):
        assert parse_length(text) == pytest.approx(meters)

    def test_invalid(self):
        with pytest.raises(ValueError, match="Not a length"):
            parse_length("far")


class TestSelection:
    """Tests for selection commands."""

    def test_select_first_entity(self, furnished: Scene):
        assert furnished.select_first_entity() is CommandStatus.DONE
        assert furnished.selection[0].kind == "edge"

    def test_select_first_group(self, furnished: Scene):
        furnished.select_first_group()
        assert [e.name for e in furnished.selection] == ["Wall"]

    def test_select_groups_named_ignores_case(self, furnished: Scene):
        assert furnished.select_groups_named("WALL") is CommandStatus.DONE
        assert len(furnished.selection) == 2

    def test_select_components_named(self, furnished: Scene):
        assert furnished.select_components_named("Door") is CommandStatus.DONE
        assert furnished.select_components_named("Window") is CommandStatus.NOT_FOUND

    def test_empty_scene_finds_nothing(self, scene: Scene):
        assert scene.select_first_entity() is CommandStatus.NOT_FOUND
        assert scene.select_first_component() is CommandStatus.NOT_FOUND

    def test_selection_accumulates(self, furnished: Scene):
        furnished.select_first_group()
        furnished.select_first_component()
        furnished.select_first_group()
        assert [e.kind for e in furnished.selection] == ["group", "component"]

    def test_clear_selection(self, furnished: Scene):
        furnished.select_first_group()
        assert furnished.clear_selection() is CommandStatus.DONE
        assert furnished.selection == []


class TestTransforms:
    """Tests for move, rotate, scale, rename and copy."""

    def test_nothing_selected(self, furnished: Scene):
        assert furnished.move_selection("1m", "0", "0") is CommandStatus.NOTHING_SELECTED
        assert furnished.rotate_selection(90) is CommandStatus.NOTHING_SELECTED

    def test_not_a_group(self, furnished: Scene):
        furnished.select_first_entity()
        assert furnished.rename_selection("Beam") is CommandStatus.NOT_FOUND

    def test_move(self, furnished: Scene):
        furnished.select_first_group()
        furnished.move_selection("-2m", "50cm", "0")
        assert furnished.selection[0].position == pytest.approx([-2.0, 0.5, 0.0])

    def test_rotate_wraps(self, furnished: Scene):
        furnished.select_first_group()
        furnished.rotate_selection(300)
        furnished.rotate_selection(90)
        assert furnished.selection[0].rotation == 30

    def test_scale(self, furnished: Scene):
        furnished.select_first_group()
        furnished.scale_selection(2.0)
        assert furnished.selection[0].scale == 2.0

    def test_scale_rejects_non_positive(self, furnished: Scene):
        furnished.select_first_group()
        with pytest.raises(ValueError):
            furnished.scale_selection(0)

    def test_rename(self, furnished: Scene):
        furnished.select_first_component()
        furnished.rename_selection("Gate")
        assert furnished.find("component", "Gate")

    def test_copy(self, furnished: Scene):
        furnished.select_first_group()
        furnished.copy_selection("Wall copy")
        copies = furnished.find("group", "Wall copy")
        assert len(copies) == 1
        assert copies[0].id != furnished.selection[0].id


class TestModel:
    """Tests for model level commands."""

    def test_open_model(self, scene: Scene):
        scene.open_model()
        assert scene.model_open

    def test_clean_model(self, furnished: Scene):
        furnished.clean_model()
        assert [e.kind for e in furnished.entities] == ["group", "component", "group"]

    def test_erase_selected(self, furnished: Scene):
        furnished.select_groups_named("wall")
        assert furnished.erase_selected() is CommandStatus.DONE
        assert furnished.find("group") == []
        assert furnished.erase_selected() is CommandStatus.NOTHING_SELECTED

    def test_draw_shapes(self, scene: Scene):
        scene.draw_box("2m", "1m", "50cm")
        scene.draw_prism("1m", "2m", 6)
        box, prism = scene.entities
        assert box.dimensions == pytest.approx({"width": 2.0, "depth": 1.0, "height": 0.5})
        assert prism.dimensions["sides"] == 6

    def test_polyhedron_needs_three_sides(self, scene: Scene):
        with pytest.raises(ValueError):
            scene.draw_pyramid("1m", "1m", 2)

    def test_send_action(self, scene: Scene):
        assert scene.send_action("selectPaintTool:") is CommandStatus.DONE
        assert scene.send_action("selectMagicTool:") is CommandStatus.NOT_FOUND
        assert scene.actions == ["selectPaintTool:"]

    def test_write_text(self, scene: Scene):
        assert scene.write_text("Hello world") is CommandStatus.DONE
        assert scene.find("text", "Hello world")

    def test_search_extension(self, scene: Scene):
        scene.search_extension("spiral stairs")
        assert scene.opened_urls == [SEARCH_URL + "spiral+stairs"]


class TestSceneRegistry:
    """Tests for the registry built over a scene."""

    def test_every_command_registered(self, scene: Scene):
        registry = build_scene_registry(scene)
        assert [command.name for command in registry] == [entry[0] for entry in SCENE_COMMANDS]

    def test_silent_commands(self, scene: Scene):
        registry = build_scene_registry(scene)
        assert registry.get("clear_selection").silent
        assert registry.get("close_session").silent
        assert not registry.get("open_model").silent

    @pytest.mark.asyncio
    async def test_dispatch_reaches_scene(self, scene: Scene):
        registry = build_scene_registry(scene)
        result = await registry.dispatch("draw_sphere", {"radius": "2m"})
        assert result.success
        assert scene.find("group", "Sphere")

    @pytest.mark.asyncio
    async def test_bad_length_fails(self, scene: Scene):
        registry = build_scene_registry(scene)
        result = await registry.dispatch("draw_sphere", {"radius": "huge"})
        assert result.status is CommandStatus.FAILED

    @pytest.mark.asyncio
    async def test_not_found_message(self, scene: Scene):
        registry = build_scene_registry(scene)
        result = await registry.dispatch("select_first_group", {})
        assert result.status is CommandStatus.NOT_FOUND
        assert registry.get("select_first_group").not_found_message == "No group found!"
