import pytest

from firesmart.editor import AnnotationEditor, EditorMode, PointerDown
from firesmart.zone import Coords, Zone


def click(x: float, y: float, pin_id: str | None = None) -> PointerDown:
    return PointerDown(offset_x=x, offset_y=y, width=800, height=600, pin_id=pin_id)


@pytest.fixture
def pinned(registry):
    return registry.add(
        Zone(id="a", name="Tank Room", inventory="Solvents", coords=Coords(25, 50))
    )


def test_editor_is_initially_closed(editor):
    assert editor.mode == EditorMode.CLOSED
    assert editor.temp_coords is None
    assert not editor.is_open


def test_image_click_starts_placing_new(editor):
    editor.handle_pointer(click(200, 150))
    assert editor.mode == EditorMode.PLACING_NEW
    assert editor.temp_coords == Coords(25, 25)
    assert editor.form.name == ""
    assert editor.form.inventory == ""


def test_image_click_is_clamped(editor):
    editor.handle_pointer(click(900, -10))
    assert editor.temp_coords == Coords(100, 0)


def test_image_click_ignored_while_form_open(editor):
    editor.handle_pointer(click(200, 150))
    editor.handle_pointer(click(400, 300))
    assert editor.temp_coords == Coords(25, 25)


def test_submit_new_zone(editor, registry):
    editor.handle_pointer(click(400, 300))
    editor.form.name = "Tank Room"
    editor.form.inventory = "Acetone"
    zone = editor.submit()

    assert editor.mode == EditorMode.CLOSED
    assert len(registry) == 1
    assert registry.find(zone.id) == Zone(
        id=zone.id, name="Tank Room", inventory="Acetone", coords=Coords(50, 50)
    )


def test_submit_new_zone_defaults_inventory(editor, registry):
    editor.handle_pointer(click(400, 300))
    editor.form.name = "Tank Room"
    zone = editor.submit()
    assert zone.inventory == "General Storage"


@pytest.mark.parametrize("name", ["", "   ", "\t"])
def test_submit_with_blank_name_is_noop(editor, registry, name):
    editor.handle_pointer(click(400, 300))
    editor.form.name = name
    assert editor.submit() is None
    assert len(registry) == 0
    assert editor.mode == EditorMode.PLACING_NEW


def test_submit_keeps_name_as_typed(editor, registry):
    editor.handle_pointer(click(400, 300))
    editor.form.name = " Tank Room "
    zone = editor.submit()
    assert registry.find(zone.id).name == " Tank Room "


def test_submit_while_closed_is_noop(editor, registry):
    editor.form.name = "Tank Room"
    assert editor.submit() is None
    assert len(registry) == 0


def test_pin_click_starts_editing(editor, pinned):
    editor.handle_pointer(click(200, 300, pin_id="a"))
    assert editor.mode == EditorMode.EDITING
    assert editor.editing_zone_id == "a"
    assert editor.temp_coords == Coords(25, 50)
    assert editor.form.name == "Tank Room"
    assert editor.form.inventory == "Solvents"


def test_pin_click_takes_precedence_over_placing_new(editor, pinned):
    editor.handle_pointer(click(600, 100))
    editor.handle_pointer(click(200, 300, pin_id="a"))
    assert editor.mode == EditorMode.EDITING
    assert editor.temp_coords == Coords(25, 50)


def test_pin_click_for_unmapped_zone_is_ignored(editor, registry):
    registry.add(Zone(id="b", name="Unmapped"))
    editor.handle_pointer(click(0, 0, pin_id="b"))
    assert editor.mode == EditorMode.CLOSED


def test_pin_click_does_not_place_new_zone(editor, registry, pinned):
    editor.handle_pointer(click(200, 300, pin_id="a"))
    editor.submit()
    assert len(registry) == 1


def test_submit_edit_updates_zone(editor, registry, pinned):
    editor.handle_pointer(click(200, 300, pin_id="a"))
    editor.form.name = "Solvent Store"
    editor.form.inventory = ""
    zone = editor.submit()

    assert editor.mode == EditorMode.CLOSED
    assert zone.id == "a"
    assert registry.find("a").name == "Solvent Store"
    assert registry.find("a").inventory == "General Storage"
    assert registry.find("a").coords == Coords(25, 50)
    assert len(registry) == 1


def test_submit_edit_with_blank_name_is_noop(editor, registry, pinned):
    editor.handle_pointer(click(200, 300, pin_id="a"))
    editor.form.name = " "
    assert editor.submit() is None
    assert registry.find("a").name == "Tank Room"
    assert editor.mode == EditorMode.EDITING


def test_cancel_discards(editor, registry):
    editor.handle_pointer(click(400, 300))
    editor.form.name = "Tank Room"
    editor.cancel()
    assert editor.mode == EditorMode.CLOSED
    assert editor.temp_coords is None
    assert editor.form.name == ""
    assert len(registry) == 0


def test_remove_zone_being_edited_closes_editor(editor, registry, pinned):
    editor.handle_pointer(click(200, 300, pin_id="a"))
    editor.remove("a")
    assert registry.find("a") is None
    assert editor.mode == EditorMode.CLOSED


def test_remove_other_zone_keeps_editing(editor, registry, pinned):
    registry.add(Zone(id="b", name="Store B", coords=Coords(75, 50)))
    editor.handle_pointer(click(200, 300, pin_id="a"))
    editor.remove("b")
    assert registry.find("b") is None
    assert editor.mode == EditorMode.EDITING


def test_remove_while_placing_new(editor, registry, pinned):
    editor.handle_pointer(click(600, 100))
    editor.remove("a")
    assert len(registry) == 0
    assert editor.mode == EditorMode.PLACING_NEW


def test_editor_shares_registry(registry):
    a = AnnotationEditor(registry)
    a.handle_pointer(click(80, 60))
    a.form.name = "Dock"
    a.submit()
    assert [z.name for z in registry] == ["Dock"]
