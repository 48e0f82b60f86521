import pytest

from vimcore.keymaps import (
    DEFAULT_BINDINGS,
    ActionRef,
    Binding,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    load_default_keymaps,
)
from vimcore.modes import EditorMode


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    stroke: str = "x",
    action_id: str = "core.test",
) -> Binding:
    return Binding(id=binding_id, mode=mode, stroke=stroke, action_id=action_id)


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="normal.x")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="normal")) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.x"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="normal.x.duplicate"))


def test_same_key_in_different_modes_is_allowed() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="normal.x"))
    registry.register_binding(make_binding(binding_id="insert.x", mode="insert"))

    assert registry.stats().binding_count == 2
    assert registry.modes() == ("insert", "normal")


def test_modifiers_make_distinct_keys() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="plain.d", stroke="d"))
    registry.register_binding(make_binding(binding_id="ctrl.d", stroke="ctrl+d"))

    assert registry.find_binding("normal", "d").id == "plain.d"
    assert registry.find_binding("normal", "ctrl+d").id == "ctrl.d"


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding", stroke="y")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.find_binding("normal", "x") is None


def test_register_binding_unknown_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.x"))


def test_duplicate_action_rejected() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)
    before = registry.revision()

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.revision() == before + 1
    assert registry.unregister_binding("binding") is None


def test_binding_accepts_editor_mode() -> None:
    binding = Binding(
        id="normal.x", mode=EditorMode.NORMAL, stroke="x", action_id="core.test"
    )

    assert binding.mode == "normal"
    assert binding.stroke == KeyStroke("x")


def test_keystroke_parse() -> None:
    assert KeyStroke.parse("ctrl+d") == KeyStroke("d", ("ctrl",))
    assert KeyStroke.parse("shift+ctrl+u").token == "ctrl+shift+u"
    assert KeyStroke.parse("+") == KeyStroke("+")
    assert KeyStroke.parse("ctrl++") == KeyStroke("+", ("ctrl",))
    assert KeyStroke.parse(":").token == ":"


def test_load_default_keymaps_registers_everything() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
    assert registry.find_binding("normal", "i").action_id == "core.enter_insert"
    assert registry.find_binding("normal", ":").action_id == "core.enter_ex"
    assert registry.find_binding("insert", "ESC").action_id == "core.exit_to_normal"
    assert (
        registry.find_binding("normal", "ctrl+d").action_id
        == "motion.half_page_down"
    )


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, include_bindings=("normal.enter_insert.i",))

    assert registry.stats().binding_count == 1
    assert registry.get_binding("normal.enter_insert.i").action_id == "core.enter_insert"


def test_load_default_keymaps_exclude_and_extra() -> None:
    registry = KeymapRegistry()
    custom = Binding(
        id="normal.enter_insert.a",
        mode="normal",
        stroke="a",
        action_id="core.enter_insert",
    )

    load_default_keymaps(
        registry,
        exclude_bindings=("normal.enter_insert.i",),
        extra_bindings=(custom,),
    )

    assert registry.find_binding("normal", "i") is None
    assert registry.find_binding("normal", "a") == custom
