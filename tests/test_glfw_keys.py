import pytest

from servercore.glfw_keys import (
    GlfwKey,
    ImGuiKey,
    key_to_imgui_key,
    translate_untranslated_key,
)


def _names(mapping):
    return lambda key, scancode: mapping.get(key)


def test_glfw_printable_keys_match_ascii():
    assert key_to_imgui_key(ord("A")) is ImGuiKey.A
    assert key_to_imgui_key(ord("0")) is ImGuiKey.KEY_0
    assert key_to_imgui_key(ord(" ")) is ImGuiKey.SPACE
    assert translate_untranslated_key(GlfwKey.M, 0, _names({GlfwKey.M: "a"})) == ord("A")


@pytest.mark.parametrize(
    "glfw_key, imgui_key",
    [
        (GlfwKey.TAB, ImGuiKey.TAB),
        (GlfwKey.LEFT, ImGuiKey.LEFT_ARROW),
        (GlfwKey.DOWN, ImGuiKey.DOWN_ARROW),
        (GlfwKey.LEFT_CONTROL, ImGuiKey.LEFT_CTRL),
        (GlfwKey.RIGHT_CONTROL, ImGuiKey.RIGHT_CTRL),
        (GlfwKey.KP_5, ImGuiKey.KEYPAD_5),
        (GlfwKey.KP_ENTER, ImGuiKey.KEYPAD_ENTER),
        (GlfwKey.KEY_7, ImGuiKey.KEY_7),
        (GlfwKey.Q, ImGuiKey.Q),
        (GlfwKey.F13, ImGuiKey.F13),
        (GlfwKey.F24, ImGuiKey.F24),
        (GlfwKey.GRAVE_ACCENT, ImGuiKey.GRAVE_ACCENT),
        (GlfwKey.MENU, ImGuiKey.MENU),
    ],
)
def test_key_to_imgui_key(glfw_key, imgui_key):
    assert key_to_imgui_key(glfw_key) is imgui_key


@pytest.mark.parametrize("key", [GlfwKey.UNKNOWN, GlfwKey.F25, GlfwKey.WORLD_1, 9999])
def test_unmapped_keys_give_none(key):
    assert key_to_imgui_key(key) is ImGuiKey.NONE


def test_mapping_is_injective():
    mapped = [key_to_imgui_key(key) for key in GlfwKey]
    real = [key for key in mapped if key is not ImGuiKey.NONE]
    assert len(set(real)) == len(real)


def test_every_letter_and_digit_is_mapped():
    letters = [chr(c) for c in range(ord("A"), ord("Z") + 1)]
    digits = [f"KEY_{d}" for d in range(10)]
    names = letters + digits
    assert [key_to_imgui_key(GlfwKey[name]) for name in names] == [ImGuiKey[name] for name in names]


def test_translate_lowercase_letter():
    assert translate_untranslated_key(GlfwKey.A, 24, _names({GlfwKey.A: "q"})) == GlfwKey.Q


def test_translate_uppercase_letter():
    assert translate_untranslated_key(GlfwKey.Z, 52, _names({GlfwKey.Z: "Y"})) == GlfwKey.Y


def test_translate_digit():
    assert translate_untranslated_key(GlfwKey.KEY_1, 10, _names({GlfwKey.KEY_1: "7"})) == GlfwKey.KEY_7


@pytest.mark.parametrize(
    "char, expected",
    [
        ("`", GlfwKey.GRAVE_ACCENT),
        ("-", GlfwKey.MINUS),
        ("=", GlfwKey.EQUAL),
        ("[", GlfwKey.LEFT_BRACKET),
        ("]", GlfwKey.RIGHT_BRACKET),
        ("\\", GlfwKey.BACKSLASH),
        (",", GlfwKey.COMMA),
        (";", GlfwKey.SEMICOLON),
        ("'", GlfwKey.APOSTROPHE),
        (".", GlfwKey.PERIOD),
        ("/", GlfwKey.SLASH),
    ],
)
def test_translate_punctuation(char, expected):
    assert translate_untranslated_key(GlfwKey.M, 0, _names({GlfwKey.M: char})) == expected


def test_keypad_keys_are_never_translated():
    lookup = _names({GlfwKey.KP_3: "a", GlfwKey.KP_EQUAL: "="})
    assert translate_untranslated_key(GlfwKey.KP_3, 0, lookup) == GlfwKey.KP_3
    assert translate_untranslated_key(GlfwKey.KP_EQUAL, 0, lookup) == GlfwKey.KP_EQUAL


@pytest.mark.parametrize("name", [None, "", "ab", "\u00e9", "!"])
def test_untranslatable_names_leave_key_unchanged(name):
    assert translate_untranslated_key(GlfwKey.E, 0, _names({GlfwKey.E: name})) == GlfwKey.E


def test_without_name_lookup_key_is_unchanged():
    assert translate_untranslated_key(GlfwKey.W, 17) == GlfwKey.W


def test_lookup_receives_key_and_scancode():
    calls = []

    def lookup(key, scancode):
        calls.append((key, scancode))
        return "b"

    assert translate_untranslated_key(GlfwKey.X, 45, lookup) == GlfwKey.B
    assert calls == [(GlfwKey.X, 45)]


def test_translated_key_maps_to_imgui_key():
    translated = translate_untranslated_key(GlfwKey.A, 0, _names({GlfwKey.A: "z"}))
    assert key_to_imgui_key(translated) is ImGuiKey.Z