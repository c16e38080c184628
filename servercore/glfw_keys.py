"""GLFW key codes and their mapping onto the immediate-mode GUI key set."""

from __future__ import annotations

from enum import IntEnum
from string import ascii_uppercase
from typing import Callable, Optional


def _glfw_key_values() -> dict[str, int]:
    values: dict[str, int] = {
        "UNKNOWN": -1,
        "SPACE": 32,
        "APOSTROPHE": 39,
        "COMMA": 44,
        "MINUS": 45,
        "PERIOD": 46,
        "SLASH": 47,
    }
    values.update({f"KEY_{digit}": 48 + digit for digit in range(10)})
    values.update({"SEMICOLON": 59, "EQUAL": 61})
    values.update({letter: ord(letter) for letter in ascii_uppercase})
    values.update(
        {
            "LEFT_BRACKET": 91,
            "BACKSLASH": 92,
            "RIGHT_BRACKET": 93,
            "GRAVE_ACCENT": 96,
            "WORLD_1": 161,
            "WORLD_2": 162,
            "ESCAPE": 256,
            "ENTER": 257,
            "TAB": 258,
            "BACKSPACE": 259,
            "INSERT": 260,
            "DELETE": 261,
            "RIGHT": 262,
            "LEFT": 263,
            "DOWN": 264,
            "UP": 265,
            "PAGE_UP": 266,
            "PAGE_DOWN": 267,
            "HOME": 268,
            "END": 269,
            "CAPS_LOCK": 280,
            "SCROLL_LOCK": 281,
            "NUM_LOCK": 282,
            "PRINT_SCREEN": 283,
            "PAUSE": 284,
        }
    )
    values.update({f"F{n}": 289 + n for n in range(1, 26)})
    values.update({f"KP_{digit}": 320 + digit for digit in range(10)})
    values.update(
        {
            "KP_DECIMAL": 330,
            "KP_DIVIDE": 331,
            "KP_MULTIPLY": 332,
            "KP_SUBTRACT": 333,
            "KP_ADD": 334,
            "KP_ENTER": 335,
            "KP_EQUAL": 336,
            "LEFT_SHIFT": 340,
            "LEFT_CONTROL": 341,
            "LEFT_ALT": 342,
            "LEFT_SUPER": 343,
            "RIGHT_SHIFT": 344,
            "RIGHT_CONTROL": 345,
            "RIGHT_ALT": 346,
            "RIGHT_SUPER": 347,
            "MENU": 348,
        }
    )
    return values


_NAMED_KEY_BEGIN = 512


def _imgui_key_values() -> dict[str, int]:
    names = [
        "TAB", "LEFT_ARROW", "RIGHT_ARROW", "UP_ARROW", "DOWN_ARROW",
        "PAGE_UP", "PAGE_DOWN", "HOME", "END", "INSERT", "DELETE",
        "BACKSPACE", "SPACE", "ENTER", "ESCAPE",
        "LEFT_CTRL", "LEFT_SHIFT", "LEFT_ALT", "LEFT_SUPER",
        "RIGHT_CTRL", "RIGHT_SHIFT", "RIGHT_ALT", "RIGHT_SUPER", "MENU",
    ]
    names += [f"KEY_{digit}" for digit in range(10)]
    names += list(ascii_uppercase)
    names += [f"F{n}" for n in range(1, 25)]
    names += [
        "APOSTROPHE", "COMMA", "MINUS", "PERIOD", "SLASH", "SEMICOLON",
        "EQUAL", "LEFT_BRACKET", "BACKSLASH", "RIGHT_BRACKET", "GRAVE_ACCENT",
        "CAPS_LOCK", "SCROLL_LOCK", "NUM_LOCK", "PRINT_SCREEN", "PAUSE",
    ]
    names += [f"KEYPAD_{digit}" for digit in range(10)]
    names += [
        "KEYPAD_DECIMAL", "KEYPAD_DIVIDE", "KEYPAD_MULTIPLY", "KEYPAD_SUBTRACT",
        "KEYPAD_ADD", "KEYPAD_ENTER", "KEYPAD_EQUAL",
        "GAMEPAD_START", "GAMEPAD_BACK",
        "GAMEPAD_FACE_LEFT", "GAMEPAD_FACE_RIGHT", "GAMEPAD_FACE_UP", "GAMEPAD_FACE_DOWN",
        "GAMEPAD_DPAD_LEFT", "GAMEPAD_DPAD_RIGHT", "GAMEPAD_DPAD_UP", "GAMEPAD_DPAD_DOWN",
        "GAMEPAD_L1", "GAMEPAD_R1", "GAMEPAD_L2", "GAMEPAD_R2", "GAMEPAD_L3", "GAMEPAD_R3",
        "GAMEPAD_L_STICK_LEFT", "GAMEPAD_L_STICK_RIGHT", "GAMEPAD_L_STICK_UP", "GAMEPAD_L_STICK_DOWN",
        "GAMEPAD_R_STICK_LEFT", "GAMEPAD_R_STICK_RIGHT", "GAMEPAD_R_STICK_UP", "GAMEPAD_R_STICK_DOWN",
        "MOUSE_LEFT", "MOUSE_RIGHT", "MOUSE_MIDDLE", "MOUSE_X1", "MOUSE_X2",
        "MOUSE_WHEEL_X", "MOUSE_WHEEL_Y",
    ]
    values = {"NONE": 0}
    values.update({name: _NAMED_KEY_BEGIN + offset for offset, name in enumerate(names)})
    values.update({"MOD_CTRL": 1 << 12, "MOD_SHIFT": 1 << 13, "MOD_ALT": 1 << 14, "MOD_SUPER": 1 << 15})
    return values


GlfwKey = IntEnum("GlfwKey", _glfw_key_values(), module=__name__)
GlfwKey.__doc__ = "Keyboard key codes as reported by GLFW."

ImGuiKey = IntEnum("ImGuiKey", _imgui_key_values(), module=__name__)
ImGuiKey.__doc__ = "Keys and modifier flags understood by the GUI input layer."


_RENAMED = {
    "LEFT": "LEFT_ARROW",
    "RIGHT": "RIGHT_ARROW",
    "UP": "UP_ARROW",
    "DOWN": "DOWN_ARROW",
    "LEFT_CONTROL": "LEFT_CTRL",
    "RIGHT_CONTROL": "RIGHT_CTRL",
}


def _imgui_name_for(glfw_name: str) -> str:
    if glfw_name in _RENAMED:
        return _RENAMED[glfw_name]
    if glfw_name.startswith("KP_"):
        return "KEYPAD_" + glfw_name[len("KP_"):]
    return glfw_name


def _build_key_map() -> dict[int, ImGuiKey]:
    key_map: dict[int, ImGuiKey] = {}
    for glfw_key in GlfwKey:
        imgui_name = _imgui_name_for(glfw_key.name)
        if imgui_name in ImGuiKey.__members__ and not imgui_name.startswith(("MOD_", "NONE")):
            key_map[int(glfw_key)] = ImGuiKey[imgui_name]
    return key_map


_KEY_MAP = _build_key_map()

_CHAR_KEYS = {
    "`": GlfwKey.GRAVE_ACCENT,
    "-": GlfwKey.MINUS,
    "=": GlfwKey.EQUAL,
    "[": GlfwKey.LEFT_BRACKET,
    "]": GlfwKey.RIGHT_BRACKET,
    "\\": GlfwKey.BACKSLASH,
    ",": GlfwKey.COMMA,
    ";": GlfwKey.SEMICOLON,
    "'": GlfwKey.APOSTROPHE,
    ".": GlfwKey.PERIOD,
    "/": GlfwKey.SLASH,
}


def key_to_imgui_key(key: int) -> ImGuiKey:
    """The GUI key for a GLFW key code, or ``ImGuiKey.NONE`` if it has none."""
    return _KEY_MAP.get(int(key), ImGuiKey.NONE)


def translate_untranslated_key(
    key: int,
    scancode: int,
    get_key_name: Optional[Callable[[int, int], Optional[str]]] = None,
) -> int:
    """Turn a layout-independent GLFW key back into the key the layout prints.

    ``get_key_name(key, scancode)`` returns the printable name of a key, or
    None. Keypad keys and keys without a single-character name are returned
    unchanged.
    """
    if get_key_name is None:
        return key
    if GlfwKey.KP_0 <= key <= GlfwKey.KP_EQUAL:
        return key

    key_name = get_key_name(key, scancode)
    if not key_name or len(key_name) != 1:
        return key

    char = key_name
    if "0" <= char <= "9":
        return GlfwKey(GlfwKey.KEY_0 + (ord(char) - ord("0")))
    if "A" <= char <= "Z":
        return GlfwKey(GlfwKey.A + (ord(char) - ord("A")))
    if "a" <= char <= "z":
        return GlfwKey(GlfwKey.A + (ord(char) - ord("a")))
    return _CHAR_KEYS.get(char, key)