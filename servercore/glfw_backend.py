"""Platform backend feeding GLFW window events into the GUI input layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Any, Callable, Optional

from .glfw_keys import GlfwKey, ImGuiKey, key_to_imgui_key, translate_untranslated_key

FLT_MAX = 3.4028234663852886e38
BACKEND_PLATFORM_NAME = "imgui_impl_glfw"
MOUSE_BUTTON_COUNT = 5

CURSOR_NORMAL = "normal"
CURSOR_HIDDEN = "hidden"
CURSOR_DISABLED = "disabled"

ARROW_CURSOR = "arrow"
IBEAM_CURSOR = "ibeam"
VRESIZE_CURSOR = "vresize"
HRESIZE_CURSOR = "hresize"
HAND_CURSOR = "hand"

_CALLBACK_NAMES = (
    "window_focus",
    "cursor_enter",
    "cursor_pos",
    "mouse_button",
    "scroll",
    "key",
    "char",
    "monitor",
)


class ClientApi(IntEnum):
    UNKNOWN = 0
    OPENGL = 1
    VULKAN = 2


class MouseCursor(IntEnum):
    NONE = -1
    ARROW = 0
    TEXT_INPUT = 1
    RESIZE_ALL = 2
    RESIZE_NS = 3
    RESIZE_EW = 4
    RESIZE_NESW = 5
    RESIZE_NWSE = 6
    HAND = 7
    NOT_ALLOWED = 8


class BackendFlags(IntFlag):
    NONE = 0
    HAS_GAMEPAD = 1 << 0
    HAS_MOUSE_CURSORS = 1 << 1
    HAS_SET_MOUSE_POS = 1 << 2
    RENDERER_HAS_VTX_OFFSET = 1 << 3


class ConfigFlags(IntFlag):
    NONE = 0
    NAV_ENABLE_KEYBOARD = 1 << 0
    NAV_ENABLE_GAMEPAD = 1 << 1
    NAV_ENABLE_SET_MOUSE_POS = 1 << 2
    NAV_NO_CAPTURE_KEYBOARD = 1 << 3
    NO_MOUSE = 1 << 4
    NO_MOUSE_CURSOR_CHANGE = 1 << 5


class InputAction(IntEnum):
    RELEASE = 0
    PRESS = 1
    REPEAT = 2


# Standard cursor shapes available with GLFW 3.3; the newer resize and
# not-allowed shapes fall back to the arrow.
_CURSOR_SHAPES = {
    MouseCursor.ARROW: ARROW_CURSOR,
    MouseCursor.TEXT_INPUT: IBEAM_CURSOR,
    MouseCursor.RESIZE_NS: VRESIZE_CURSOR,
    MouseCursor.RESIZE_EW: HRESIZE_CURSOR,
    MouseCursor.HAND: HAND_CURSOR,
    MouseCursor.RESIZE_ALL: ARROW_CURSOR,
    MouseCursor.RESIZE_NESW: ARROW_CURSOR,
    MouseCursor.RESIZE_NWSE: ARROW_CURSOR,
    MouseCursor.NOT_ALLOWED: ARROW_CURSOR,
}


@dataclass(eq=False)
class GlfwWindow:
    """State of a GLFW window as seen by the backend.

    ``callbacks`` maps event names (``"key"``, ``"scroll"``, ...) to the
    installed handlers; the monitor handler lives there too.
    """

    title: str = ""
    size: tuple[int, int] = (0, 0)
    framebuffer_size: tuple[int, int] = (0, 0)
    focused: bool = True
    cursor_pos: tuple[float, float] = (0.0, 0.0)
    cursor_mode: str = CURSOR_NORMAL
    cursor: Optional[str] = None
    clipboard: str = ""
    pressed_keys: set[int] = field(default_factory=set)
    key_name: Optional[Callable[[int, int], Optional[str]]] = None
    callbacks: dict[str, Callable[..., Any]] = field(default_factory=dict)


@dataclass(eq=False)
class InputIO:
    """Input state and the queue of input events handed to the GUI."""

    config_flags: ConfigFlags = ConfigFlags.NONE
    backend_flags: BackendFlags = BackendFlags.NONE
    backend_platform_name: Optional[str] = None
    backend_platform_user_data: Any = None
    mouse_pos: tuple[float, float] = (-FLT_MAX, -FLT_MAX)
    mouse_draw_cursor: bool = False
    want_set_mouse_pos: bool = False
    display_size: tuple[float, float] = (-1.0, -1.0)
    display_framebuffer_scale: tuple[float, float] = (1.0, 1.0)
    delta_time: float = 1.0 / 60.0
    app_focused: bool = True
    get_clipboard_text: Optional[Callable[[], str]] = None
    set_clipboard_text: Optional[Callable[[str], None]] = None
    events: list[tuple] = field(default_factory=list)
    keys_down: dict[int, bool] = field(default_factory=dict)
    key_analog_values: dict[int, float] = field(default_factory=dict)
    key_native_data: dict[int, tuple[int, int]] = field(default_factory=dict)
    mouse_down: list[bool] = field(default_factory=lambda: [False] * MOUSE_BUTTON_COUNT)
    input_characters: list[str] = field(default_factory=list)

    def add_key_event(self, key: int, down: bool) -> None:
        """Queue a key press or release; the empty key is ignored."""
        if key == ImGuiKey.NONE:
            return
        self.keys_down[key] = down
        self.key_analog_values[key] = 1.0 if down else 0.0
        self.events.append(("key", key, down))

    def add_key_analog_event(self, key: int, down: bool, value: float) -> None:
        if key == ImGuiKey.NONE:
            return
        self.keys_down[key] = down
        self.key_analog_values[key] = value
        self.events.append(("key_analog", key, down, value))

    def add_mouse_pos_event(self, x: float, y: float) -> None:
        self.mouse_pos = (float(x), float(y))
        self.events.append(("mouse_pos", float(x), float(y)))

    def add_mouse_button_event(self, button: int, down: bool) -> None:
        if not 0 <= button < MOUSE_BUTTON_COUNT:
            raise ValueError(f"mouse button out of range: {button}")
        self.mouse_down[button] = down
        self.events.append(("mouse_button", button, down))

    def add_mouse_wheel_event(self, x: float, y: float) -> None:
        """Queue a wheel movement; a movement of zero on both axes is ignored."""
        if x == 0.0 and y == 0.0:
            return
        self.events.append(("mouse_wheel", float(x), float(y)))

    def add_focus_event(self, focused: bool) -> None:
        self.app_focused = focused
        self.events.append(("focus", focused))

    def add_input_character(self, c: int) -> None:
        """Queue a typed character given as a code point; zero is ignored."""
        if c == 0:
            return
        char = chr(c)
        self.input_characters.append(char)
        self.events.append(("char", char))

    def set_key_event_native_data(self, key: int, keycode: int, scancode: int) -> None:
        if key == ImGuiKey.NONE:
            return
        self.key_native_data[key] = (int(keycode), int(scancode))


class GlfwBackend:
    """Connects one GLFW window to an InputIO, chaining any user callbacks."""

    def __init__(self, io: InputIO, window: GlfwWindow, client_api: ClientApi) -> None:
        self.io = io
        self.window = window
        self.client_api = client_api
        self.time = 0.0
        self.mouse_window: Optional[GlfwWindow] = None
        self.mouse_cursors: dict[MouseCursor, Optional[str]] = dict(_CURSOR_SHAPES)
        self.last_valid_mouse_pos: tuple[float, float] = (0.0, 0.0)
        self.installed_callbacks = False
        self.callbacks_chain_for_all_windows = False
        self._prev_callbacks: dict[str, Optional[Callable[..., Any]]] = {}
        self._active = True

    def _chain(self, name: str, window: Any, *args: Any) -> None:
        prev = self._prev_callbacks.get(name)
        if prev is not None and (self.callbacks_chain_for_all_windows or window is self.window):
            prev(window, *args)

    def _update_key_modifiers(self, window: GlfwWindow) -> None:
        pressed = window.pressed_keys
        pairs = (
            (ImGuiKey.MOD_CTRL, GlfwKey.LEFT_CONTROL, GlfwKey.RIGHT_CONTROL),
            (ImGuiKey.MOD_SHIFT, GlfwKey.LEFT_SHIFT, GlfwKey.RIGHT_SHIFT),
            (ImGuiKey.MOD_ALT, GlfwKey.LEFT_ALT, GlfwKey.RIGHT_ALT),
            (ImGuiKey.MOD_SUPER, GlfwKey.LEFT_SUPER, GlfwKey.RIGHT_SUPER),
        )
        for mod, left, right in pairs:
            self.io.add_key_event(mod, left in pressed or right in pressed)

    def mouse_button_callback(self, window: GlfwWindow, button: int, action: int, mods: int) -> None:
        self._chain("mouse_button", window, button, action, mods)
        self._update_key_modifiers(window)
        if 0 <= button < MOUSE_BUTTON_COUNT:
            self.io.add_mouse_button_event(button, action == InputAction.PRESS)

    def scroll_callback(self, window: GlfwWindow, xoffset: float, yoffset: float) -> None:
        self._chain("scroll", window, xoffset, yoffset)
        self.io.add_mouse_wheel_event(float(xoffset), float(yoffset))

    def key_callback(self, window: GlfwWindow, keycode: int, scancode: int, action: int, mods: int) -> None:
        self._chain("key", window, keycode, scancode, action, mods)
        if action not in (InputAction.PRESS, InputAction.RELEASE):
            return
        self._update_key_modifiers(window)
        keycode = int(translate_untranslated_key(keycode, scancode, window.key_name))
        imgui_key = key_to_imgui_key(keycode)
        self.io.add_key_event(imgui_key, action == InputAction.PRESS)
        self.io.set_key_event_native_data(imgui_key, keycode, scancode)

    def window_focus_callback(self, window: GlfwWindow, focused: int) -> None:
        self._chain("window_focus", window, focused)
        self.io.add_focus_event(focused != 0)

    def cursor_pos_callback(self, window: GlfwWindow, x: float, y: float) -> None:
        self._chain("cursor_pos", window, x, y)
        self.io.add_mouse_pos_event(float(x), float(y))
        self.last_valid_mouse_pos = (float(x), float(y))

    def cursor_enter_callback(self, window: GlfwWindow, entered: int) -> None:
        """Track the hovered window, keeping the last position across leave/enter."""
        self._chain("cursor_enter", window, entered)
        if entered:
            self.mouse_window = window
            self.io.add_mouse_pos_event(*self.last_valid_mouse_pos)
        elif self.mouse_window is window:
            self.last_valid_mouse_pos = self.io.mouse_pos
            self.mouse_window = None
            self.io.add_mouse_pos_event(-FLT_MAX, -FLT_MAX)

    def char_callback(self, window: GlfwWindow, c: int) -> None:
        self._chain("char", window, c)
        self.io.add_input_character(c)

    def monitor_callback(self, monitor: Any, event: int) -> None:
        """Accepts monitor events; a single-window backend has nothing to update."""
        return None

    def install_callbacks(self, window: GlfwWindow) -> None:
        """Install the backend's handlers on ``window``, remembering the previous ones."""
        if self.installed_callbacks:
            raise RuntimeError("callbacks already installed")
        if window is not self.window:
            raise ValueError("window is not the backend's window")
        handlers = {
            "window_focus": self.window_focus_callback,
            "cursor_enter": self.cursor_enter_callback,
            "cursor_pos": self.cursor_pos_callback,
            "mouse_button": self.mouse_button_callback,
            "scroll": self.scroll_callback,
            "key": self.key_callback,
            "char": self.char_callback,
            "monitor": self.monitor_callback,
        }
        for name in _CALLBACK_NAMES:
            self._prev_callbacks[name] = window.callbacks.get(name)
            window.callbacks[name] = handlers[name]
        self.installed_callbacks = True

    def restore_callbacks(self, window: GlfwWindow) -> None:
        """Put back the handlers that were installed before install_callbacks()."""
        if not self.installed_callbacks:
            raise RuntimeError("callbacks not installed")
        if window is not self.window:
            raise ValueError("window is not the backend's window")
        for name in _CALLBACK_NAMES:
            prev = self._prev_callbacks.get(name)
            if prev is None:
                window.callbacks.pop(name, None)
            else:
                window.callbacks[name] = prev
        self._prev_callbacks.clear()
        self.installed_callbacks = False

    def set_callbacks_chain_for_all_windows(self, chain_for_all_windows: bool) -> None:
        self.callbacks_chain_for_all_windows = chain_for_all_windows

    def shutdown(self) -> None:
        """Detach from the window and the IO; raises if already shut down."""
        if not self._active or self.io.backend_platform_user_data is not self:
            raise RuntimeError("no platform backend to shut down, or already shut down")
        if self.installed_callbacks:
            self.restore_callbacks(self.window)
        self.mouse_cursors = {cursor: None for cursor in self.mouse_cursors}
        io = self.io
        io.backend_platform_name = None
        io.backend_platform_user_data = None
        io.backend_flags &= ~(
            BackendFlags.HAS_MOUSE_CURSORS
            | BackendFlags.HAS_SET_MOUSE_POS
            | BackendFlags.HAS_GAMEPAD
        )
        self._active = False


def _init(io: InputIO, window: GlfwWindow, install_callbacks: bool, client_api: ClientApi) -> GlfwBackend:
    if io.backend_platform_user_data is not None:
        raise RuntimeError("a platform backend is already initialized")
    backend = GlfwBackend(io, window, client_api)
    io.backend_platform_user_data = backend
    io.backend_platform_name = BACKEND_PLATFORM_NAME
    io.backend_flags |= BackendFlags.HAS_MOUSE_CURSORS | BackendFlags.HAS_SET_MOUSE_POS

    def set_clipboard_text(text: str) -> None:
        window.clipboard = text

    io.set_clipboard_text = set_clipboard_text
    io.get_clipboard_text = lambda: window.clipboard

    if install_callbacks:
        backend.install_callbacks(window)
    return backend


def init_for_opengl(io: InputIO, window: GlfwWindow, install_callbacks: bool = True) -> GlfwBackend:
    return _init(io, window, install_callbacks, ClientApi.OPENGL)


def init_for_vulkan(io: InputIO, window: GlfwWindow, install_callbacks: bool = True) -> GlfwBackend:
    return _init(io, window, install_callbacks, ClientApi.VULKAN)


def init_for_other(io: InputIO, window: GlfwWindow, install_callbacks: bool = True) -> GlfwBackend:
    return _init(io, window, install_callbacks, ClientApi.UNKNOWN)