"""Per-frame updates of display, timing, mouse and gamepad state."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from .glfw_backend import (
    CURSOR_DISABLED,
    CURSOR_HIDDEN,
    CURSOR_NORMAL,
    BackendFlags,
    ConfigFlags,
    GlfwBackend,
    MouseCursor,
)
from .glfw_keys import ImGuiKey

_DEFAULT_DELTA_TIME = 1.0 / 60.0
_MIN_TIME_STEP = 0.00001
_ANALOG_THRESHOLD = 0.10

_clock_start = time.monotonic()


class _Button(IntEnum):
    A = 0
    B = 1
    X = 2
    Y = 3
    LEFT_BUMPER = 4
    RIGHT_BUMPER = 5
    BACK = 6
    START = 7
    GUIDE = 8
    LEFT_THUMB = 9
    RIGHT_THUMB = 10
    DPAD_UP = 11
    DPAD_RIGHT = 12
    DPAD_DOWN = 13
    DPAD_LEFT = 14


class _Axis(IntEnum):
    LEFT_X = 0
    LEFT_Y = 1
    RIGHT_X = 2
    RIGHT_Y = 3
    LEFT_TRIGGER = 4
    RIGHT_TRIGGER = 5


_BUTTON_COUNT = len(_Button)
_AXIS_COUNT = len(_Axis)

_BUTTON_MAP = (
    (ImGuiKey.GAMEPAD_START, _Button.START),
    (ImGuiKey.GAMEPAD_BACK, _Button.BACK),
    (ImGuiKey.GAMEPAD_FACE_LEFT, _Button.X),
    (ImGuiKey.GAMEPAD_FACE_RIGHT, _Button.B),
    (ImGuiKey.GAMEPAD_FACE_UP, _Button.Y),
    (ImGuiKey.GAMEPAD_FACE_DOWN, _Button.A),
    (ImGuiKey.GAMEPAD_DPAD_LEFT, _Button.DPAD_LEFT),
    (ImGuiKey.GAMEPAD_DPAD_RIGHT, _Button.DPAD_RIGHT),
    (ImGuiKey.GAMEPAD_DPAD_UP, _Button.DPAD_UP),
    (ImGuiKey.GAMEPAD_DPAD_DOWN, _Button.DPAD_DOWN),
    (ImGuiKey.GAMEPAD_L1, _Button.LEFT_BUMPER),
    (ImGuiKey.GAMEPAD_R1, _Button.RIGHT_BUMPER),
    (ImGuiKey.GAMEPAD_L3, _Button.LEFT_THUMB),
    (ImGuiKey.GAMEPAD_R3, _Button.RIGHT_THUMB),
)

_ANALOG_MAP = (
    (ImGuiKey.GAMEPAD_L2, _Axis.LEFT_TRIGGER, -0.75, 1.0),
    (ImGuiKey.GAMEPAD_R2, _Axis.RIGHT_TRIGGER, -0.75, 1.0),
    (ImGuiKey.GAMEPAD_L_STICK_LEFT, _Axis.LEFT_X, -0.25, -1.0),
    (ImGuiKey.GAMEPAD_L_STICK_RIGHT, _Axis.LEFT_X, 0.25, 1.0),
    (ImGuiKey.GAMEPAD_L_STICK_UP, _Axis.LEFT_Y, -0.25, -1.0),
    (ImGuiKey.GAMEPAD_L_STICK_DOWN, _Axis.LEFT_Y, 0.25, 1.0),
    (ImGuiKey.GAMEPAD_R_STICK_LEFT, _Axis.RIGHT_X, -0.25, -1.0),
    (ImGuiKey.GAMEPAD_R_STICK_RIGHT, _Axis.RIGHT_X, 0.25, 1.0),
    (ImGuiKey.GAMEPAD_R_STICK_UP, _Axis.RIGHT_Y, -0.25, -1.0),
    (ImGuiKey.GAMEPAD_R_STICK_DOWN, _Axis.RIGHT_Y, 0.25, 1.0),
)


def _default_axes() -> tuple[float, ...]:
    # Triggers rest at -1.0, sticks at the centre.
    return (0.0, 0.0, 0.0, 0.0, -1.0, -1.0)


@dataclass(frozen=True)
class GamepadState:
    """A snapshot of the first joystick in the standard gamepad layout.

    ``buttons`` holds 15 press states (non-zero is pressed) and ``axes`` six
    values in -1.0..1.0, both in GLFW gamepad order.
    """

    buttons: tuple[int, ...] = field(default_factory=lambda: (0,) * _BUTTON_COUNT)
    axes: tuple[float, ...] = field(default_factory=_default_axes)

    def __post_init__(self) -> None:
        object.__setattr__(self, "buttons", tuple(self.buttons))
        object.__setattr__(self, "axes", tuple(float(a) for a in self.axes))
        if len(self.buttons) != _BUTTON_COUNT:
            raise ValueError(f"expected {_BUTTON_COUNT} buttons, got {len(self.buttons)}")
        if len(self.axes) != _AXIS_COUNT:
            raise ValueError(f"expected {_AXIS_COUNT} axes, got {len(self.axes)}")


def saturate(v: float) -> float:
    """Clamp ``v`` to the range 0.0..1.0."""
    if v < 0.0:
        return 0.0
    if v > 1.0:
        return 1.0
    return v


def _require_active(backend: GlfwBackend) -> None:
    if backend.io.backend_platform_user_data is not backend:
        raise RuntimeError("platform backend is not initialized")


def update_mouse_data(backend: GlfwBackend) -> None:
    """Sync the mouse position between the focused window and the IO."""
    io = backend.io
    window = backend.window
    if not window.focused:
        return
    if io.want_set_mouse_pos:
        window.cursor_pos = (float(io.mouse_pos[0]), float(io.mouse_pos[1]))
    if backend.mouse_window is None:
        x, y = window.cursor_pos
        backend.last_valid_mouse_pos = (float(x), float(y))
        io.add_mouse_pos_event(float(x), float(y))


def update_mouse_cursor(backend: GlfwBackend, imgui_cursor: MouseCursor) -> None:
    """Show, hide or reshape the OS cursor to match ``imgui_cursor``."""
    io = backend.io
    window = backend.window
    if ConfigFlags.NO_MOUSE_CURSOR_CHANGE in io.config_flags or window.cursor_mode == CURSOR_DISABLED:
        return
    if imgui_cursor == MouseCursor.NONE or io.mouse_draw_cursor:
        window.cursor_mode = CURSOR_HIDDEN
        return
    shape = backend.mouse_cursors.get(MouseCursor(imgui_cursor))
    window.cursor = shape or backend.mouse_cursors.get(MouseCursor.ARROW)
    window.cursor_mode = CURSOR_NORMAL


def update_gamepads(backend: GlfwBackend, gamepad: Optional[GamepadState]) -> None:
    """Feed gamepad buttons and axes as key events when gamepad navigation is on.

    ``gamepad`` is None when no gamepad is connected.
    """
    io = backend.io
    if ConfigFlags.NAV_ENABLE_GAMEPAD not in io.config_flags:
        return
    io.backend_flags &= ~BackendFlags.HAS_GAMEPAD
    if gamepad is None:
        return
    io.backend_flags |= BackendFlags.HAS_GAMEPAD

    for key, button in _BUTTON_MAP:
        io.add_key_event(key, gamepad.buttons[button] != 0)
    for key, axis, v0, v1 in _ANALOG_MAP:
        v = (gamepad.axes[axis] - v0) / (v1 - v0)
        io.add_key_analog_event(key, v > _ANALOG_THRESHOLD, saturate(v))


def _current_time() -> float:
    return time.monotonic() - _clock_start


def new_frame(
    backend: GlfwBackend,
    imgui_cursor: MouseCursor = MouseCursor.ARROW,
    gamepad: Optional[GamepadState] = None,
) -> None:
    """Prepare the IO for a new frame: display size, time step, mouse and gamepad."""
    _require_active(backend)
    io = backend.io
    window = backend.window

    w, h = window.size
    display_w, display_h = window.framebuffer_size
    io.display_size = (float(w), float(h))
    if w > 0 and h > 0:
        io.display_framebuffer_scale = (display_w / w, display_h / h)

    current_time = _current_time()
    if current_time <= backend.time:
        current_time = backend.time + _MIN_TIME_STEP
    io.delta_time = current_time - backend.time if backend.time > 0.0 else _DEFAULT_DELTA_TIME
    backend.time = current_time

    update_mouse_data(backend)
    update_mouse_cursor(backend, imgui_cursor)
    update_gamepads(backend, gamepad)