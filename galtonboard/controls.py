"""Debounced push buttons: one drops balls (and repeats while held), one flips views."""

from __future__ import annotations

from enum import Enum

from .simulation import GaltonBoard, View

BUTTON_A_PIN = 5
BUTTON_B_PIN = 6
DEBOUNCE_US = 150 * 1000
REPEAT_INTERVAL_US = 100 * 1000

_MASK32 = 0xFFFFFFFF


def _elapsed_signed(now: int, then: int) -> int:
    """Difference of two 32-bit microsecond stamps, read as a signed value."""
    diff = (now - then) & _MASK32
    return diff - (1 << 32) if diff >= 1 << 31 else diff


class Edge(Enum):
    """A button line changing level."""

    FALL = "fall"
    RISE = "rise"


class Buttons:
    """Button state fed by edge events and consumed once per frame."""

    def __init__(self) -> None:
        self.last_drop_press = 0
        self.last_toggle_press = 0
        self.drop_pressed = False
        self.drop_held = False
        self.toggle_pressed = False
        self.release_watch = False
        self.last_repeat = 0

    def on_edge(self, gpio: int, edge: Edge, now_us: int) -> bool:
        """Record an edge on a button pin; True when it changed the state."""
        now_us &= _MASK32
        if gpio == BUTTON_B_PIN:
            if edge is Edge.FALL:
                if (
                    _elapsed_signed(now_us, self.last_drop_press) > DEBOUNCE_US
                    or self.last_drop_press == 0
                ):
                    self.drop_pressed = True
                    self.drop_held = True
                    self.last_drop_press = now_us
                    self.release_watch = True
                    return True
                return False
            if self.release_watch:
                self.drop_held = False
                self.release_watch = False
                return True
            return False
        if gpio == BUTTON_A_PIN and edge is Edge.FALL:
            if (
                _elapsed_signed(now_us, self.last_toggle_press) > DEBOUNCE_US
                or self.last_toggle_press == 0
            ):
                self.toggle_pressed = True
                self.last_toggle_press = now_us
                return True
        return False

    def handle(self, board: GaltonBoard, now_us: int) -> None:
        """Apply pending presses to the board, repeating drops while held."""
        now_us &= _MASK32
        if self.drop_pressed:
            board.add_ball()
            self.drop_pressed = False
        if self.drop_held and board.view is View.SIMULATION:
            if (now_us - self.last_repeat) & _MASK32 > REPEAT_INTERVAL_US:
                board.add_ball()
                self.last_repeat = now_us
        if self.toggle_pressed:
            board.toggle_view()
            self.toggle_pressed = False