"""Standard NES joypad behind the $4016/$4017 shift register."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Hashable, Sequence


class Button(IntEnum):
    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3
    A = 4
    B = 5
    SELECT = 6
    START = 7


TOTAL_BUTTONS = len(Button)
_DEFAULT_KEY = "A"


class Controller:
    """Latches key states on strobe and shifts them out one bit per read."""

    def __init__(self, is_pressed: Callable[[Hashable], bool]) -> None:
        self._is_pressed = is_pressed
        self._strobe = False
        self._key_states = 0
        self.key_bindings: list[Hashable] = [_DEFAULT_KEY] * TOTAL_BUTTONS

    def set_key_bindings(self, keys: Sequence[Hashable]) -> None:
        self.key_bindings = list(keys)

    def read(self) -> int:
        if self._strobe:
            bit = int(bool(self._is_pressed(self.key_bindings[Button.A])))
        else:
            bit = self._key_states & 1
            self._key_states >>= 1
        return bit | 0x40

    def strobe(self, value: int) -> None:
        self._strobe = bool(value & 1)
        if not self._strobe:
            self._key_states = 0
            for shift, button in enumerate(range(Button.A, TOTAL_BUTTONS)):
                if self._is_pressed(self.key_bindings[button]):
                    self._key_states |= 1 << shift