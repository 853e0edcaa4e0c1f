"""Keyboard to CHIP-8 keypad mapping.

The hexadecimal keypad is laid out on the left of a QWERTY keyboard::

    1 2 3 C        1 2 3 4
    4 5 6 D   <-   Q W E R
    7 8 9 E        A S D F
    A 0 B F        Z X C V
"""

from typing import Optional

KEY_MAP = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}


def key_for(char: str) -> Optional[int]:
    """Keypad index for a keyboard character, or None if it is not mapped."""
    return KEY_MAP.get(char.lower())
