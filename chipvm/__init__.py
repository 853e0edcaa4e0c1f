"""CHIP-8 virtual machine package."""

from chipvm.state import EmulatorState, create_state, reset, load, tick_timer
from chipvm.emulator import execute, load_rom, fetch
from chipvm.decode import decode
from chipvm.opcode import Opcode, split
from chipvm.config import Quirks, EmulatorConfig, load_config
from chipvm.machine import Chip8, Ready, WaitingForKey
from chipvm.errors import (
    Chip8Error, DecodeError, UnknownOpcode, ExecuteError, UnsupportedInstruction,
    InvalidKey, StackUnderflow, LoadError, RomTooLarge,
)
from chipvm.constants import *
from chipvm.rendering import display_to_rgb, display_to_text, create_color_scheme
from chipvm.keypad import KEY_MAP, key_for

__all__ = [
    "EmulatorState",
    "create_state",
    "reset",
    "load",
    "tick_timer",
    "fetch",
    "execute",
    "load_rom",
    "decode",
    "Opcode",
    "split",
    "Quirks",
    "EmulatorConfig",
    "load_config",
    "Chip8",
    "Ready",
    "WaitingForKey",
    "Chip8Error",
    "DecodeError",
    "UnknownOpcode",
    "ExecuteError",
    "UnsupportedInstruction",
    "InvalidKey",
    "StackUnderflow",
    "LoadError",
    "RomTooLarge",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "display_to_rgb",
    "display_to_text",
    "create_color_scheme",
    "KEY_MAP",
    "key_for",
]
