"""CHIP-8 error taxonomy.

Every failure the core can report is a :class:`Chip8Error`. Decoding failures,
execution failures and ROM loading failures each have their own branch so a
driver can decide whether to halt, skip the cycle or just report.
"""


class Chip8Error(Exception):
    """Base class for all emulator errors."""


class DecodeError(Chip8Error):
    """Raised when an instruction word cannot be decoded."""


class UnknownOpcode(DecodeError):
    """No instruction pattern matches the opcode."""

    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"unknown opcode 0x{opcode:04X}")


class ExecuteError(Chip8Error):
    """Raised when a decoded instruction cannot be executed."""


class UnsupportedInstruction(ExecuteError):
    """The instruction is recognised but the emulator does not run it."""

    def __init__(self, instruction):
        self.instruction = instruction
        super().__init__(f"unsupported instruction {instruction.mnemonic}")


class InvalidKey(ExecuteError):
    """A key index outside 0x0-0xF was used."""

    def __init__(self, key: int):
        self.key = key
        super().__init__(f"invalid key 0x{key:X}, expected 0x0-0xF")


class StackUnderflow(ExecuteError):
    """Subroutine return with an empty call stack."""

    def __init__(self):
        super().__init__("return with empty call stack")


class LoadError(Chip8Error):
    """Raised when a ROM cannot be loaded."""


class RomTooLarge(LoadError):
    """The ROM does not fit between the program start and the end of RAM."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"ROM is {size} bytes, only {capacity} bytes available")
