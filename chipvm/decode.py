"""CHIP-8 instruction decoding."""

from chipvm import isa
from chipvm.errors import UnknownOpcode
from chipvm.opcode import Opcode, split


def decode_system(op: Opcode) -> isa.Instruction:
    """0x0xxx - Clear, return or machine code call."""
    if op.raw == 0x00E0:
        return isa.DisplayClear()
    if op.raw == 0x00EE:
        return isa.SubroutineReturn()
    return isa.CallMachineCode(op.nnn)


def decode_register_pair(constructor):
    """Factory for XY0 patterns where the low nibble must be zero."""
    def decode_pair(op: Opcode) -> isa.Instruction:
        if op.n != 0:
            raise UnknownOpcode(op.raw)
        return constructor(op.x, op.y)
    return decode_pair


ALU_OPERATIONS = {
    0x0: isa.SetVxToVy,
    0x1: isa.OrVxWithVy,
    0x2: isa.AndVxWithVy,
    0x3: isa.XorVxWithVy,
    0x4: isa.AddVxWithVy,
    0x5: isa.SubtractVxWithVy,
    0x6: isa.Shift1RightVxWithVy,
    0x7: isa.SubtractVyWithVx,
    0xE: isa.Shift1LeftVxWithVy,
}

KEY_OPERATIONS = {
    0x9E: isa.SkipIfKeyPressed,
    0xA1: isa.SkipIfKeyNotPressed,
}

MISC_OPERATIONS = {
    0x07: isa.GetDelayTimer,
    0x0A: isa.WaitForKey,
    0x15: isa.SetDelayTimer,
    0x18: isa.SetSoundTimer,
    0x1E: isa.AddVxToIndex,
    0x29: isa.SetIndexToFontCharacter,
    0x33: isa.StoreBcd,
    0x55: isa.StoreRegisters,
    0x65: isa.LoadRegisters,
}


def decode_alu(op: Opcode) -> isa.Instruction:
    """8XYN - ALU operations."""
    if op.n not in ALU_OPERATIONS:
        raise UnknownOpcode(op.raw)
    return ALU_OPERATIONS[op.n](op.x, op.y)


def decode_keypad(op: Opcode) -> isa.Instruction:
    """EXNN - Key state queries."""
    if op.nn not in KEY_OPERATIONS:
        raise UnknownOpcode(op.raw)
    return KEY_OPERATIONS[op.nn](op.x)


def decode_misc(op: Opcode) -> isa.Instruction:
    """FXNN - Timers, index and memory block operations."""
    if op.nn not in MISC_OPERATIONS:
        raise UnknownOpcode(op.raw)
    return MISC_OPERATIONS[op.nn](op.x)


# Indexed by the first nibble
DECODERS = [
    decode_system,
    lambda op: isa.Jump(op.nnn),
    lambda op: isa.SubroutineCall(op.nnn),
    lambda op: isa.SkipIfVxEqualsValue(op.x, op.nn),
    lambda op: isa.SkipIfVxNotEqualsValue(op.x, op.nn),
    decode_register_pair(isa.SkipIfVxEqualsVy),
    lambda op: isa.SetRegisterWithValue(op.x, op.nn),
    lambda op: isa.AddValueToRegister(op.x, op.nn),
    decode_alu,
    decode_register_pair(isa.SkipIfVxNotEqualsVy),
    lambda op: isa.SetIndexWithValue(op.nnn),
    lambda op: isa.JumpWithOffset(op.x, op.nnn),
    lambda op: isa.SetVxToRandom(op.x, op.nn),
    lambda op: isa.DisplayDraw(op.x, op.y, op.n),
    decode_keypad,
    decode_misc,
]


def decode(word: int) -> isa.Instruction:
    """Decode a 16-bit instruction word.

    Raises:
        UnknownOpcode: if the word matches no instruction pattern
    """
    op = split(word)
    return DECODERS[op.i](op)
