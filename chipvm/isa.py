"""CHIP-8 instruction set.

One frozen dataclass per instruction. Register operands are register numbers
(0x0-0xF), not register values.
"""

import dataclasses

from flax.struct import dataclass

from chipvm.config import Quirks


class Instruction:
    """Base class for decoded instructions."""

    _format = ""

    def describe(self, quirks: Quirks = Quirks()) -> str:
        """Assembly-style text for the instruction as run under ``quirks``."""
        return self._format.format(**dataclasses.asdict(self))

    @property
    def mnemonic(self) -> str:
        """Assembly-style text with default quirks, e.g. ``DRW V4, V6, 2``."""
        return self.describe()

    def __str__(self) -> str:
        return self.mnemonic


# System (0x0)

@dataclass(frozen=True)
class CallMachineCode(Instruction):
    """0NNN - Call machine code routine at NNN."""
    address: int
    _format = "SYS {address:03X}"


@dataclass(frozen=True)
class DisplayClear(Instruction):
    """00E0 - Clear display."""
    _format = "CLS"


@dataclass(frozen=True)
class SubroutineReturn(Instruction):
    """00EE - Return from subroutine."""
    _format = "RET"


# Control flow

@dataclass(frozen=True)
class Jump(Instruction):
    """1NNN - Jump to NNN."""
    address: int
    _format = "JP {address:03X}"


@dataclass(frozen=True)
class SubroutineCall(Instruction):
    """2NNN - Call subroutine at NNN."""
    address: int
    _format = "CALL {address:03X}"


@dataclass(frozen=True)
class SkipIfVxEqualsValue(Instruction):
    """3XNN - Skip next instruction if VX == NN."""
    register: int
    value: int
    _format = "SE V{register:X}, {value:02X}"


@dataclass(frozen=True)
class SkipIfVxNotEqualsValue(Instruction):
    """4XNN - Skip next instruction if VX != NN."""
    register: int
    value: int
    _format = "SNE V{register:X}, {value:02X}"


@dataclass(frozen=True)
class SkipIfVxEqualsVy(Instruction):
    """5XY0 - Skip next instruction if VX == VY."""
    vx: int
    vy: int
    _format = "SE V{vx:X}, V{vy:X}"


@dataclass(frozen=True)
class SkipIfVxNotEqualsVy(Instruction):
    """9XY0 - Skip next instruction if VX != VY."""
    vx: int
    vy: int
    _format = "SNE V{vx:X}, V{vy:X}"


@dataclass(frozen=True)
class JumpWithOffset(Instruction):
    """BNNN - Jump to NNN + V0 (or + VX, see Quirks.jump_reads_from_vx)."""
    register: int
    address: int
    _format = "JP V{base:X}, {address:03X}"

    def base_register(self, quirks: Quirks) -> int:
        """Register whose value is added to the address."""
        return self.register if quirks.jump_reads_from_vx else 0

    def describe(self, quirks: Quirks = Quirks()) -> str:
        return self._format.format(base=self.base_register(quirks), address=self.address)


# Registers and memory

@dataclass(frozen=True)
class SetRegisterWithValue(Instruction):
    """6XNN - VX = NN."""
    register: int
    value: int
    _format = "LD V{register:X}, {value:02X}"


@dataclass(frozen=True)
class AddValueToRegister(Instruction):
    """7XNN - VX += NN, no carry."""
    register: int
    value: int
    _format = "ADD V{register:X}, {value:02X}"


@dataclass(frozen=True)
class SetIndexWithValue(Instruction):
    """ANNN - I = NNN."""
    value: int
    _format = "LD I, {value:03X}"


@dataclass(frozen=True)
class SetVxToRandom(Instruction):
    """CXNN - VX = random byte & NN."""
    register: int
    mask: int
    _format = "RND V{register:X}, {mask:02X}"


# ALU (0x8)

@dataclass(frozen=True)
class SetVxToVy(Instruction):
    """8XY0 - VX = VY."""
    vx: int
    vy: int
    _format = "LD V{vx:X}, V{vy:X}"


@dataclass(frozen=True)
class OrVxWithVy(Instruction):
    """8XY1 - VX |= VY."""
    vx: int
    vy: int
    _format = "OR V{vx:X}, V{vy:X}"


@dataclass(frozen=True)
class AndVxWithVy(Instruction):
    """8XY2 - VX &= VY."""
    vx: int
    vy: int
    _format = "AND V{vx:X}, V{vy:X}"


@dataclass(frozen=True)
class XorVxWithVy(Instruction):
    """8XY3 - VX ^= VY."""
    vx: int
    vy: int
    _format = "XOR V{vx:X}, V{vy:X}"


@dataclass(frozen=True)
class AddVxWithVy(Instruction):
    """8XY4 - VX += VY, VF = carry."""
    vx: int
    vy: int
    _format = "ADD V{vx:X}, V{vy:X}"


@dataclass(frozen=True)
class SubtractVxWithVy(Instruction):
    """8XY5 - VX -= VY, VF = not borrow."""
    vx: int
    vy: int
    _format = "SUB V{vx:X}, V{vy:X}"


@dataclass(frozen=True)
class Shift1RightVxWithVy(Instruction):
    """8XY6 - VX >>= 1, VF = bit shifted out."""
    vx: int
    vy: int
    _format = "SHR V{vx:X}, V{vy:X}"


@dataclass(frozen=True)
class SubtractVyWithVx(Instruction):
    """8XY7 - VX = VY - VX, VF = not borrow."""
    vx: int
    vy: int
    _format = "SUBN V{vx:X}, V{vy:X}"


@dataclass(frozen=True)
class Shift1LeftVxWithVy(Instruction):
    """8XYE - VX <<= 1, VF = bit shifted out."""
    vx: int
    vy: int
    _format = "SHL V{vx:X}, V{vy:X}"


# Display

@dataclass(frozen=True)
class DisplayDraw(Instruction):
    """DXYN - Draw N-row sprite at (VX, VY), VF = collision."""
    vx: int
    vy: int
    height: int
    _format = "DRW V{vx:X}, V{vy:X}, {height:X}"


# Keypad (0xE)

@dataclass(frozen=True)
class SkipIfKeyPressed(Instruction):
    """EX9E - Skip next instruction if key VX is pressed."""
    register: int
    _format = "SKP V{register:X}"


@dataclass(frozen=True)
class SkipIfKeyNotPressed(Instruction):
    """EXA1 - Skip next instruction if key VX is not pressed."""
    register: int
    _format = "SKNP V{register:X}"


# Misc (0xF)

@dataclass(frozen=True)
class GetDelayTimer(Instruction):
    """FX07 - VX = delay timer."""
    register: int
    _format = "LD V{register:X}, DT"


@dataclass(frozen=True)
class WaitForKey(Instruction):
    """FX0A - Block until a key is released, store it in VX."""
    register: int
    _format = "LD V{register:X}, K"


@dataclass(frozen=True)
class SetDelayTimer(Instruction):
    """FX15 - Delay timer = VX."""
    register: int
    _format = "LD DT, V{register:X}"


@dataclass(frozen=True)
class SetSoundTimer(Instruction):
    """FX18 - Sound timer = VX."""
    register: int
    _format = "LD ST, V{register:X}"


@dataclass(frozen=True)
class AddVxToIndex(Instruction):
    """FX1E - I += VX."""
    register: int
    _format = "ADD I, V{register:X}"


@dataclass(frozen=True)
class SetIndexToFontCharacter(Instruction):
    """FX29 - I = address of font sprite for digit VX."""
    register: int
    _format = "LD F, V{register:X}"


@dataclass(frozen=True)
class StoreBcd(Instruction):
    """FX33 - Store BCD of VX at I, I+1, I+2."""
    register: int
    _format = "LD B, V{register:X}"


@dataclass(frozen=True)
class StoreRegisters(Instruction):
    """FX55 - Store V0..VX at I."""
    register: int
    _format = "LD [I], V{register:X}"


@dataclass(frozen=True)
class LoadRegisters(Instruction):
    """FX65 - Load V0..VX from I."""
    register: int
    _format = "LD V{register:X}, [I]"
