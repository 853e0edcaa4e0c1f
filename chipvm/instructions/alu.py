"""CHIP-8 ALU operations (8xxx).

Each operation maps ``(vx, vy)`` to ``(result, flag)``. A flag of ``None``
leaves VF untouched. VF is written after VX so the flag wins when X is F.
"""

from typing import Optional

from chipvm import isa
from chipvm.config import Quirks
from chipvm.constants import FLAG_REGISTER
from chipvm.state import EmulatorState


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when no borrow."""
    return (vx - vy) & 0xFF, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when no borrow."""
    return (vy - vx) & 0xFF, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


ALU_OPERATIONS = {
    isa.SetVxToVy: alu_set,
    isa.OrVxWithVy: alu_or,
    isa.AndVxWithVy: alu_and,
    isa.XorVxWithVy: alu_xor,
    isa.AddVxWithVy: alu_add,
    isa.SubtractVxWithVy: alu_sub_xy,
    isa.Shift1RightVxWithVy: alu_shift_right,
    isa.SubtractVyWithVx: alu_sub_yx,
    isa.Shift1LeftVxWithVy: alu_shift_left,
}

SHIFTS = (isa.Shift1RightVxWithVy, isa.Shift1LeftVxWithVy)


def execute_alu_operation(state: EmulatorState, instruction: isa.Instruction, quirks: Quirks) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = int(state.V[instruction.vx])
    vy = int(state.V[instruction.vy])

    if isinstance(instruction, SHIFTS) and not quirks.shift_ignores_vy:
        vx = vy

    result, vf = ALU_OPERATIONS[type(instruction)](vx, vy)

    new_V = state.V.at[instruction.vx].set(result)
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    return state.replace(V=new_V)
