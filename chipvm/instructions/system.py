"""CHIP-8 system instructions (0x0xxx)."""

from chipvm import isa
from chipvm.config import Quirks
from chipvm.errors import UnsupportedInstruction
from chipvm.stack import pop
from chipvm.state import EmulatorState, clear_display


def no_op(state: EmulatorState, instruction: isa.Instruction, quirks: Quirks) -> EmulatorState:
    """No operation."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: isa.DisplayClear, quirks: Quirks) -> EmulatorState:
    """00E0 - Clear display."""
    return clear_display(state)


def execute_return(state: EmulatorState, instruction: isa.SubroutineReturn, quirks: Quirks) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)


def execute_machine_code(state: EmulatorState, instruction: isa.CallMachineCode, quirks: Quirks) -> EmulatorState:
    """0NNN - Machine code routines only exist on real hardware."""
    raise UnsupportedInstruction(instruction)
