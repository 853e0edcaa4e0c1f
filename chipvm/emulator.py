"""Main CHIP-8 emulator execution engine."""

from pathlib import Path
from typing import Union

from chipvm import isa
from chipvm.config import Quirks
from chipvm.constants import MEMORY_SIZE
from chipvm.opcode import pack_u16
from chipvm.state import EmulatorState, increment_pc, load
from chipvm.instructions.system import no_op, execute_clear_screen, execute_return, execute_machine_code
from chipvm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from chipvm.instructions.alu import ALU_OPERATIONS, execute_alu_operation
from chipvm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipvm.instructions.display import execute_display
from chipvm.instructions.misc import (
    execute_get_delay_timer, execute_set_delay_timer, execute_set_sound_timer,
    execute_add_to_index, execute_font_character, execute_bcd_conversion,
    execute_store_registers, execute_load_registers
)


EXECUTORS = {
    isa.CallMachineCode: execute_machine_code,
    isa.DisplayClear: execute_clear_screen,
    isa.SubroutineReturn: execute_return,
    isa.Jump: execute_jump,
    isa.SubroutineCall: execute_call,
    isa.SkipIfVxEqualsValue: execute_skip_if_equal_immediate,
    isa.SkipIfVxNotEqualsValue: execute_skip_if_not_equal_immediate,
    isa.SkipIfVxEqualsVy: execute_skip_if_equal_register,
    isa.SetRegisterWithValue: execute_set,
    isa.AddValueToRegister: execute_add,
    **{alu_instruction: execute_alu_operation for alu_instruction in ALU_OPERATIONS},
    isa.SkipIfVxNotEqualsVy: execute_skip_if_not_equal_register,
    isa.SetIndexWithValue: execute_set_index,
    isa.JumpWithOffset: execute_jump_with_offset,
    isa.SetVxToRandom: execute_random,
    isa.DisplayDraw: execute_display,
    isa.SkipIfKeyPressed: execute_skip_if_key,
    isa.SkipIfKeyNotPressed: execute_skip_if_not_key,
    isa.GetDelayTimer: execute_get_delay_timer,
    # The controller owns the key wait, the machine state is left alone
    isa.WaitForKey: no_op,
    isa.SetDelayTimer: execute_set_delay_timer,
    isa.SetSoundTimer: execute_set_sound_timer,
    isa.AddVxToIndex: execute_add_to_index,
    isa.SetIndexToFontCharacter: execute_font_character,
    isa.StoreBcd: execute_bcd_conversion,
    isa.StoreRegisters: execute_store_registers,
    isa.LoadRegisters: execute_load_registers,
}


def execute(state: EmulatorState, instruction: isa.Instruction, quirks: Quirks = Quirks()) -> EmulatorState:
    """Execute single decoded CHIP-8 instruction.

    Raises:
        ExecuteError: if the instruction cannot run against this state
    """
    return EXECUTORS[type(instruction)](state, instruction, quirks)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance the program counter."""
    pc = int(state.pc) % MEMORY_SIZE
    instruction = pack_u16(state.memory[pc], state.memory[(pc + 1) % MEMORY_SIZE])
    return increment_pc(state), instruction


def load_rom(state: EmulatorState, filename: Union[str, Path]) -> EmulatorState:
    """Load ROM file into CHIP-8 memory starting at 0x200."""
    return load(state, Path(filename).read_bytes())
