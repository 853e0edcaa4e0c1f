"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from chipvm import isa
from chipvm.config import Quirks
from chipvm.constants import ADDRESS_MASK, NUM_KEYS
from chipvm.errors import InvalidKey
from chipvm.stack import push
from chipvm.state import EmulatorState, increment_pc


def execute_jump(state: EmulatorState, instruction: isa.Jump, quirks: Quirks) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.asarray(instruction.address, dtype=jnp.uint16))


def execute_call(state: EmulatorState, instruction: isa.SubroutineCall, quirks: Quirks) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return state.replace(pc=jnp.asarray(instruction.address, dtype=jnp.uint16))


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: isa.Instruction, quirks: Quirks) -> EmulatorState:
        if condition_fn(state, instruction):
            return increment_pc(state)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.register] == inst.value
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.register] != inst.value
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.vx] == state.V[inst.vy]
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.vx] != state.V[inst.vy]
)


def execute_jump_with_offset(state: EmulatorState, instruction: isa.JumpWithOffset, quirks: Quirks) -> EmulatorState:
    """BNNN - Jump to NNN + V0, or NNN + VX when jump_reads_from_vx is set."""
    base = state.V[instruction.base_register(quirks)]
    jump_address = (instruction.address + int(base)) & ADDRESS_MASK
    return state.replace(pc=jnp.asarray(jump_address, dtype=jnp.uint16))


def _key_pressed(state: EmulatorState, register: int) -> bool:
    key = int(state.V[register])
    if key >= NUM_KEYS:
        raise InvalidKey(key)
    return bool(state.keypad[key])


execute_skip_if_key = make_skip_instruction(
    lambda state, inst: _key_pressed(state, inst.register)
)

execute_skip_if_not_key = make_skip_instruction(
    lambda state, inst: not _key_pressed(state, inst.register)
)
