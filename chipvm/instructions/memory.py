"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from chipvm import isa
from chipvm.config import Quirks
from chipvm.state import EmulatorState


def execute_set(state: EmulatorState, instruction: isa.SetRegisterWithValue, quirks: Quirks) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.register].set(instruction.value))


def execute_add(state: EmulatorState, instruction: isa.AddValueToRegister, quirks: Quirks) -> EmulatorState:
    """7XNN - Add NN to VX, wrapping without carry."""
    result = (int(state.V[instruction.register]) + instruction.value) & 0xFF
    return state.replace(V=state.V.at[instruction.register].set(result))


def execute_set_index(state: EmulatorState, instruction: isa.SetIndexWithValue, quirks: Quirks) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.asarray(instruction.value, dtype=jnp.uint16))


def execute_random(state: EmulatorState, instruction: isa.SetVxToRandom, quirks: Quirks) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = int(jax.random.randint(subkey, shape=(), minval=0, maxval=256))
    return state.replace(V=state.V.at[instruction.register].set(random_value & instruction.mask), rng=key)
