"""CHIP-8 miscellaneous instructions (Fxxx).

Block reads and writes at I wrap around the end of memory.
"""

import jax.numpy as jnp
from chipvm import isa
from chipvm.config import Quirks
from chipvm.constants import FONT_START, FONT_CHAR_SIZE, FLAG_REGISTER, INDEX_MASK, INDEX_OVERFLOW, MEMORY_SIZE
from chipvm.state import EmulatorState


def execute_get_delay_timer(state: EmulatorState, instruction: isa.GetDelayTimer, quirks: Quirks) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.register].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: isa.SetDelayTimer, quirks: Quirks) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.register])


def execute_set_sound_timer(state: EmulatorState, instruction: isa.SetSoundTimer, quirks: Quirks) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.register])


def execute_add_to_index(state: EmulatorState, instruction: isa.AddVxToIndex, quirks: Quirks) -> EmulatorState:
    """FX1E - Add VX to I register."""
    new_i = int(state.I) + int(state.V[instruction.register])
    state = state.replace(I=jnp.asarray(new_i & INDEX_MASK, dtype=jnp.uint16))
    if quirks.add_to_index_stores_overflow:
        state = state.replace(V=state.V.at[FLAG_REGISTER].set(int(new_i >= INDEX_OVERFLOW)))
    return state


def execute_font_character(state: EmulatorState, instruction: isa.SetIndexToFontCharacter, quirks: Quirks) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + (int(state.V[instruction.register]) & 0xF) * FONT_CHAR_SIZE
    return state.replace(I=jnp.asarray(font_address, dtype=jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: isa.StoreBcd, quirks: Quirks) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.register])

    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    indices = (jnp.arange(3) + int(state.I)) % MEMORY_SIZE
    return state.replace(memory=state.memory.at[indices].set(digits))


def execute_store_registers(state: EmulatorState, instruction: isa.StoreRegisters, quirks: Quirks) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.register + 1
    indices = (jnp.arange(count) + int(state.I)) % MEMORY_SIZE
    state = state.replace(memory=state.memory.at[indices].set(state.V[:count]))

    if quirks.store_load_modifies_i:
        return state.replace(I=jnp.astype(state.I + count, jnp.uint16))
    return state


def execute_load_registers(state: EmulatorState, instruction: isa.LoadRegisters, quirks: Quirks) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.register + 1
    indices = (jnp.arange(count) + int(state.I)) % MEMORY_SIZE
    state = state.replace(V=state.V.at[:count].set(state.memory[indices]))

    if quirks.store_load_modifies_i:
        return state.replace(I=jnp.astype(state.I + count, jnp.uint16))
    return state
