"""CHIP-8 emulator state structures."""

from typing import Optional

import jax
import jax.numpy as jnp
import numpy as np
from flax.struct import dataclass, PyTreeNode, field

from chipvm.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, SCREEN_WIDTH, SCREEN_HEIGHT,
    NUM_REGISTERS, NUM_KEYS, MAX_ROM_SIZE,
)
from chipvm.errors import RomTooLarge


@dataclass(frozen=True)
class StackState:
    """Stack of return addresses for subroutine calls, deepest call last."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(0, dtype=jnp.uint16))

    @property
    def depth(self) -> int:
        return self.data.shape[0]


class EmulatorState(PyTreeNode):
    """Main CHIP-8 machine state.

    The display is row-major: ``display[y, x]``. ``V[0xF]`` doubles as the
    carry/borrow/collision flag.
    """
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = field(
        default_factory=lambda: jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_)
    )
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))


def create_state(rng: Optional[jax.Array] = None) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    state = EmulatorState(rng)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA))


def reset(state: EmulatorState) -> EmulatorState:
    """Reset everything but the random key to power-on values."""
    return create_state(state.rng)


def load(state: EmulatorState, rom: bytes) -> EmulatorState:
    """Reset the machine and copy ROM data into memory starting at 0x200."""
    if len(rom) > MAX_ROM_SIZE:
        raise RomTooLarge(len(rom), MAX_ROM_SIZE)
    state = reset(state)
    rom_array = jnp.asarray(np.frombuffer(bytes(rom), dtype=np.uint8))
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom)].set(rom_array)
    return state.replace(memory=new_memory)


def increment_pc(state: EmulatorState) -> EmulatorState:
    """Advance the program counter past one instruction."""
    return state.replace(pc=jnp.astype(state.pc + 2, jnp.uint16))


def tick_timer(state: EmulatorState) -> EmulatorState:
    """Count both timers down by one, stopping at zero. Call at 60 Hz."""
    def _tick(timer):
        return jnp.where(timer > 0, timer - 1, timer).astype(jnp.uint8)

    return state.replace(delay_timer=_tick(state.delay_timer), sound_timer=_tick(state.sound_timer))


def clear_display(state: EmulatorState) -> EmulatorState:
    """Turn every pixel off."""
    return state.replace(display=jnp.zeros_like(state.display))


def sound_active(state: EmulatorState) -> bool:
    """Whether the buzzer should currently sound."""
    return bool(state.sound_timer > 0)
