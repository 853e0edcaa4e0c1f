"""CHIP-8 machine controller.

:class:`Chip8` owns the machine state and the compatibility quirks, and adds
the one piece of state that lives outside the machine: whether execution is
blocked on a key. Drivers call :meth:`Chip8.step_instruction` at the
instruction rate and :meth:`Chip8.step_timer` at 60 Hz.
"""

from pathlib import Path
from typing import Optional, Union

import jax
from flax.struct import dataclass

from chipvm import isa
from chipvm.config import EmulatorConfig, Quirks
from chipvm.constants import NUM_KEYS, TIMER_FREQUENCY
from chipvm.decode import decode
from chipvm.emulator import execute, fetch
from chipvm.errors import ExecuteError, InvalidKey
from chipvm.logging import get_logger
from chipvm.state import EmulatorState, create_state, load, tick_timer

logger = get_logger("chipvm.machine")


@dataclass(frozen=True)
class Ready:
    """Instructions run normally."""


@dataclass(frozen=True)
class WaitingForKey:
    """Stepping is suspended until a key is released into ``register``."""
    register: int


class Chip8:
    """CHIP-8 emulator facade.

    Args:
        quirks: Compatibility toggles, fixed for the lifetime of the machine
        rng: PRNG key for the random instruction
        pause_on_delay_timer: Hold instruction stepping while the delay timer is non-zero
    """

    FREQUENCY_TIMER_UPDATE = TIMER_FREQUENCY

    def __init__(
        self,
        quirks: Quirks = Quirks(),
        *,
        rng: Optional[jax.Array] = None,
        pause_on_delay_timer: bool = True,
    ):
        self._quirks = quirks
        self._state = create_state(rng)
        self._execution_state = Ready()
        self.pause_on_delay_timer = pause_on_delay_timer
        self.instruction_count = 0

    @classmethod
    def from_config(cls, config: EmulatorConfig) -> "Chip8":
        """Build a machine from a runtime configuration."""
        return cls(
            config.build_quirks(),
            rng=jax.random.PRNGKey(config.seed),
            pause_on_delay_timer=config.pause_on_delay_timer,
        )

    @property
    def state(self) -> EmulatorState:
        return self._state

    @property
    def quirks(self) -> Quirks:
        return self._quirks

    @property
    def execution_state(self):
        return self._execution_state

    @property
    def waiting_for_key(self) -> bool:
        return isinstance(self._execution_state, WaitingForKey)

    @property
    def display(self):
        """Read-only framebuffer, ``display[y, x]``."""
        return self._state.display

    def load(self, rom: bytes):
        """Reset memory and load a ROM into RAM at 0x200.

        Raises:
            RomTooLarge: if the ROM does not fit; the machine is left untouched
        """
        self._state = load(self._state, rom)
        self._execution_state = Ready()
        self.instruction_count = 0
        logger.debug(f"Loaded {len(rom)} byte ROM")

    def load_file(self, path: Union[str, Path]):
        """Read a ROM file and load it."""
        self.load(Path(path).read_bytes())

    def _blocked(self) -> bool:
        if self.waiting_for_key:
            return True
        return self.pause_on_delay_timer and int(self._state.delay_timer) > 0

    def step_instruction(self) -> bool:
        """Perform one fetch-decode-execute cycle.

        Should be called at around 500-1000 Hz. Does nothing while waiting for a
        key, or while the delay timer runs if ``pause_on_delay_timer`` is set.

        Returns:
            Whether an instruction was executed

        Raises:
            DecodeError: if the fetched word is not an instruction
            ExecuteError: if the instruction could not run; the program counter
                has already moved past it
        """
        if self._blocked():
            return False

        self._state, word = fetch(self._state)
        instruction = decode(word)
        try:
            self._state = execute(self._state, instruction, self._quirks)
        except ExecuteError:
            logger.debug(f"{instruction.describe(self._quirks)} failed at 0x{(int(self._state.pc) - 2) & 0xFFFF:03X}")
            raise
        self.instruction_count += 1

        if isinstance(instruction, isa.WaitForKey):
            self._execution_state = WaitingForKey(instruction.register)
            logger.debug(f"Waiting for key into V{instruction.register:X}")
        return True

    def step_timer(self):
        """Count the delay and sound timers down. Call at 60 Hz."""
        self._state = tick_timer(self._state)

    def run(self, n: int) -> int:
        """Attempt ``n`` instruction steps, returning how many executed."""
        return sum(self.step_instruction() for _ in range(n))

    def _check_key(self, key: int):
        if not 0 <= key < NUM_KEYS:
            raise InvalidKey(key)

    def press_key(self, key: int):
        """Press a key by index (0x0-0xF)."""
        self._check_key(key)
        self._state = self._state.replace(keypad=self._state.keypad.at[key].set(True))

    def release_key(self, key: int):
        """Release a key by index (0x0-0xF), ending any wait for a key."""
        self._check_key(key)
        state = self._state.replace(keypad=self._state.keypad.at[key].set(False))

        if isinstance(self._execution_state, WaitingForKey):
            register = self._execution_state.register
            state = state.replace(V=state.V.at[register].set(key))
            self._execution_state = Ready()
            logger.debug(f"Key {key:X} released into V{register:X}")

        self._state = state
