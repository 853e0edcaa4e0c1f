"""Compatibility quirks and runtime configuration."""

import dataclasses
from pathlib import Path
from typing import Optional, Sequence, Union

from flax.struct import dataclass
from omegaconf import OmegaConf


@dataclass(frozen=True)
class Quirks:
    """Selects between original-interpreter and modern behavior for four instruction families.

    Attributes:
        shift_ignores_vy: 8XY6/8XYE shift VX in place instead of copying VY into VX first
        jump_reads_from_vx: BNNN adds VX (X = high nibble of NNN) instead of V0
        add_to_index_stores_overflow: FX1E sets VF when I goes past 0xFFF
        store_load_modifies_i: FX55/FX65 leave I pointing past the last register
    """
    shift_ignores_vy: bool = True
    jump_reads_from_vx: bool = False
    add_to_index_stores_overflow: bool = True
    store_load_modifies_i: bool = False

    @classmethod
    def modern(cls) -> "Quirks":
        """Behavior of most modern interpreters."""
        return cls()

    @classmethod
    def legacy(cls) -> "Quirks":
        """Behavior of the original COSMAC VIP interpreter."""
        return cls(
            shift_ignores_vy=False,
            jump_reads_from_vx=False,
            add_to_index_stores_overflow=False,
            store_load_modifies_i=True,
        )


@dataclasses.dataclass
class QuirksConfig:
    shift_ignores_vy: bool = True
    jump_reads_from_vx: bool = False
    add_to_index_stores_overflow: bool = True
    store_load_modifies_i: bool = False


@dataclasses.dataclass
class EmulatorConfig:
    """Settings for a machine and the loop driving it.

    Attributes:
        instruction_frequency: Instructions executed per second
        timer_frequency: Timer ticks per second
        seed: Seed for the random instruction
        pause_on_delay_timer: Hold instruction stepping while the delay timer is running
        color_scheme: Palette name used when rendering
        log_level: Console log level
        quirks: Compatibility toggles
    """
    instruction_frequency: int = 700
    timer_frequency: int = 60
    seed: int = 0
    pause_on_delay_timer: bool = True
    color_scheme: str = "classic"
    log_level: str = "INFO"
    quirks: QuirksConfig = dataclasses.field(default_factory=QuirksConfig)

    def build_quirks(self) -> Quirks:
        return Quirks(**dataclasses.asdict(self.quirks))


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Sequence[str] = (),
) -> EmulatorConfig:
    """Build a config from defaults, an optional YAML file and dotlist overrides.

    Args:
        path: YAML file whose keys override the defaults
        overrides: Entries like ``"quirks.shift_ignores_vy=false"``, applied last

    Returns:
        Validated EmulatorConfig
    """
    cfg = OmegaConf.structured(EmulatorConfig)
    if path is not None:
        cfg = OmegaConf.merge(cfg, OmegaConf.load(path))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    return OmegaConf.to_object(cfg)
