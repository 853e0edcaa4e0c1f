"""Run a CHIP-8 ROM headless and print the final screen.

    python -m chipvm ROM [--frames N] [--config FILE] [--set key=value ...]
"""

import argparse
import dataclasses
import sys
from typing import Optional, Sequence

from chipvm.config import load_config
from chipvm.driver import run_headless
from chipvm.errors import Chip8Error
from chipvm.logging import RunLogger, set_log_level
from chipvm.machine import Chip8
from chipvm.rendering import display_to_text, save_screenshot


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chipvm",
        description="Run a CHIP-8 ROM without a display and print the final screen",
    )
    parser.add_argument("rom", type=str, help="Path to the ROM file")
    parser.add_argument(
        "--frames",
        type=int,
        default=600,
        help="Number of 60 Hz frames to emulate (default: 600)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML config file (default: built-in defaults)",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a config value, e.g. quirks.shift_ignores_vy=false",
    )
    parser.add_argument(
        "--screenshot",
        type=str,
        default=None,
        help="Also save the final screen to this image file",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config, args.overrides)
    set_log_level(config.log_level)
    logger = RunLogger(log_level=config.log_level)
    logger.log_run_start(dataclasses.asdict(config))

    machine = Chip8.from_config(config)
    instructions_per_frame = max(1, config.instruction_frequency // config.timer_frequency)

    try:
        machine.load_file(args.rom)
        executed = run_headless(machine, args.frames, instructions_per_frame, not args.no_progress)
    except OSError as e:
        logger.error(f"Cannot read ROM: {e}")
        return 1
    except Chip8Error as e:
        logger.error(f"Machine halted at PC 0x{int(machine.state.pc):03X}: {e}")
        print(display_to_text(machine.display))
        return 1

    logger.log_run_end(executed, args.frames)
    print(display_to_text(machine.display))
    if args.screenshot:
        save_screenshot(machine.display, args.screenshot, color_scheme=config.color_scheme)
        logger.info(f"Screenshot saved: {args.screenshot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
