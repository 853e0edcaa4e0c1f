"""Console logging for chipvm.

Loggers are shared per name through :func:`get_logger` and follow one
package-wide level set with :func:`set_log_level`. Long headless runs report
progress through a tqdm bar instead of log lines.
"""

import sys
import time
from typing import Any, Dict, Optional

from tqdm import tqdm

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


def _check_level(log_level: str) -> str:
    level = log_level.upper()
    if level not in LEVELS:
        raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
    return level


class ConsoleLogger:
    """Level-filtered logger printing ``[elapsed][level][name] message`` lines to stdout."""

    def __init__(
        self,
        name: str = "chipvm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = _check_level(log_level)
        self.use_colors = use_colors and sys.stdout.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def set_level(self, log_level: str):
        """Change the minimum level that gets printed."""
        self.log_level = _check_level(log_level)

    def enabled_for(self, level: str) -> bool:
        return LEVELS.index(level) >= LEVELS.index(self.log_level)

    def _format_message(self, level: str, message: str) -> str:
        timestamp = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{COLORS[level]}{level_str}{RESET}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        level = _check_level(level)
        if self.enabled_for(level):
            print(self._format_message(level, message), flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)


class RunLogger(ConsoleLogger):
    """Logger for emulator runs with a summary of what the machine did."""

    def __init__(self, name: str = "run", **kwargs):
        super().__init__(name, **kwargs)

    def log_run_start(self, config: Dict[str, Any]):
        """Log run configuration, one line per setting."""
        self.info("Starting run with configuration:")
        for key, value in config.items():
            if isinstance(value, dict):
                value = ", ".join(f"{sub_key}={sub_value}" for sub_key, sub_value in value.items())
            self.info(f"  {key}: {value}")

    def log_run_end(self, instructions: int, frames: int):
        """Log instruction and frame totals with the achieved rate."""
        elapsed = time.time() - self.start_time
        rate = instructions / elapsed if elapsed > 0 else 0.0
        self.info(
            f"Ran {instructions} instructions over {frames} frames "
            f"in {elapsed:.2f}s ({rate:.0f} instructions/s)"
        )


_LOGGERS: Dict[str, ConsoleLogger] = {}
_level = "INFO"


def set_log_level(log_level: str):
    """Set the level of every shared logger, including ones created later."""
    global _level
    _level = _check_level(log_level)
    for logger in _LOGGERS.values():
        logger.set_level(_level)


def get_logger(name: str = "chipvm", log_level: Optional[str] = None) -> ConsoleLogger:
    """Return the shared logger for ``name``, creating it on first use."""
    if name not in _LOGGERS:
        _LOGGERS[name] = ConsoleLogger(name, _level)
    if log_level is not None:
        _LOGGERS[name].set_level(log_level)
    return _LOGGERS[name]


def progress_bar(total: int, desc: str = "Running", enabled: bool = True, **kwargs) -> tqdm:
    """Build a tqdm progress bar counting emulated frames."""
    return tqdm(total=total, desc=desc, unit="frame", disable=not enabled, **kwargs)
