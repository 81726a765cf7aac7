"""Simulation configuration.

The console asks for sizes in the units people think in (RAM and swap
in MB, pages in KB); the memory manager works in bytes.  A
``SimulationConfig`` keeps the human units and derives the byte sizes.

A config can also come from a JSON file::

    {"ram_mb": 4, "swap_mb": 8, "page_kb": 4, "seed": 7}

Missing keys fall back to the defaults below.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

_KB = 1024
_MB = 1024 * 1024

_INT_FIELDS = (
    "ram_mb",
    "swap_mb",
    "page_kb",
    "max_process_pages",
    "time_step",
    "release_start",
    "release_every",
)


class ConfigError(ValueError):
    """Raise when a configuration is unreadable or out of range."""


@dataclass(frozen=True)
class SimulationConfig:
    """Sizes and pacing for one simulation run.

    Attributes:
        ram_mb: RAM pool size in megabytes.
        swap_mb: Swap pool size in megabytes.
        page_kb: Page size in kilobytes.
        max_process_pages: Upper bound for a new process's page count.
        time_step: Simulated time units added per step.
        release_start: First simulated time at which a process may be freed.
        release_every: A process is freed when time is a multiple of this.
        tick_seconds: Real seconds to sleep between steps.
        seed: Seed for the random process generator (None = OS entropy).

    """

    ram_mb: int = 1
    swap_mb: int = 2
    page_kb: int = 4
    max_process_pages: int = 500
    time_step: int = 2
    release_start: int = 30
    release_every: int = 5
    tick_seconds: float = 2.0
    seed: int | None = None

    @property
    def ram_bytes(self) -> int:
        """Return the RAM pool size in bytes."""
        return self.ram_mb * _MB

    @property
    def swap_bytes(self) -> int:
        """Return the swap pool size in bytes."""
        return self.swap_mb * _MB

    @property
    def page_bytes(self) -> int:
        """Return the page size in bytes."""
        return self.page_kb * _KB

    def validate(self) -> SimulationConfig:
        """Check every field, returning self so calls can be chained.

        Raises:
            ConfigError: If a size or count is not a whole number or is
                out of range.

        """
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{name} must be a whole number, got {value!r}"
                raise ConfigError(msg)
        if isinstance(self.tick_seconds, bool) or not isinstance(self.tick_seconds, int | float):
            msg = f"tick_seconds must be a number, got {self.tick_seconds!r}"
            raise ConfigError(msg)
        for name in ("ram_mb", "swap_mb", "page_kb", "max_process_pages", "time_step"):
            value = getattr(self, name)
            if value <= 0:
                msg = f"{name} must be positive, got {value}"
                raise ConfigError(msg)
        if self.release_every <= 0:
            msg = f"release_every must be positive, got {self.release_every}"
            raise ConfigError(msg)
        if self.release_start < 0 or self.tick_seconds < 0:
            msg = "release_start and tick_seconds must not be negative"
            raise ConfigError(msg)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return the config as a JSON-ready dict."""
        return asdict(self)


def config_from_dict(data: dict[str, Any]) -> SimulationConfig:
    """Build and validate a config, ignoring unknown keys.

    Raises:
        ConfigError: If a value has the wrong type or is out of range.

    """
    known = {f.name for f in fields(SimulationConfig)}
    try:
        config = SimulationConfig(**{k: v for k, v in data.items() if k in known})
        return config.validate()
    except TypeError as e:
        msg = f"Invalid configuration: {e}"
        raise ConfigError(msg) from e


def load_config(path: Path) -> SimulationConfig:
    """Load a config from a JSON file.

    Raises:
        ConfigError: If the file cannot be read, is not a JSON object,
            or holds invalid values.

    """
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot load config {path}: {e}"
        raise ConfigError(msg) from e
    if not isinstance(data, dict):
        msg = f"Config {path} must hold a JSON object"
        raise ConfigError(msg)
    return config_from_dict(data)
