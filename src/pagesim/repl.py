"""Console front end for the simulation.

The console asks for RAM, swap, and page sizes, then runs the
simulation until memory runs out (or a step limit is hit), printing
what each step did and the state of both page tables.

As with any I/O loop, the logic lives elsewhere: ``format_banner`` and
``format_step`` are pure, ``read_config`` takes its input function as
a parameter, and ``run()`` only wires them to ``stdin``/``stdout``.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from pagesim.config import ConfigError, SimulationConfig, load_config
from pagesim.simulation import Simulation

if TYPE_CHECKING:
    from collections.abc import Callable

    from pagesim.simulation import StepResult

_BANNER_WIDTH = 38

_PROMPTS = (
    ("ram_mb", "RAM size (MB): "),
    ("swap_mb", "Swap size (MB): "),
    ("page_kb", "Page size (KB): "),
)


def format_banner(config: SimulationConfig) -> str:
    """Describe the run about to start."""
    border = "=" * _BANNER_WIDTH
    ram = config.ram_bytes // config.page_bytes
    swap = config.swap_bytes // config.page_bytes
    return (
        f"\n  {border}\n            PageSim\n     FIFO paging with swap\n  {border}\n\n"
        f"  RAM: {config.ram_mb} MB ({ram} pages)\n"
        f"  Swap: {config.swap_mb} MB ({swap} pages)\n"
        f"  Page size: {config.page_kb} KB\n"
    )


def format_step(result: StepResult) -> str:
    """Render one step the way the console prints it.

    A failed step prints only the out-of-memory notice.
    """
    if not result.allocated:
        return "Insufficient memory. Ending simulation."
    lines = [f"Created process {result.pid} with {result.pages} pages."]
    if result.released_pid is not None:
        lines.append(f"Released process {result.released_pid}.")
    lines.append(str(result.snapshot))
    return "\n".join(lines)


def read_config(
    prompt: Callable[[str], str] = input,
    *,
    base: SimulationConfig | None = None,
) -> SimulationConfig:
    """Ask for the three sizes, re-asking until each is a positive integer.

    Args:
        prompt: Reads one line of input given a prompt string.
        base: Supplies every other field (defaults when None).

    Returns:
        A validated config.

    """
    values: dict[str, int] = {}
    for name, text in _PROMPTS:
        while True:
            raw = prompt(text).strip()
            try:
                value = int(raw)
            except ValueError:
                print(f"Not a whole number: {raw!r}")  # noqa: T201
                continue
            if value <= 0:
                print("Size must be positive.")  # noqa: T201
                continue
            values[name] = value
            break

    base = base if base is not None else SimulationConfig()
    return SimulationConfig(**{**base.to_dict(), **values}).validate()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pagesim",
        description="Simulate FIFO paging between a RAM pool and a swap pool.",
    )
    parser.add_argument("--config", type=Path, help="JSON file with sizes and pacing")
    parser.add_argument("--steps", type=int, default=None, help="stop after this many steps")
    parser.add_argument("--seed", type=int, default=None, help="seed for process sizes")
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> None:
    """Read the sizes and run the simulation, printing every step.

    This is the ``pagesim`` console entry point.  Ctrl+C and Ctrl+D
    stop the run cleanly.
    """
    args = _parse_args(argv)

    try:
        config = load_config(args.config) if args.config is not None else read_config()
    except ConfigError as e:
        print(f"Configuration error: {e}")  # noqa: T201
        return
    except EOFError:
        # Ctrl+D at a prompt
        print()  # noqa: T201
        return
    except KeyboardInterrupt:
        print("\nInterrupted.")  # noqa: T201
        return

    if args.seed is not None:
        config = SimulationConfig(**{**config.to_dict(), "seed": args.seed})

    simulation = Simulation(config)
    print(format_banner(config))  # noqa: T201

    try:
        simulation.run(
            max_steps=args.steps,
            on_step=lambda result: print(format_step(result)),  # noqa: T201
        )
    except KeyboardInterrupt:
        print("\nInterrupted.")  # noqa: T201
    finally:
        print("Simulation stopped.")  # noqa: T201
