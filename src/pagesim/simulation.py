"""Simulation driver — random processes against the page table manager.

Each step of the simulation:

1. Creates a process with a random number of pages and asks the
   manager for them.  If the manager says no, the run is over.
2. Once simulated time reaches ``release_start``, frees a random live
   process whenever time is a multiple of ``release_every``.
3. Advances simulated time by ``time_step``.

The driver owns the list of live processes; the manager only knows
page ownership tags.  Randomness and sleeping are injected so tests
can run a simulation deterministically and instantly.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from time import sleep as wall_sleep
from typing import TYPE_CHECKING

from pagesim.logging import Logger, LogLevel
from pagesim.memory.manager import PageTableManager

if TYPE_CHECKING:
    from collections.abc import Callable

    from pagesim.config import SimulationConfig
    from pagesim.memory.page_table import PageTableSnapshot

_SOURCE = "sim"


class SimulationFinishedError(RuntimeError):
    """Raise when stepping a simulation that has already run out of memory."""


@dataclass(frozen=True)
class SimulatedProcess:
    """A process the driver created and has not yet freed."""

    pid: int
    pages: int


@dataclass(frozen=True)
class StepResult:
    """What happened during one simulation step.

    Attributes:
        time: Simulated time at which the step ran.
        pid: The process created this step.
        pages: How many pages it asked for.
        allocated: Whether the manager placed every page.
        released_pid: The process freed this step, if any.
        snapshot: Page tables at the end of the step.

    """

    time: int
    pid: int
    pages: int
    allocated: bool
    released_pid: int | None
    snapshot: PageTableSnapshot


class Simulation:
    """Drive a ``PageTableManager`` with randomly sized processes."""

    def __init__(
        self,
        config: SimulationConfig,
        *,
        rng: random.Random | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a simulation from a validated config.

        Args:
            config: Sizes and pacing.
            rng: Random source.  Defaults to ``random.Random(config.seed)``.
            logger: Shared event log for the driver and the manager.
                Defaults to one that keeps INFO and above, so per-page
                DEBUG events do not pile up on long runs.

        """
        self._config = config.validate()
        self._rng = rng if rng is not None else random.Random(config.seed)  # noqa: S311
        self._logger = logger if logger is not None else Logger(min_level=LogLevel.INFO)
        self._manager = PageTableManager(
            ram_bytes=config.ram_bytes,
            swap_bytes=config.swap_bytes,
            page_bytes=config.page_bytes,
            logger=self._logger,
        )
        self._processes: list[SimulatedProcess] = []
        self._next_pid = 0
        self._time = 0
        self._finished = False

    @property
    def config(self) -> SimulationConfig:
        """Return the run's configuration."""
        return self._config

    @property
    def manager(self) -> PageTableManager:
        """Return the memory manager being driven."""
        return self._manager

    @property
    def logger(self) -> Logger:
        """Return the shared event log."""
        return self._logger

    @property
    def time(self) -> int:
        """Return the simulated time of the next step."""
        return self._time

    @property
    def finished(self) -> bool:
        """Return True once an allocation has failed."""
        return self._finished

    @property
    def live_processes(self) -> tuple[SimulatedProcess, ...]:
        """Return the processes created and not yet freed, oldest first."""
        return tuple(self._processes)

    def release(self, pid: int) -> bool:
        """Free a live process by id.

        Returns:
            True if the process was live, False if it was unknown.

        """
        for i, proc in enumerate(self._processes):
            if proc.pid == pid:
                del self._processes[i]
                self._manager.free(pid)
                self._logger.log(LogLevel.INFO, f"Released process {pid}", source=_SOURCE, pid=pid)
                return True
        return False

    def step(self) -> StepResult:
        """Run one step of the simulation.

        Raises:
            SimulationFinishedError: If a previous step ran out of memory.

        """
        if self._finished:
            msg = "Simulation already finished: memory exhausted"
            raise SimulationFinishedError(msg)

        now = self._time
        pid = self._next_pid
        self._next_pid += 1
        pages = self._rng.randint(1, self._config.max_process_pages)

        if not self._manager.allocate(pid, pages):
            self._finished = True
            self._logger.log(
                LogLevel.WARNING,
                f"Insufficient memory for process {pid} ({pages} pages)",
                source=_SOURCE,
                pid=pid,
            )
            return StepResult(
                time=now,
                pid=pid,
                pages=pages,
                allocated=False,
                released_pid=None,
                snapshot=self._manager.snapshot(),
            )

        self._processes.append(SimulatedProcess(pid=pid, pages=pages))
        self._logger.log(
            LogLevel.INFO,
            f"Created process {pid} with {pages} pages",
            source=_SOURCE,
            pid=pid,
        )

        released: int | None = None
        if self._release_due(now):
            victim = self._rng.choice(self._processes)
            self.release(victim.pid)
            released = victim.pid

        self._time += self._config.time_step
        return StepResult(
            time=now,
            pid=pid,
            pages=pages,
            allocated=True,
            released_pid=released,
            snapshot=self._manager.snapshot(),
        )

    def run(
        self,
        *,
        max_steps: int | None = None,
        sleep: Callable[[float], None] = wall_sleep,
        on_step: Callable[[StepResult], None] | None = None,
    ) -> list[StepResult]:
        """Step until memory runs out or ``max_steps`` is reached.

        Args:
            max_steps: Stop after this many steps (None = until failure).
            sleep: Called with ``tick_seconds`` between steps.
            on_step: Called with each step's result as it happens.

        Returns:
            Every step result, in order.

        """
        results: list[StepResult] = []
        while not self._finished and (max_steps is None or len(results) < max_steps):
            result = self.step()
            results.append(result)
            if on_step is not None:
                on_step(result)
            if not self._finished and (max_steps is None or len(results) < max_steps):
                sleep(self._config.tick_seconds)
        return results

    def _release_due(self, now: int) -> bool:
        """Return True if a process should be freed at this time."""
        return now >= self._config.release_start and now % self._config.release_every == 0
