"""Tests for the simulation event log."""

from pagesim.logging import LogEntry, Logger, LogLevel


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_str(self) -> None:
        """String form should be ``[LEVEL] source: message``."""
        entry = LogEntry(level=LogLevel.WARNING, message="swap full", source="memory", pid=3)
        assert str(entry) == "[WARNING] memory: swap full"

    def test_pid_defaults_to_none(self) -> None:
        """Events need not belong to a process."""
        entry = LogEntry(level=LogLevel.INFO, message="ready", source="sim")
        assert entry.pid is None


class TestLogger:
    """Verify the logger."""

    def test_log_stores_entries_in_order(self) -> None:
        """Entries should be kept in chronological order."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="test")
        logger.log(LogLevel.INFO, "second", source="test")
        assert [e.message for e in logger.entries] == ["first", "second"]

    def test_filter_by_level(self) -> None:
        """Filtering by min_level should drop lower entries."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "noise", source="test")
        logger.log(LogLevel.WARNING, "problem", source="test")
        result = logger.filter(min_level=LogLevel.WARNING)
        assert [e.message for e in result] == ["problem"]

    def test_filter_by_source_and_pid(self) -> None:
        """Filters should combine."""
        logger = Logger()
        logger.log(LogLevel.INFO, "a", source="memory", pid=1)
        logger.log(LogLevel.INFO, "b", source="memory", pid=2)
        logger.log(LogLevel.INFO, "c", source="sim", pid=1)
        result = logger.filter(source="memory", pid=1)
        assert [e.message for e in result] == ["a"]

    def test_min_level_drops_on_arrival(self) -> None:
        """A logger with a minimum level should not store lower entries."""
        logger = Logger(min_level=LogLevel.INFO)
        logger.log(LogLevel.DEBUG, "dropped", source="test")
        assert logger.entries == []

    def test_lines_are_formatted(self) -> None:
        """lines() should return display strings."""
        logger = Logger()
        logger.log(LogLevel.INFO, "booted", source="sim")
        assert logger.lines() == ["[INFO] sim: booted"]

    def test_clear(self) -> None:
        """Clearing should empty the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "x", source="test")
        logger.clear()
        assert logger.entries == []

    def test_entries_returns_copy(self) -> None:
        """Mutating the returned list should not affect the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "x", source="test")
        logger.entries.clear()
        assert len(logger.entries) == 1
