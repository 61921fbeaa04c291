"""
Access Log Unit Tests
Tests for core/access_log.py
"""
from datetime import datetime, timedelta, timezone

from core.access_log import (
    AccessLogEntry,
    FileAccessLog,
    MemoryAccessLog,
    NullAccessLog,
    iso_timestamp,
)


def make_entry(**overrides) -> AccessLogEntry:
    fields = {
        "timestamp": "2025-04-01T12:00:00.000Z",
        "client": "127.0.0.1",
        "method": "POST",
        "url": "/api/battleship/generate-proof",
        "user_agent": "curl/8.5.0",
    }
    fields.update(overrides)
    return AccessLogEntry(**fields)


class TestIsoTimestamp:
    """Tests for iso_timestamp()."""

    def test_millisecond_precision_with_z(self):
        moment = datetime(2025, 4, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)

        assert iso_timestamp(moment) == "2025-04-01T12:00:00.123Z"

    def test_converts_to_utc(self):
        moment = datetime(2025, 4, 1, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))

        assert iso_timestamp(moment) == "2025-04-01T12:00:00.000Z"

    def test_defaults_to_now(self):
        assert iso_timestamp().endswith("Z")


class TestAccessLogEntry:
    """Tests for AccessLogEntry.format_line()."""

    def test_line_format(self):
        assert make_entry().format_line() == (
            "[2025-04-01T12:00:00.000Z] IP: 127.0.0.1 | Method: POST "
            "| URL: /api/battleship/generate-proof | User-Agent: curl/8.5.0\n"
        )

    def test_missing_user_agent_defaults_to_dash(self):
        entry = AccessLogEntry(
            timestamp="2025-04-01T12:00:00.000Z",
            client="10.0.0.1",
            method="GET",
            url="/battleship/health",
        )

        assert entry.format_line().endswith("| User-Agent: -\n")


class TestSinks:
    """Tests for the AccessLog implementations."""

    def test_file_log_appends(self, tmp_path):
        path = tmp_path / "battleship_access.log"
        path.write_text("existing line\n")
        log = FileAccessLog(path)

        log.record(make_entry(method="GET", url="/battleship/health"))
        log.record(make_entry())

        lines = path.read_text().splitlines()
        assert lines[0] == "existing line"
        assert len(lines) == 3
        assert "Method: GET | URL: /battleship/health" in lines[1]
        assert "Method: POST" in lines[2]

    def test_file_log_creates_file(self, tmp_path):
        path = tmp_path / "new.log"

        FileAccessLog(path).record(make_entry())

        assert path.exists()

    def test_memory_log_keeps_entries(self):
        log = MemoryAccessLog()
        entry = make_entry()

        log.record(entry)

        assert log.entries == [entry]

    def test_null_log_discards(self):
        assert NullAccessLog().record(make_entry()) is None
