"""
JSONL-based storage for workout log entries.

Handles reading, writing, and managing the log file.  This is the
local adapter the CLI uses; the engine only ever sees the list of
LogEntry values returned by load_logs().
"""

from pathlib import Path

from ..core.models import LogEntry
from .serializers import ValidationError, entry_to_json_line, json_line_to_entry


class LogStore:
    """
    Manages log entries stored in JSONL format.

    The file contains one JSON object per line, kept in chronological
    order.  Entries for all exercises share one file.
    """

    def __init__(self, log_path: str | Path):
        """
        Initialize the log store.

        Args:
            log_path: Path to the JSONL log file
        """
        self.log_path = Path(log_path)

    def exists(self) -> bool:
        """Check if the log file exists."""
        return self.log_path.exists()

    def init(self) -> None:
        """
        Create an empty log file if it doesn't exist.

        Creates parent directories if needed.
        """
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.log_path.exists():
            self.log_path.touch()

    def load_logs(self) -> list[LogEntry]:
        """
        Load all entries from the log file.

        Returns:
            List of LogEntry, sorted by date

        Raises:
            FileNotFoundError: If the log file doesn't exist
            ValidationError: If a line is malformed (message includes line number)
        """
        if not self.log_path.exists():
            raise FileNotFoundError(f"Log file not found: {self.log_path}")

        entries: list[LogEntry] = []

        with open(self.log_path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    entries.append(json_line_to_entry(line))
                except ValidationError as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.log_path}: {e}"
                    ) from e

        entries.sort(key=lambda e: e.date)
        return entries

    def load_exercise_logs(self, exercise_id: str) -> list[LogEntry]:
        """Load entries for a single exercise, sorted by date."""
        return [e for e in self.load_logs() if e.exercise_id == exercise_id]

    def append_log(self, entry: LogEntry) -> None:
        """
        Add an entry, keeping the file in chronological order.

        Creates the file if needed.

        Raises:
            ValidationError: If an entry with the same id already exists
        """
        self.init()
        entries = self.load_logs()

        if any(e.id == entry.id for e in entries):
            raise ValidationError(f"Duplicate entry id: {entry.id}")

        insert_idx = len(entries)
        for i, existing in enumerate(entries):
            if entry.date < existing.date:
                insert_idx = i
                break
        entries.insert(insert_idx, entry)

        self._write_logs(entries)

    def delete_log(self, entry_id: str) -> LogEntry:
        """
        Delete the entry with the given id.

        Returns:
            The removed entry

        Raises:
            KeyError: If no entry has that id
        """
        entries = self.load_logs()
        for i, e in enumerate(entries):
            if e.id == entry_id:
                removed = entries.pop(i)
                self._write_logs(entries)
                return removed
        raise KeyError(entry_id)

    def _write_logs(self, entries: list[LogEntry]) -> None:
        """
        Rewrite the log file with the given entries.

        Args:
            entries: Entries to write, already in order
        """
        with open(self.log_path, "w", encoding="utf-8") as f:
            for entry in entries:
                f.write(entry_to_json_line(entry) + "\n")


def get_default_log_path() -> Path:
    """
    Get the default log file path.

    Returns:
        ~/.lift-predictor/logs.jsonl
    """
    return Path.home() / ".lift-predictor" / "logs.jsonl"
