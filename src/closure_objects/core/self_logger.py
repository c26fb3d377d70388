"""
Self-Logger

Each object logs its own dispatches (not to an external logging system).

Design:
- Logs stored in TSV files (human-readable, grep-able)
- Append-only history; a file's header grows when a new field appears
- Each object has its own log directory: logs/{object_id}/log.tsv
- Log rotation when file exceeds size limit
- Entries below the logger's minimum level are dropped
- Query logs with filters (level, custom fields)
"""

import csv
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

BASE_FIELDS = ['timestamp', 'level', 'message']


class SelfLogger:
    """
    Self-logging for objects.

    Each object has its own log file stored in:
    logs/{object_id}/log.tsv
    """

    def __init__(
        self,
        object_id: str,
        base_dir: Path | str,
        max_log_size: Optional[int] = None,
        min_level: str = 'DEBUG',
    ):
        """
        Initialize self-logger.

        Args:
            object_id: ID of the object (e.g., 'counter-1')
            base_dir: Base directory for log storage
            max_log_size: Maximum log file size in bytes before rotation
                         (default: 10MB)
            min_level: Lowest level that gets written (default: DEBUG)
        """
        if min_level.upper() not in LEVELS:
            raise ValueError(f'Unknown log level: {min_level}')

        self.object_id = object_id
        self.base_dir = Path(base_dir)
        self.max_log_size = max_log_size or (10 * 1024 * 1024)  # 10MB default
        self.min_level = min_level.upper()

        self.log_dir = self.base_dir / 'logs' / object_id
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.log_dir / 'log.tsv'

    def log(
        self,
        level: str,
        message: str,
        **kwargs,
    ) -> None:
        """
        Log an entry.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            message: Log message
            **kwargs: Additional fields to log (method, route, etc.)
        """
        level = level.upper()
        if level not in LEVELS:
            raise ValueError(f'Unknown log level: {level}')
        if LEVELS.index(level) < LEVELS.index(self.min_level):
            return

        self._rotate_if_needed()

        entry = {
            'timestamp': datetime.now().isoformat(),
            'level': level,
            'message': message,
            **kwargs,
        }

        # Don't log empty fields
        entry = {k: v for k, v in entry.items() if v is not None}

        fieldnames = self._get_fieldnames()
        new_fields = [key for key in entry if key not in fieldnames]

        if new_fields and self.log_file.exists():
            self._rewrite_header(fieldnames + new_fields)
        fieldnames = fieldnames + new_fields

        is_new_file = not self.log_file.exists()

        with open(self.log_file, 'a', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, delimiter='\t')

            if is_new_file:
                writer.writeheader()

            writer.writerow(entry)

    def debug(self, message: str, **kwargs) -> None:
        """Log DEBUG level message"""
        self.log('DEBUG', message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log INFO level message"""
        self.log('INFO', message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log WARNING level message"""
        self.log('WARNING', message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log ERROR level message"""
        self.log('ERROR', message, **kwargs)

    def critical(self, message: str, **kwargs) -> None:
        """Log CRITICAL level message"""
        self.log('CRITICAL', message, **kwargs)

    def get_logs(
        self,
        level: Optional[Union[str, List[str]]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        **filters,
    ) -> List[Dict[str, Any]]:
        """
        Get log entries, oldest first.

        Args:
            level: Filter by level (string or list of strings)
            limit: Maximum number of entries to return
            offset: Number of entries to skip
            **filters: Additional filters (e.g., method='inc')

        Returns:
            List of log entries (dictionaries; missing fields are '')
        """
        entries = []

        # Rotated files are older than the current one
        files = sorted(self.log_dir.glob('log-*.tsv'), key=_rotation_order)
        if self.log_file.exists():
            files.append(self.log_file)

        for path in files:
            entries.extend(_read_rows(path))

        if level is not None:
            if isinstance(level, str):
                level = [level]
            entries = [e for e in entries if e.get('level') in level]

        for key, value in filters.items():
            entries = [e for e in entries if e.get(key) == value]

        if offset > 0:
            entries = entries[offset:]

        if limit is not None:
            entries = entries[:limit]

        return entries

    def _get_fieldnames(self) -> List[str]:
        """Get existing fieldnames from log file"""
        if not self.log_file.exists():
            return list(BASE_FIELDS)

        with open(self.log_file, 'r', newline='') as f:
            reader = csv.DictReader(f, delimiter='\t')
            return list(reader.fieldnames or BASE_FIELDS)

    def _rewrite_header(self, fieldnames: List[str]) -> None:
        """Rewrite current log file with a wider header"""
        rows = _read_rows(self.log_file)
        with open(self.log_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, delimiter='\t')
            writer.writeheader()
            writer.writerows(rows)

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds max size"""
        if not self.log_file.exists():
            return

        size = self.log_file.stat().st_size
        if size < self.max_log_size:
            return

        # Rename current log to log-TIMESTAMP[-N].tsv
        timestamp = datetime.now().strftime('%Y%m%d-%H%M%S')
        rotated_name = self.log_dir / f'log-{timestamp}.tsv'
        counter = 1
        while rotated_name.exists():
            rotated_name = self.log_dir / f'log-{timestamp}-{counter}.tsv'
            counter += 1

        self.log_file.rename(rotated_name)

        # Next log() call will create new log.tsv with header


def _rotation_order(path: Path) -> tuple:
    # log-YYYYmmdd-HHMMSS[-N]
    parts = path.stem.split('-')
    counter = int(parts[3]) if len(parts) > 3 and parts[3].isdigit() else 0
    return (parts[1:3], counter)


def _read_rows(path: Path) -> List[Dict[str, str]]:
    with open(path, 'r', newline='') as f:
        reader = csv.DictReader(f, delimiter='\t', restval='')
        return [dict(row) for row in reader]
