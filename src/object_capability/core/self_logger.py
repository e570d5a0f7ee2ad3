"""
Self-Logger

Each object logs to itself (not to an external logging system).

Design:
- Entries are flat string dicts: entry_id, timestamp, level, message + fields
- Append-only (immutable history)
- With a base_dir, each logger has its own file: logs/{object_id}/log.tsv
- Without a base_dir, entries live in a bounded in-memory buffer
- Log rotation when a file exceeds the size limit
- Query logs with filters (level, custom fields, offset/limit)

The composition engine writes its own events (adds, removes, collisions,
missing dependencies) to a shared "composition" journal, see get_journal().
"""

import csv
import hashlib
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from object_capability.core.config import get_config


LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

BASE_FIELDS = ['entry_id', 'timestamp', 'level', 'message']


class SelfLogger:
    """
    Self-logging for objects.

    File-backed loggers write TSV (human-readable, grep-able) to
    logs/{object_id}/log.tsv under base_dir. Memory-backed loggers keep the
    most recent memory_limit entries.
    """

    def __init__(
        self,
        object_id: str,
        base_dir: Optional[Union[Path, str]] = None,
        max_log_size: Optional[int] = None,
        memory_limit: Optional[int] = None,
    ):
        """
        Initialize self-logger.

        Args:
            object_id: ID of the logging object (e.g., 'composition')
            base_dir: Base directory for log storage (None = in-memory)
            max_log_size: Maximum log file size in bytes before rotation
                         (default: 10MB)
            memory_limit: Entries kept when logging in memory
                         (default: 10000)
        """
        self.object_id = object_id
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self.max_log_size = max_log_size or (10 * 1024 * 1024)

        self._entries: Optional[deque] = None
        self.log_dir: Optional[Path] = None
        self.log_file: Optional[Path] = None

        if self.base_dir is None:
            self._entries = deque(maxlen=memory_limit or 10000)
        else:
            self.log_dir = self.base_dir / 'logs' / object_id
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = self.log_dir / 'log.tsv'

    @property
    def in_memory(self) -> bool:
        return self._entries is not None

    def log(self, level: str, message: str, **kwargs) -> Dict[str, str]:
        """
        Append an entry.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            message: Log message
            **kwargs: Additional fields (capability, target, phase, ...)

        Returns:
            The entry as written
        """
        level = level.upper()
        if level not in LEVELS:
            raise ValueError(f'Unknown log level: {level}')

        timestamp = datetime.now().isoformat()
        entry = {
            'entry_id': self._generate_entry_id(timestamp, level, message),
            'timestamp': timestamp,
            'level': level,
            'message': message,
            **kwargs,
        }

        # Don't log empty fields (None or ''); TSV cannot tell '' from a missing column
        entry = {k: str(v) for k, v in entry.items() if v is not None}
        entry = {k: v for k, v in entry.items() if v != '' or k in BASE_FIELDS}

        if self.in_memory:
            self._entries.append(entry)
        else:
            self._write(entry)

        return entry

    def debug(self, message: str, **kwargs) -> Dict[str, str]:
        """Log DEBUG level message"""
        return self.log('DEBUG', message, **kwargs)

    def info(self, message: str, **kwargs) -> Dict[str, str]:
        """Log INFO level message"""
        return self.log('INFO', message, **kwargs)

    def warning(self, message: str, **kwargs) -> Dict[str, str]:
        """Log WARNING level message"""
        return self.log('WARNING', message, **kwargs)

    def error(self, message: str, **kwargs) -> Dict[str, str]:
        """Log ERROR level message"""
        return self.log('ERROR', message, **kwargs)

    def critical(self, message: str, **kwargs) -> Dict[str, str]:
        """Log CRITICAL level message"""
        return self.log('CRITICAL', message, **kwargs)

    def get_logs(
        self,
        level: Optional[Union[str, List[str]]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        **filters,
    ) -> List[Dict[str, str]]:
        """
        Get log entries, oldest first.

        Args:
            level: Filter by level (string or list of strings)
            limit: Maximum number of entries to return
            offset: Number of entries to skip
            **filters: Additional filters (e.g., capability='point')

        Returns:
            List of log entries (dictionaries)
        """
        if self.in_memory:
            entries = list(self._entries)
        else:
            entries = self._read_all()

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

    def clear(self) -> None:
        """Drop all entries (rotated files included)"""
        if self.in_memory:
            self._entries.clear()
            return

        for path in self.log_dir.glob('log*.tsv'):
            path.unlink()

    def _write(self, entry: Dict[str, str]) -> None:
        self._rotate_if_needed()

        fieldnames = self._get_fieldnames()
        known = len(fieldnames)
        for key in entry.keys():
            if key not in fieldnames:
                fieldnames.append(key)

        is_new_file = not self.log_file.exists()
        if not is_new_file and len(fieldnames) > known:
            self._rewrite_header(fieldnames)

        with open(self.log_file, 'a', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, delimiter='\t')

            if is_new_file:
                writer.writeheader()

            writer.writerow(entry)

    def _rewrite_header(self, fieldnames: List[str]) -> None:
        """Rewrite the current file so its header covers new fields"""
        with open(self.log_file, 'r', newline='') as f:
            rows = list(csv.DictReader(f, delimiter='\t'))

        with open(self.log_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, delimiter='\t')
            writer.writeheader()
            writer.writerows(rows)

    def _read_all(self) -> List[Dict[str, str]]:
        """Rotated files (oldest first), then the current file"""
        files = sorted(self.log_dir.glob('log-*.tsv'))
        if self.log_file.exists():
            files.append(self.log_file)

        entries = []
        for path in files:
            with open(path, 'r', newline='') as f:
                reader = csv.DictReader(f, delimiter='\t')
                for row in reader:
                    entries.append({
                        k: v for k, v in row.items()
                        if v is not None and (v != '' or k in BASE_FIELDS)
                    })
        return entries

    def _get_fieldnames(self) -> List[str]:
        """Get existing fieldnames from log file"""
        if not self.log_file.exists():
            return list(BASE_FIELDS)

        with open(self.log_file, 'r', newline='') as f:
            reader = csv.DictReader(f, delimiter='\t')
            return list(reader.fieldnames or BASE_FIELDS)

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds max size"""
        if not self.log_file.exists():
            return

        if self.log_file.stat().st_size < self.max_log_size:
            return

        timestamp = datetime.now().strftime('%Y%m%d-%H%M%S-%f')
        self.log_file.rename(self.log_dir / f'log-{timestamp}.tsv')

        # Next write creates a new log.tsv with header

    def _generate_entry_id(self, timestamp: str, level: str, message: str) -> str:
        """
        Generate unique entry ID.

        Uses hash of timestamp + object_id + level + message.
        """
        content = f"{timestamp}:{self.object_id}:{level}:{message}"
        return hashlib.sha256(content.encode()).hexdigest()[:16]


# Shared composition journal (lazy loaded)
_journal = None

# key -> error message for settings that failed to parse
_invalid_settings: Dict[str, str] = {}
_reported_settings: set = set()


def _setting(getter: Callable, key: str, default: Any = None) -> Any:
    """Read a typed setting, falling back to its default when unparseable"""
    if default is None:
        default = get_config().defaults.get(key)
    try:
        return getter(key, default)
    except ValueError as e:
        _invalid_settings[key] = str(e)
        return default


def log_settings() -> Dict[str, Any]:
    """
    Typed logging settings for new SelfLoggers.

    An invalid environment value (e.g. OBJECT_CAPABILITY_LOG_MAX_SIZE=large)
    never breaks composition: the default is used and the journal records
    one WARNING per bad key.
    """
    config = get_config()
    return {
        'enabled': _setting(config.get_bool, 'LOG_ENABLED', True),
        'base_dir': config.get('LOG_DIR'),
        'max_log_size': _setting(config.get_int, 'LOG_MAX_SIZE'),
        'memory_limit': _setting(config.get_int, 'LOG_MEMORY_LIMIT'),
    }


def get_journal() -> Optional[SelfLogger]:
    """
    Get the engine's composition journal.

    Returns None when LOG_ENABLED is off.
    """
    global _journal
    settings = log_settings()
    if not settings['enabled']:
        return None

    if _journal is None:
        _journal = SelfLogger(
            object_id='composition',
            base_dir=settings['base_dir'],
            max_log_size=settings['max_log_size'],
            memory_limit=settings['memory_limit'],
        )

    for key, error in _invalid_settings.items():
        if key not in _reported_settings:
            _reported_settings.add(key)
            _journal.warning('Invalid configuration, using default', key=key, error=error)
    return _journal


def reset_journal() -> None:
    """Forget the journal so the next get_journal() rereads configuration"""
    global _journal
    _journal = None
    _invalid_settings.clear()
    _reported_settings.clear()
