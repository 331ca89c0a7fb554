import json
import logging
import os
import threading

logger = logging.getLogger(__name__)


class MemoryCache:
    """Thread-safe key -> JSON-compatible value store."""

    def __init__(self):
        self._data = {}
        self._lock = threading.Lock()

    def get(self, key: str):
        with self._lock:
            return self._data.get(key)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def set(self, key: str, value) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class JsonFileCache(MemoryCache):
    """MemoryCache persisted to a JSON-lines journal.

    Every set or delete appends one line (`{"k": key, "v": value}` or
    `{"k": key, "deleted": true}`), so a write costs the size of its entry only.
    On start the journal is replayed and compacted to one line per live key.
    Unreadable lines are skipped; write failures are logged and the in-memory
    copy stays authoritative.
    """

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self._load()

    def _load(self) -> None:
        if not os.path.exists(self.path):
            return
        skipped = 0
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                for line in f:
                    if not line.strip():
                        continue
                    try:
                        record = json.loads(line)
                    except ValueError:
                        skipped += 1
                        continue
                    if not isinstance(record, dict) or not isinstance(record.get('k'), str):
                        skipped += 1
                        continue
                    if record.get('deleted'):
                        self._data.pop(record['k'], None)
                    elif 'v' in record:
                        self._data[record['k']] = record['v']
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable cache file %s: %s", self.path, e)
            return
        if skipped:
            logger.warning("Skipped %d unreadable lines in cache file %s", skipped, self.path)
        logger.info("Loaded %d cached responses from %s", len(self._data), self.path)
        self._compact()

    def _compact(self) -> None:
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                for key, value in self._data.items():
                    f.write(json.dumps({'k': key, 'v': value}) + '\n')
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.warning("Could not compact cache file %s: %s", self.path, e)

    def _append(self, record: dict) -> None:
        # Caller holds the lock
        try:
            with open(self.path, 'a', encoding='utf-8') as f:
                f.write(json.dumps(record) + '\n')
        except OSError as e:
            logger.warning("Could not persist cache to %s: %s", self.path, e)

    def set(self, key: str, value) -> None:
        with self._lock:
            self._data[key] = value
            self._append({'k': key, 'v': value})

    def delete(self, key: str) -> None:
        with self._lock:
            if key in self._data:
                del self._data[key]
                self._append({'k': key, 'deleted': True})

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            try:
                with open(self.path, 'w', encoding='utf-8'):
                    pass
            except OSError as e:
                logger.warning("Could not truncate cache file %s: %s", self.path, e)


def make_cache(path=None) -> MemoryCache:
    if path:
        return JsonFileCache(path)
    return MemoryCache()
