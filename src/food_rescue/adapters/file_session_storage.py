"""File-backed storage for persisted auth sessions."""

import json
import logging
from pathlib import Path

from supabase_auth import SyncSupportedStorage

_logger = logging.getLogger(__name__)


class FileSessionStorage(SyncSupportedStorage):
    """Keeps Supabase Auth storage items in a JSON file.

    The auth client writes the serialized session here after sign-in, so a new
    process pointed at the same file starts already signed in.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if items.pop(key, None) is not None:
            self._write(items)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        content = self.path.read_text(encoding="utf-8")
        if not content.strip():
            return {}
        try:
            items = json.loads(content)
        except json.JSONDecodeError:
            _logger.warning("Ignoring unreadable session file: %s", self.path)
            return {}
        if not isinstance(items, dict):
            _logger.warning("Ignoring malformed session file: %s", self.path)
            return {}
        return items

    def _write(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(items), encoding="utf-8")
        tmp_path.replace(self.path)
