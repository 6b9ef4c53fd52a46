"""Named JSON documents stored as files in the data directory."""

import copy
import json
import logging
from pathlib import Path
from typing import Any

from seller_calendar.exceptions import StorageError

logger = logging.getLogger(__name__)


class JsonStore:
    """Read and write whole JSON documents by key.

    Each key maps to ``<data_dir>/<key>.json``. Not transactional: the last
    writer wins.
    """

    def __init__(self, data_dir: Path):
        """
        Initialize store.

        Args:
            data_dir: Directory holding the JSON documents (created on demand)
        """
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        """Get path to the document for key."""
        return self.data_dir / f"{key}.json"

    def read(self, key: str, default: Any) -> Any:
        """
        Read a document, falling back to ``default``.

        A missing document is created holding ``default``. An unreadable or
        corrupt document is logged and ``default`` returned; the file is left
        as is.
        """
        path = self.path_for(key)
        if not path.exists():
            try:
                self.write(key, default)
            except StorageError as e:
                logger.warning(f"Could not create {path}: {e}")
            return copy.deepcopy(default)

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            logger.error(f"Failed to read {path}, using default: {e}")
            return copy.deepcopy(default)

    def write(self, key: str, value: Any) -> None:
        """Overwrite a document with value."""
        path = self.path_for(key)
        try:
            content = json.dumps(value, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Document '{key}' is not JSON serializable: {e}") from e

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
