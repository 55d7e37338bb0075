"""
File-backed key-value storage.

Each key maps to ``<data_dir>/<key>.json``. Writes go to a temporary
file in the same directory and are moved into place with os.replace, so
a crash mid-write leaves the previous document intact.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from invoicepro.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageReadError,
    check_quota,
)


class JsonFileStorage(KeyValueStorageInterface):
    """Stores each slot as a UTF-8 JSON file under data_dir."""
    
    def __init__(
        self,
        data_dir: Union[str, Path],
        quota_bytes: Optional[int] = None,
    ):
        self._data_dir = Path(data_dir)
        self._quota_bytes = quota_bytes
    
    @property
    def data_dir(self) -> Path:
        return self._data_dir
    
    def path_for(self, key: str) -> Path:
        return self._data_dir / f"{key}.json"
    
    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {path}: {e}") from e
    
    def set_item(self, key: str, value: str) -> None:
        check_quota(value, self._quota_bytes)
        path = self.path_for(key)
        tmp_name = None
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._data_dir,
                prefix=f".{key}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
    
    def remove_item(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}") from e
