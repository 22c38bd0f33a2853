"""File-backed cart storage: one JSON document per key in a directory."""

import re
from pathlib import Path

from ordering.cart.storage.port import CartStorage, CartStorageError

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileCartStorage(CartStorage):
    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise CartStorageError(f"Invalid storage key {key!r}")
        return self.directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise CartStorageError(f"Could not read {path}: {exc}") from exc

    def write(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as exc:
            raise CartStorageError(f"Could not write {path}: {exc}") from exc

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise CartStorageError(f"Could not delete {path}: {exc}") from exc
