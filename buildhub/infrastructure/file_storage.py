"""
Local filesystem storage provider for uploaded file bytes.
"""

from pathlib import Path


class StorageProvider:
    def save(self, key: str, data: bytes) -> None:
        raise NotImplementedError

    def read(self, key: str) -> bytes:
        raise NotImplementedError

    def exists(self, key: str) -> bool:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class LocalFileStorage(StorageProvider):
    """Stores each object as a file under base_dir."""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def _get_path(self, key: str) -> Path:
        # Keys are flat names; strip anything that could escape base_dir
        clean_key = Path(key.replace("\\", "/")).name
        if not clean_key or clean_key in (".", ".."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.base_dir / clean_key

    def save(self, key: str, data: bytes) -> None:
        path = self._get_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def read(self, key: str) -> bytes:
        return self._get_path(key).read_bytes()

    def exists(self, key: str) -> bool:
        return self._get_path(key).exists()

    def delete(self, key: str) -> None:
        path = self._get_path(key)
        if path.exists():
            path.unlink()
