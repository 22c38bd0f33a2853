"""In-process cart storage for development and testing."""

from ordering.cart.storage.port import CartStorage, CartStorageError


class MemoryCartStorage(CartStorage):
    """Dictionary-backed storage that can be told to fail."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.fail_reads: bool = False
        self.fail_writes: bool = False
        self.writes: int = 0

    def configure(self, fail_reads: bool = False, fail_writes: bool = False) -> None:
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def read(self, key: str) -> str | None:
        if self.fail_reads:
            raise CartStorageError(f"Storage unavailable while reading {key!r}")
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise CartStorageError(f"Storage unavailable while writing {key!r}")
        self.values[key] = value
        self.writes += 1

    def delete(self, key: str) -> None:
        self.values.pop(key, None)
