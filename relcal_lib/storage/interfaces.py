from typing import Protocol, List, Optional, Tuple, runtime_checkable


@runtime_checkable
class DocumentStoreProtocol(Protocol):
    """Public surface of `relcal_lib.storage.DocumentStore` used by the routers.

    Implementations follow the semantics documented on the concrete class:
    `read` never fails for a document that was not written yet, and `write`
    raises the exceptions from `relcal_lib.storage.errors`.
    """

    def read(self, name: str) -> bytes: ...

    def etag(self, name: str) -> str: ...

    def read_with_etag(self, name: str) -> Tuple[bytes, str]: ...

    def write(self, name: str, raw_body: bytes, precondition: Optional[str] = None,
              max_backups: int = ...) -> str: ...


@runtime_checkable
class BackupManagerProtocol(Protocol):
    def snapshot(self, base_name: str, content: bytes) -> str: ...

    def list(self, prefix: str) -> List[str]: ...

    def rotate(self, base_name: str, max_backups: int) -> List[str]: ...

    def fetch(self, filename: str) -> Tuple[bytes, str]: ...

    def delete(self, filename: str) -> str: ...

    def verify(self, filename: str) -> Optional[bool]: ...

    def sanitize(self, filename: str) -> str: ...
