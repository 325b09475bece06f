from typing import Any, Protocol
import json
import math
import yaml


class Serializer(Protocol):
    """Serialize/deserialize Python values to the bytes stored on disk.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    """

    def dump(self, value: Any) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are Python extensions that strict JSON parsers refuse
    raise ValueError(f"Invalid JSON constant: {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


class JSONSerializer:
    """Pretty-printed JSON, the canonical on-disk form of a document.

    Keys keep their insertion order, so two logically equal documents sent
    with different key orders are stored (and fingerprinted) differently.
    """

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def dump(self, value: Any) -> bytes:
        return json.dumps(value, indent=self.indent, ensure_ascii=False, allow_nan=False).encode("utf-8")

    def load(self, data: bytes) -> Any:
        # json.loads accepts bytes and detects UTF-8/16/32 itself
        return json.loads(data, parse_float=_finite_float, parse_constant=_reject_constant)


class YAMLSerializer:
    """Serializer using YAML (text), used for the server configuration file."""

    def dump(self, value: Any) -> bytes:
        return yaml.safe_dump(value, sort_keys=False).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return yaml.safe_load(data.decode("utf-8"))
