# src/todo_today/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage and OS services swappable and makes testing easier.
"""

from datetime import datetime
from typing import Callable, Iterable, Protocol

Clock = Callable[[], datetime]
# Returns an aware "now"; injected so tests can pin time.


class KeyValueStore(Protocol):
    """Device-local key-value persistence (get/set by key, synchronous)."""

    def get(self, key: str) -> bytes | None: ...
    def set(self, key: str, value: bytes) -> None: ...
    def delete(self, key: str) -> None: ...
    def keys(self) -> Iterable[str]: ...

    def get_bool(self, key: str, default: bool = False) -> bool: ...
    def set_bool(self, key: str, value: bool) -> None: ...


class UrlOpener(Protocol):
    """Opens an external URL (privacy policy link)."""

    def open(self, url: str) -> bool: ...
