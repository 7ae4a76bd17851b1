"""
Name -> object lookup table used for the solver drivers.

Names are matched case-insensitively and without surrounding blanks, so
``"GA "`` and ``"ga"`` resolve to the same entry.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, TypeVar

T = TypeVar("T")

_MISSING = object()


def _normalize(key: str) -> str:
    return str(key).strip().lower()


class Registry(Generic[T]):
    """Named entries; ``register`` also works as a decorator."""

    def __init__(self, name: str = "registry") -> None:
        self.name = name
        self._entries: dict[str, T] = {}

    def register(self, key: str, item: T | None = None, *, override: bool = False) -> Callable[[T], T] | T:
        """
        Add ``item`` under ``key``, or return a decorator doing so when ``item`` is omitted.

        Raises:
            ValueError: if ``key`` is taken and ``override`` is False.
        """
        norm = _normalize(key)

        def _add(obj: T) -> T:
            if norm in self._entries and not override:
                raise ValueError(f"'{norm}' already exists in {self.name}")
            self._entries[norm] = obj
            return obj

        return _add if item is None else _add(item)

    def get(self, key: str, default: Any = _MISSING) -> T:
        norm = _normalize(key)
        if norm in self._entries:
            return self._entries[norm]
        if default is not _MISSING:
            return default
        raise KeyError(f"'{norm}' not found in {self.name} (available: {', '.join(self.list())})")

    def list(self) -> list[str]:
        """Sorted entry names."""
        return sorted(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _normalize(key) in self._entries

    def __getitem__(self, key: str) -> T:
        return self.get(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["Registry"]
