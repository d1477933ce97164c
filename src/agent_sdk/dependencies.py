"""Type- and name-indexed dependency container for tool handlers."""

from __future__ import annotations

import threading
from typing import Any, TypeVar

from agent_sdk.errors import MissingDependencyError

T = TypeVar("T")


class DependencyContainer:
    """Registry of shared values available to tool handlers.

    Values live in two maps: one keyed by concrete type (one value per type)
    and one keyed by name. Values are stored by reference, so a container
    shared between agents shares the underlying objects too; mutable values
    must synchronize themselves.

    Lookups never raise: a missing key, or a value that is not an instance
    of the requested type, is reported as ``None``. Handlers that cannot run
    without a value use :meth:`require` / :meth:`require_named`.
    """

    def __init__(self) -> None:
        self._typed: dict[type, Any] = {}
        self._named: dict[str, Any] = {}
        self._lock = threading.Lock()

    def insert(self, value: Any, key_type: type | None = None) -> None:
        """Store *value* under its concrete type (or *key_type*). Replaces any previous value."""
        key = key_type or type(value)
        with self._lock:
            self._typed[key] = value

    def insert_named(self, key: str, value: Any) -> None:
        """Store *value* under *key*. Replaces any previous value."""
        with self._lock:
            self._named[key] = value

    def get(self, key_type: type[T]) -> T | None:
        with self._lock:
            value = self._typed.get(key_type)
        if value is None:
            return None
        # Keys isinstance cannot check (list[int], plain Protocols) match by identity
        if _instance_check(value, key_type) is False:
            return None
        return value

    def get_named(self, key: str, expected_type: type[T] | None = None) -> Any:
        with self._lock:
            value = self._named.get(key)
        if value is None:
            return None
        if expected_type is not None and not _instance_check(value, expected_type):
            return None
        return value

    def require(self, key_type: type[T]) -> T:
        """Like :meth:`get` but raise MissingDependencyError when absent."""
        value = self.get(key_type)
        if value is None:
            raise MissingDependencyError(key_type.__name__)
        return value

    def require_named(self, key: str, expected_type: type[T] | None = None) -> Any:
        """Like :meth:`get_named` but raise MissingDependencyError when absent."""
        value = self.get_named(key, expected_type)
        if value is None:
            raise MissingDependencyError(key)
        return value

    def merged_with(self, overrides: DependencyContainer) -> DependencyContainer:
        """Return a new container holding both sets of values, *overrides* winning.

        Neither input is modified.
        """
        merged = DependencyContainer()
        with self._lock:
            merged._typed.update(self._typed)
            merged._named.update(self._named)
        with overrides._lock:
            merged._typed.update(overrides._typed)
            merged._named.update(overrides._named)
        return merged

    def __len__(self) -> int:
        with self._lock:
            return len(self._typed) + len(self._named)

    def __repr__(self) -> str:
        with self._lock:
            types = sorted(t.__name__ for t in self._typed)
            names = sorted(self._named)
        return f"DependencyContainer(types={types}, names={names})"


def _instance_check(value: Any, expected: Any) -> bool | None:
    """Return ``isinstance(value, expected)``, or None when *expected* cannot be checked."""
    try:
        return isinstance(value, expected)
    except TypeError:
        return None
