"""Record collaborators.

The keyword pipeline never talks to a concrete ORM. It only needs named
attribute access plus enough change tracking for the save hook to decide
whether keywords are stale. ``MappingRecord`` and ``ModelRecord`` are the
in-memory implementations used by callers without an ORM and by the tests.
"""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Record(Protocol):
    """Attribute access and change tracking required from a record."""

    @property
    def is_new(self) -> bool:  # pragma: no cover - interface definition
        ...

    def get(self, name: str) -> Any:  # pragma: no cover - interface definition
        ...

    def set(self, name: str, value: Any) -> None:  # pragma: no cover - interface definition
        ...

    def is_modified(self, name: str) -> bool:  # pragma: no cover - interface definition
        ...


class _SnapshotTracking:
    """Shared change tracking against a snapshot taken at load/save time."""

    _snapshot: dict[str, Any]
    _is_new: bool

    @property
    def is_new(self) -> bool:
        return self._is_new

    def is_modified(self, name: str) -> bool:
        if self._is_new:
            return True
        return self.get(name) != self._snapshot.get(name)

    def mark_saved(self) -> None:
        """Record the current state as persisted; clears ``is_new`` and modifications."""
        self._snapshot = deepcopy(self._current_state())
        self._is_new = False

    def get(self, name: str) -> Any:  # pragma: no cover - overridden
        raise NotImplementedError

    def _current_state(self) -> dict[str, Any]:  # pragma: no cover - overridden
        raise NotImplementedError


class MappingRecord(_SnapshotTracking):
    """Record backed by a plain dictionary.

    Args:
        data: Initial attribute values (copied).
        is_new: False when the data represents an already persisted record.
    """

    def __init__(self, data: Mapping[str, Any] | None = None, *, is_new: bool = True) -> None:
        self._data: dict[str, Any] = dict(data or {})
        self._is_new = is_new
        self._snapshot = deepcopy(self._data)

    def get(self, name: str) -> Any:
        return self._data.get(name)

    def set(self, name: str, value: Any) -> None:
        self._data[name] = value

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def _current_state(self) -> dict[str, Any]:
        return self._data

    def __repr__(self) -> str:
        return f"MappingRecord({self._data!r}, is_new={self._is_new})"


class ModelRecord(_SnapshotTracking):
    """Record adapter over any attribute-bearing object, e.g. a pydantic model.

    Missing attributes read as ``None``. Assigning an attribute the wrapped
    object does not declare is left to the object to accept or reject.
    """

    def __init__(self, model: Any, *, is_new: bool = True) -> None:
        self.model = model
        self._is_new = is_new
        self._snapshot = deepcopy(self._current_state())

    def get(self, name: str) -> Any:
        return getattr(self.model, name, None)

    def set(self, name: str, value: Any) -> None:
        setattr(self.model, name, value)

    def _current_state(self) -> dict[str, Any]:
        dump = getattr(self.model, "model_dump", None)
        if callable(dump):
            return dump()
        return dict(vars(self.model))
