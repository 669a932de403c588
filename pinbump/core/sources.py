"""Snapshot vs. live network sources.

Every external source is one of two variants, chosen once when the
pipeline is built:

* ``Snapshot(value)`` — a pre-supplied response; never touches the network.
* ``Live(fetcher)``   — calls *fetcher* on demand.

When the network is disabled and no snapshot was supplied, the source is
a ``Live`` whose fetcher raises ``NetworkDisabledError`` on first use, so
a required source fails fast instead of attempting a request.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from pinbump.config import ConfigurationError

T = TypeVar("T")


class NetworkDisabledError(ConfigurationError):
    """A required source has no snapshot and network access is disabled."""


class Snapshot(Generic[T]):
    """A source backed by a pre-supplied value.

    Keyed lookups (``get(key)``) read from a mapping snapshot.
    """

    kind = "snapshot"

    def __init__(self, name: str, value: T) -> None:
        self.name = name
        self.value = value

    def get(self, key: str | None = None) -> Any:
        if key is None:
            return self.value
        if isinstance(self.value, Mapping):
            return self.value.get(key)
        return None

    def __repr__(self) -> str:
        return f"<Snapshot {self.name!r}>"


class Live(Generic[T]):
    """A source that calls its fetcher on every ``get``."""

    kind = "live"

    def __init__(self, name: str, fetcher: Callable[..., T]) -> None:
        self.name = name
        self.fetcher = fetcher

    def get(self, key: str | None = None) -> T:
        if key is None:
            return self.fetcher()
        return self.fetcher(key)

    def __repr__(self) -> str:
        return f"<Live {self.name!r}>"


Source = Snapshot[T] | Live[T]


def _network_disabled(name: str) -> Callable[..., Any]:
    def _fail(*_args: Any) -> Any:
        raise NetworkDisabledError(
            f"Network access disabled via no_network_fallback. "
            f"Provide a {name} snapshot to run offline."
        )

    return _fail


def _absent(*_args: Any) -> None:
    return None


def select_source(
    name: str,
    snapshot: T | None,
    fetcher: Callable[..., T],
    *,
    no_network: bool,
    optional: bool = False,
) -> Snapshot[T] | Live[T]:
    """Choose the variant for one source.

    With *optional* set, an offline source without a snapshot yields None
    instead of failing.
    """
    if snapshot is not None:
        return Snapshot(name, snapshot)
    if no_network:
        return Live(name, _absent if optional else _network_disabled(name))
    return Live(name, fetcher)
