"""
collection.py
Ordered, user-editable collections of mods and plugins.

An entry's priority is its index in the owning collection: index 0 is the
lowest priority, the last index the highest.  Entries never store their own
priority; moving an entry means removing it and reinserting it elsewhere,
which renumbers every entry in between.

Names are unique within a collection under case-insensitive comparison.
When a rebuild offers two entries with the same name, the first one wins.

Listeners registered with add_listener() are called once after every
mutation with the collection as the only argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Iterator, TypeVar


@dataclass
class Entry:
    name: str
    is_active: bool = False

    @property
    def key(self) -> str:
        """Case-insensitive identity used for lookups and deduplication."""
        return self.name.lower()


@dataclass
class ModEntry(Entry):
    """A folder under the mods root."""


@dataclass
class PluginEntry(Entry):
    """A .esm/.esp/.esl file from the base game or an active mod."""


E = TypeVar("E", bound=Entry)


class OrderedCollection(Generic[E]):

    def __init__(self, entries: Iterable[E] = ()):
        self._entries: list[E] = []
        self._listeners: list[Callable[[OrderedCollection[E]], None]] = []
        self._fill(entries)

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._entries))

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self._find(name) is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._entries!r})"

    @property
    def entries(self) -> list[E]:
        return list(self._entries)

    def names(self) -> list[str]:
        return [e.name for e in self._entries]

    def active(self) -> list[E]:
        """Active entries in ascending priority."""
        return [e for e in self._entries if e.is_active]

    def get(self, name: str) -> E | None:
        idx = self._find(name)
        return None if idx is None else self._entries[idx]

    def index_of(self, name: str) -> int:
        """Return the priority of *name*.  Raises KeyError if it is not present."""
        idx = self._find(name)
        if idx is None:
            raise KeyError(name)
        return idx

    # -----------------------------------------------------------------------
    # Mutation
    # -----------------------------------------------------------------------

    def replace(self, entries: Iterable[E]) -> None:
        """Clear the collection and append *entries* in order."""
        self._entries.clear()
        self._fill(entries)
        self._notify()

    def set_active(self, name: str, active: bool) -> bool:
        """Set the active flag of *name*.  Returns True if the flag changed."""
        entry = self._entries[self.index_of(name)]
        if entry.is_active == active:
            return False
        entry.is_active = active
        self._notify()
        return True

    def move(self, name: str, priority: int) -> int:
        """Move *name* to *priority*, clamped to the valid range.

        Returns the priority the entry ended up at.
        """
        old = self.index_of(name)
        new = max(0, min(priority, len(self._entries) - 1))
        if new != old:
            entry = self._entries.pop(old)
            self._entries.insert(new, entry)
            self._notify()
        return new

    def add_listener(self, fn: Callable[[OrderedCollection[E]], None]) -> None:
        self._listeners.append(fn)

    def remove_listener(self, fn: Callable[[OrderedCollection[E]], None]) -> None:
        try:
            self._listeners.remove(fn)
        except ValueError:
            pass

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _find(self, name: str) -> int | None:
        key = name.lower()
        for idx, entry in enumerate(self._entries):
            if entry.key == key:
                return idx
        return None

    def _fill(self, entries: Iterable[E]) -> None:
        seen = {e.key for e in self._entries}
        for entry in entries:
            if entry.key in seen:
                continue
            seen.add(entry.key)
            self._entries.append(entry)

    def _notify(self) -> None:
        for fn in list(self._listeners):
            fn(self)
