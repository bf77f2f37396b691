"""
Mailing selection used by the compatibility comparison.
"""
from typing import Iterable, Iterator, List


class MailingSelection:
    """A set of distinct mailing names, iterated in first-selected order."""

    def __init__(self, names: Iterable[str] = ()):
        self._names: dict = {}
        for name in names:
            self.add(name)

    def add(self, name: str) -> None:
        name = (name or "").strip()
        if name:
            self._names.setdefault(name, None)

    def remove(self, name: str) -> None:
        self._names.pop(name, None)

    def toggle(self, name: str) -> None:
        if name in self._names:
            self.remove(name)
        else:
            self.add(name)

    def toggle_all(self, available: Iterable[str]) -> None:
        """Select every available name, or clear if all of them are already selected."""
        available = list(available)
        if available and len(self) == len(available) and all(name in self for name in available):
            self.clear()
        else:
            self.clear()
            for name in available:
                self.add(name)

    def clear(self) -> None:
        self._names.clear()

    @property
    def is_empty(self) -> bool:
        return not self._names

    def to_list(self) -> List[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self):
        return f"MailingSelection({self.to_list()!r})"
