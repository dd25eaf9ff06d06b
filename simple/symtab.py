from typing import Dict, Iterator, List, Optional

from .types import Value


class SymtabEntry:
    """A named variable and the storage slot the executor reads and writes."""
    def __init__(self, name: str):
        self.name = name
        self.value: Optional[Value] = None

    def __repr__(self) -> str:
        return f"SymtabEntry({self.name!r}, {self.value!r})"


class Symtab:
    """Case-insensitive mapping from names to entries. Entries are never removed."""
    def __init__(self):
        self.entries: Dict[str, SymtabEntry] = {}

    def lookup(self, name: str) -> Optional[SymtabEntry]:
        return self.entries.get(name.lower())

    def enter(self, name: str) -> SymtabEntry:
        key = name.lower()
        entry = self.entries.get(key)
        if entry is None:
            entry = SymtabEntry(key)
            self.entries[key] = entry
        return entry

    def names(self) -> List[str]:
        return list(self.entries.keys())

    def __contains__(self, name: str) -> bool:
        return name.lower() in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[SymtabEntry]:
        return iter(self.entries.values())
