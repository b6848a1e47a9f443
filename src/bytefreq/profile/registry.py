from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

RAGGED_PREFIX = "RaggedErr"


def ragged_column_name(ordinal: int) -> str:
    return f"{RAGGED_PREFIX}{ordinal}"


@dataclass
class ColumnRegistry:
    """Append-only column name -> index mapping shared by every normalizer.

    Indices are handed out in first-seen order and never reassigned, so
    ``name_of(i)`` is stable for the lifetime of a run.
    """

    name_to_id: dict[str, int] = field(default_factory=dict)
    id_to_name: list[str] = field(default_factory=list)

    def get_or_create(self, name: str) -> int:
        idx = self.name_to_id.get(name)
        if idx is None:
            idx = len(self.id_to_name)
            self.name_to_id[name] = idx
            self.id_to_name.append(name)
        return idx

    def index_of(self, name: str) -> int | None:
        return self.name_to_id.get(name)

    def name_of(self, idx: int) -> str:
        return self.id_to_name[idx]

    def names(self) -> list[str]:
        return list(self.id_to_name)

    def items(self) -> Iterator[tuple[int, str]]:
        return iter(enumerate(self.id_to_name))

    def __contains__(self, name: object) -> bool:
        return name in self.name_to_id

    def __len__(self) -> int:
        return len(self.id_to_name)
