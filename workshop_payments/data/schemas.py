"""
Row, sort and view-state schemas for the payments model.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SortKey(str, Enum):
    WHO = "who"
    WHY = "why"
    AMOUNT = "amount"


@dataclass(frozen=True)
class Row:
    """One payment: who received it, why, and how much."""
    who: str = ""
    why: str = ""
    amount: float = 0.0

    def is_blank(self) -> bool:
        return not self.who and not self.why and self.amount == 0

    def to_json(self) -> dict:
        return {"who": self.who, "why": self.why, "amount": self.amount}


@dataclass
class SortSpec:
    key: Optional[SortKey] = None
    ascending: bool = True

    def toggle(self, key: SortKey) -> None:
        """Same key flips direction; a new key starts ascending."""
        key = SortKey(key)
        if self.key == key:
            self.ascending = not self.ascending
        else:
            self.key = key
            self.ascending = True

    def to_json(self) -> dict:
        return {"key": self.key.value if self.key else None, "asc": self.ascending}

    @staticmethod
    def from_json(data: dict | None) -> "SortSpec":
        if not isinstance(data, dict):
            return SortSpec()
        try:
            key = SortKey(data.get("key")) if data.get("key") else None
        except ValueError:
            key = None
        asc = data.get("asc", True)
        return SortSpec(key=key, ascending=asc if isinstance(asc, bool) else True)


@dataclass(frozen=True)
class EditTarget:
    """An in-progress edit: where it points and what the row looked like then."""
    sheet: str
    position: int
    original: Row


@dataclass
class ViewState:
    """Selection, sort and filter state. Refers to the store by name/index only."""
    active_sheet: Optional[str] = None
    sort: SortSpec = field(default_factory=SortSpec)
    person_filter: Optional[str] = None
    editing: Optional[EditTarget] = None

    @property
    def editing_position(self) -> Optional[int]:
        return self.editing.position if self.editing else None
