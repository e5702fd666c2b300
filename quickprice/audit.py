"""Change log for fields the trigger cascade forces on a scenario."""
from __future__ import annotations

from typing import Any, List

from quickprice.models import FieldChange


class ChangeLog:
    """In-memory log; one instance per pricing run."""

    def __init__(self) -> None:
        self.entries: List[FieldChange] = []

    def record(self, rule: str, field: str, old_value: Any, new_value: Any) -> None:
        """Record that ``rule`` changed ``field`` from ``old_value`` to ``new_value``."""
        self.entries.append(
            FieldChange(rule=rule, field=field, old_value=old_value, new_value=new_value)
        )

    def fields(self) -> List[str]:
        return [e.field for e in self.entries]

    def as_dict(self) -> List[dict]:
        """Return log entries as dictionaries for display or inspection."""
        return [
            {"rule": e.rule, "field": e.field, "old": e.old_value, "new": e.new_value}
            for e in self.entries
        ]
