"""Exercise model — one catalog entry tagged with its muscle group."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class Exercise:
    """A single exercise.

    ``muscle_group`` is a lower-case tag from the catalog's closed set
    (e.g. "chest"). Instances are immutable, so handing them out from the
    catalog never exposes catalog state to mutation.
    """

    id: str
    name: str
    muscle_group: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Exercise:
        """Build from a mapping; accepts ``muscle_group`` or ``muscleGroup``."""
        group = data.get("muscle_group", data.get("muscleGroup", ""))
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            muscle_group=str(group).strip().lower(),
        )

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "muscle_group": self.muscle_group}
