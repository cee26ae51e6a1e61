from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

"""JobSite domain model for the job-site tracker.

A JobSite is one tracked construction project. Its stages are five fixed,
ordered completion milestones (Planning -> Inspection). The serialized form
uses camelCase keys so stored collections stay compatible with the mobile
app's JSON array format.
"""

__all__ = [
    "STAGE_COUNT",
    "STAGE_NAMES",
    "JobSite",
    "Stages",
]

STAGE_NAMES: tuple[str, ...] = (
    "Planning",
    "Foundation",
    "Construction",
    "Finishing",
    "Inspection",
)

STAGE_COUNT = len(STAGE_NAMES)


@dataclass(frozen=True)
class Stages:
    """Completion flags for the five project phases, in fixed order."""
    stage1: bool = False  # Planning
    stage2: bool = False  # Foundation
    stage3: bool = False  # Construction
    stage4: bool = False  # Finishing
    stage5: bool = False  # Inspection

    @staticmethod
    def from_flags(flags: Iterable[bool]) -> Stages:
        """Build Stages from exactly five positional flags.

        Raises:
            ValueError: if the iterable does not yield exactly five values
        """
        values = [bool(f) for f in flags]
        if len(values) != STAGE_COUNT:
            raise ValueError(f"expected {STAGE_COUNT} stage flags, got {len(values)}")
        return Stages(*values)

    def as_tuple(self) -> tuple[bool, bool, bool, bool, bool]:
        return (self.stage1, self.stage2, self.stage3, self.stage4, self.stage5)

    def with_slot(self, index: int, value: bool) -> Stages:
        """Return a copy with the 0-based slot ``index`` set to ``value``."""
        if not 0 <= index < STAGE_COUNT:
            raise IndexError(f"stage slot out of range: {index}")
        return replace(self, **{f"stage{index + 1}": bool(value)})

    def completed_count(self) -> int:
        return sum(1 for flag in self.as_tuple() if flag)

    def to_dict(self) -> dict[str, bool]:
        return {f"stage{i + 1}": flag for i, flag in enumerate(self.as_tuple())}

    @staticmethod
    def from_dict(data: dict[str, Any] | None) -> Stages:
        data = data or {}
        return Stages.from_flags(bool(data.get(f"stage{i + 1}", False)) for i in range(STAGE_COUNT))


@dataclass(frozen=True)
class JobSite:
    """One construction job site record.

    Dates (``due_date``, ``created_at``, ``updated_at``) are ``YYYY-MM-DD``
    strings. ``due_date`` may hold the raw imported text when it could not be
    parsed as a calendar date.
    """
    id: str
    job_name: str
    job_type: str
    location: str = ""
    coordinator: str = ""
    contractor: str = ""
    due_date: str = ""
    notes: str = ""
    stages: Stages = field(default_factory=Stages)
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase storage shape."""
        return {
            "id": self.id,
            "jobName": self.job_name,
            "jobType": self.job_type,
            "location": self.location,
            "coordinator": self.coordinator,
            "contractor": self.contractor,
            "dueDate": self.due_date,
            "notes": self.notes,
            "stages": self.stages.to_dict(),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> JobSite:
        """Deserialize from the camelCase storage shape.

        ``id`` is mandatory (KeyError when absent); other text fields default
        to an empty string and missing stage keys default to False.
        """
        return JobSite(
            id=str(data["id"]),
            job_name=str(data.get("jobName", "")),
            job_type=str(data.get("jobType", "")),
            location=str(data.get("location", "")),
            coordinator=str(data.get("coordinator", "")),
            contractor=str(data.get("contractor", "")),
            due_date=str(data.get("dueDate", "")),
            notes=str(data.get("notes", "")),
            stages=Stages.from_dict(data.get("stages")),
            created_at=str(data.get("createdAt", "")),
            updated_at=str(data.get("updatedAt", "")),
        )
