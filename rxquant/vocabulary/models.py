from dataclasses import dataclass
from enum import StrEnum


class UnitClass(StrEnum):
    """Rounding family a dispensing unit belongs to."""

    COUNT_BASED = "count_based"
    VOLUME_BASED = "volume_based"
    OTHER = "other"


@dataclass(frozen=True)
class FrequencyMatch:
    """A recognised frequency phrase.

    ``times_per_day`` is ``None`` for the as-needed family.
    """

    times_per_day: float | None
    phrase: str

    @property
    def is_as_needed(self) -> bool:
        return self.times_per_day is None
