"""Domain model for configurable regional/cultural affinity profiles."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

VIETNAMESE_SCRIPT_PATTERN = (
    "[àáạảãâầấậẩẫăằắặẳẵèéẹẻẽêềếệểễìíịỉĩòóọỏõôồốộổỗơờớợởỡùúụủũưừứựửữỳýỵỷỹđĐ]"
)


@dataclass(frozen=True)
class RegionalProfile:
    """Place names and script character class for one target region."""

    name: str
    place_names: tuple[str, ...]
    script_pattern: str
    _compiled: re.Pattern[str] | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        lowered = tuple(place.strip().lower() for place in self.place_names if place.strip())
        object.__setattr__(self, "place_names", lowered)
        compiled = re.compile(self.script_pattern) if self.script_pattern else None
        object.__setattr__(self, "_compiled", compiled)

    def matches_place(self, location: str) -> bool:
        """Return True when the location mentions any configured place name."""
        text = location.lower()
        if not text:
            return False
        return any(place in text for place in self.place_names)

    def matches_script(self, text: str) -> bool:
        """Return True when the text contains a character from the script class."""
        if self._compiled is None or not text:
            return False
        return self._compiled.search(text) is not None


@dataclass(frozen=True)
class RegionalProfileCatalog:
    """Named regional profiles bundled in a single schema version."""

    schema_version: int
    default_profile: str
    profiles: tuple[RegionalProfile, ...]


DEFAULT_REGIONAL_PROFILE = RegionalProfile(
    name="vietnam",
    place_names=("vietnam", "việt nam", "hanoi", "ho chi minh", "saigon", "da nang"),
    script_pattern=VIETNAMESE_SCRIPT_PATTERN,
)
