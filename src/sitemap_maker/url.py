from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import ClassVar, Dict, Optional, Tuple

from .errors import InvalidInput
from .validators import CHANGE_FREQUENCIES, PRIORITIES, validate_location


@dataclass
class URL:
    """
    A single page entry of a sitemap.

    Only ``location`` is checked, and only when the entry is created;
    assigning a new location later is not re-validated. ``change_frequency``
    and ``priority`` accept any string, the constants below are the values
    search engines understand. ``last_modified`` is kept as given and only
    parsed when the sitemap is rendered.
    """

    location: str
    change_frequency: Optional[str] = None
    priority: Optional[str] = None
    last_modified: Optional[str] = None

    CHANGEFREQ_ALWAYS: ClassVar[str] = "always"
    CHANGEFREQ_HOURLY: ClassVar[str] = "hourly"
    CHANGEFREQ_DAILY: ClassVar[str] = "daily"
    CHANGEFREQ_WEEKLY: ClassVar[str] = "weekly"
    CHANGEFREQ_MONTHLY: ClassVar[str] = "monthly"
    CHANGEFREQ_YEARLY: ClassVar[str] = "yearly"
    CHANGEFREQ_NEVER: ClassVar[str] = "never"
    CHANGE_FREQUENCIES: ClassVar[Tuple[str, ...]] = CHANGE_FREQUENCIES

    PRIORITY_MAX: ClassVar[str] = "1.0"
    PRIORITY_09: ClassVar[str] = "0.9"
    PRIORITY_08: ClassVar[str] = "0.8"
    PRIORITY_07: ClassVar[str] = "0.7"
    PRIORITY_06: ClassVar[str] = "0.6"
    PRIORITY_05: ClassVar[str] = "0.5"
    PRIORITY_04: ClassVar[str] = "0.4"
    PRIORITY_03: ClassVar[str] = "0.3"
    PRIORITY_02: ClassVar[str] = "0.2"
    PRIORITY_01: ClassVar[str] = "0.1"
    PRIORITY_00: ClassVar[str] = "0.0"
    PRIORITIES: ClassVar[Tuple[str, ...]] = PRIORITIES

    def __post_init__(self) -> None:
        is_valid, msg = validate_location(self.location)
        if not is_valid:
            raise InvalidInput(msg)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)
