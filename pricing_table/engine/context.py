from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, FrozenSet, Iterable, Optional
from zoneinfo import ZoneInfo

from dateutil.parser import isoparse, parse


@dataclass(frozen=True)
class Viewer:
    """
    Who is looking at the product page. No user_id = not logged in.
    """

    user_id: Optional[str] = None
    roles: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    def has_role(self, role: str) -> bool:
        return self.is_authenticated and str(role) in self.roles

    @staticmethod
    def anonymous() -> "Viewer":
        return Viewer()

    @staticmethod
    def of(user_id: Optional[str], roles: Iterable[str] = ()) -> "Viewer":
        return Viewer(
            user_id=str(user_id) if user_id else None,
            roles=frozenset(str(r).strip() for r in roles if str(r).strip()),
        )


class SiteClock:
    """
    Site-local time. `now` can be pinned for deterministic tests.
    """

    def __init__(self, tz_name: str = "UTC", now: Optional[datetime] = None):
        self.tz = ZoneInfo(tz_name)
        self._fixed_now = now

    def now(self) -> datetime:
        if self._fixed_now is not None:
            if self._fixed_now.tzinfo is None:
                return self._fixed_now.replace(tzinfo=self.tz)
            return self._fixed_now.astimezone(self.tz)
        return datetime.now(self.tz)

    def local_date(self, raw: Any) -> Optional[date]:
        """
        Calendar day of a stored date value, in site time.
        Accepts date/datetime objects, ISO strings ("2025-01-31", "2025-01-31 10:00")
        and the looser forms stored by hand ("2025/01/31", "31-01-2025", "01/31/2025").
        """
        if raw is None:
            return None
        if isinstance(raw, datetime):
            if raw.tzinfo is not None:
                raw = raw.astimezone(self.tz)
            return raw.date()
        if isinstance(raw, date):
            return raw

        s = str(raw).strip()
        if not s:
            return None
        try:
            return self.local_date(isoparse(s))
        except ValueError:
            pass
        # dashes: day first (31-01-2025), slashes: month first (01/31/2025)
        try:
            return self.local_date(parse(s, dayfirst="-" in s))
        except (ValueError, OverflowError):
            return None

    def day_start(self, raw: Any) -> Optional[datetime]:
        """Midnight (site time) of the day `raw` falls on."""
        d = self.local_date(raw)
        if d is None:
            return None
        return datetime(d.year, d.month, d.day, tzinfo=self.tz)
