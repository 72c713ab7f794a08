"""
Date and time utility classes for the reservation engine

Timestamps are stored as naive UTC; the hotel's local time only matters
for booking-code months and gateway timestamps.
"""

from datetime import datetime
from typing import Optional

import pytz


class DateTimeHelper:
    """Date and time helpers bound to a hotel timezone"""

    @staticmethod
    def to_local(dt: datetime, timezone: str) -> datetime:
        """Convert a stored datetime to local time, assuming UTC if naive"""
        tz_obj = pytz.timezone(timezone)
        if dt.tzinfo is None:
            dt = pytz.UTC.localize(dt)
        return dt.astimezone(tz_obj)

    @staticmethod
    def month_code(dt: datetime, timezone: Optional[str] = None) -> str:
        """``MMYY`` of the given instant, in local time when a timezone is given"""
        if timezone:
            dt = DateTimeHelper.to_local(dt, timezone)
        return dt.strftime('%m%y')

    @staticmethod
    def gateway_timestamp(dt: datetime, timezone: str) -> str:
        """``yyyyMMddHHmmss`` in local time, as payment gateways expect"""
        return DateTimeHelper.to_local(dt, timezone).strftime('%Y%m%d%H%M%S')

