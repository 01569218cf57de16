"""Fixed timeline shared by repository tests: NOW is the injected clock value."""

from datetime import datetime, timedelta, timezone

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
HOUR = timedelta(hours=1)
UTC_PLUS_5 = timezone(timedelta(hours=5))
UTC_MINUS_3 = timezone(timedelta(hours=-3))
