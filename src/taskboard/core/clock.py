"""时间源"""

from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """UTC 系统时钟"""

    def now(self) -> datetime:
        return datetime.now(UTC)
