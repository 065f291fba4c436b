"""邮件发送接口

默认 NullEmailSender 只记录日志，不做真实投递。
"""

from typing import Protocol

import structlog

log = structlog.get_logger()


class EmailSender(Protocol):
    async def send(self, to: str, subject: str, body: str) -> None: ...


class NullEmailSender:
    """不投递的 EmailSender"""

    async def send(self, to: str, subject: str, body: str) -> None:
        log.debug("email_send_skipped", to=to, subject=subject, body_length=len(body))
