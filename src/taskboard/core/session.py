"""调用者会话"""

from dataclasses import dataclass

from .exceptions import AuthenticationError


@dataclass(frozen=True)
class CallerSession:
    """当前请求的调用者，user_id 为 None 表示匿名"""

    user_id: int | None = None

    def get_user_id(self) -> int:
        """返回调用者 ID，匿名会话抛出 AuthenticationError"""
        if self.user_id is None:
            raise AuthenticationError()
        return self.user_id
