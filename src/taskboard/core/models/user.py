"""User Domain Model

TaskService 只读取 User，不创建也不修改。
"""

from pydantic import BaseModel, Field


class User(BaseModel):
    """User 数据模型"""

    id: int = Field(description="用户 ID")
    user_name: str = Field(min_length=1, description="用户名")
    email_address: str | None = Field(default=None, description="邮箱地址")

    def to_user_identifier(self) -> "UserIdentifier":
        return UserIdentifier(user_id=self.id)


class UserIdentifier(BaseModel):
    """通知收件人标识"""

    user_id: int
