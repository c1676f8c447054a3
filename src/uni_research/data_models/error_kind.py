from enum import Enum
from typing import Optional


# =============================================================================
#   ErrorKind
# =============================================================================
class ErrorKind(Enum):
    """Application status codes carried in every response envelope.

    Each member is an immutable ``(code, default_message)`` pair.
    """

    # Success
    SUCCESS = (200, "操作成功")

    # Client errors 4xx
    BAD_REQUEST = (400, "请求参数错误")
    UNAUTHORIZED = (401, "未授权，请先登录")
    FORBIDDEN = (403, "权限不足，拒绝访问")
    NOT_FOUND = (404, "请求的资源不存在")

    # Business errors - users and auth tokens
    USER_NOT_FOUND = (4001, "用户不存在")
    USER_ALREADY_EXISTS = (4002, "用户已存在")
    WRONG_PASSWORD = (4003, "密码错误")
    TOKEN_EXPIRED = (4004, "Token 已过期")
    TOKEN_INVALID = (4005, "Token 无效")

    # Business errors - documents
    DOCUMENT_NOT_FOUND = (4101, "文档不存在")
    DOCUMENT_PROCESSING = (4102, "文档正在处理中")

    # Server errors 5xx
    INTERNAL_SERVER_ERROR = (500, "服务器内部错误")
    AI_SERVICE_ERROR = (5001, "AI 服务调用失败")
    DATABASE_ERROR = (5002, "数据库操作失败")

    def __init__(self, code: int, default_message: str) -> None:
        self.code = code
        self.default_message = default_message

    @classmethod
    def from_code(cls, code: int) -> Optional["ErrorKind"]:
        """Return the member registered under ``code``, or None."""
        for kind in cls:
            if kind.code == code:
                return kind
        return None
