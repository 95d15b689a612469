"""
业务异常

所有异常都继承 ValueError，调用方沿用 `except ValueError` 也能捕获。
路由层把它们翻译为 HTTP 状态码，见 `http_status_for`。
"""
from fastapi import status


class ReservationError(ValueError):
    """业务异常基类"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReservationError):
    """字段缺失 / 格式错误 / 跨字段规则不满足"""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ReservationError):
    """引用的 id 不存在"""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ReservationError):
    """房间在所选日期不可用，或邮箱已被占用"""

    status_code = status.HTTP_409_CONFLICT


class IllegalStateError(ReservationError):
    """状态机不允许的转换"""

    status_code = status.HTTP_409_CONFLICT


def http_status_for(error: Exception) -> int:
    return getattr(error, "status_code", status.HTTP_400_BAD_REQUEST)


__all__ = [
    "ReservationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "IllegalStateError",
    "http_status_for",
]
