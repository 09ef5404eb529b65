"""日志系统使用的增强错误处理辅助方法."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from flask import has_request_context, request
from werkzeug.exceptions import HTTPException

from editgrid.constants import HttpStatus
from editgrid.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity
from editgrid.errors import AppError
from editgrid.utils.logging.context_vars import request_id_var, user_id_var


@dataclass(slots=True)
class ErrorContext:
    """异常发生时采集的上下文信息.

    Attributes:
        error: 捕获的异常对象.
        request: Flask 请求对象,可选.
        error_id: 唯一错误标识符,自动生成.
        timestamp: 错误发生时间戳.
        request_id: 请求 ID,从上下文变量获取.
        user_id: 用户 ID,从上下文变量获取.
        url: 请求 URL.
        method: HTTP 方法.
        extra: 额外的上下文信息字典.

    """

    error: Exception
    request: Any | None = None
    error_id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    request_id: str | None = field(default_factory=lambda: request_id_var.get())
    user_id: int | None = field(default_factory=lambda: user_id_var.get())
    url: str | None = None
    method: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def ensure_request(self) -> None:
        """在请求上下文中补齐 URL、方法与客户端地址."""
        if self.request is None and has_request_context():
            self.request = request

        if self.request is not None:
            self.url = getattr(self.request, "url", self.url)
            self.method = getattr(self.request, "method", self.method)
            self.extra.setdefault("ip_address", getattr(self.request, "remote_addr", None))


@dataclass(slots=True)
class ErrorMetadata:
    """用于判定错误分类的元数据."""

    status_code: int
    category: ErrorCategory
    severity: ErrorSeverity
    message_key: str
    message: str
    recoverable: bool


def derive_error_metadata(error: Exception) -> ErrorMetadata:
    """从异常对象推导错误元数据.

    AppError 直接使用自带的元信息; HTTPException 按状态码区分客户端/服务端错误;
    其余异常一律视为系统错误.

    Args:
        error: 异常对象.

    Returns:
        包含完整错误元数据的 ErrorMetadata 对象.

    """
    if isinstance(error, AppError):
        return ErrorMetadata(
            status_code=error.status_code,
            category=error.category,
            severity=error.severity,
            message_key=error.message_key,
            message=error.message,
            recoverable=error.recoverable,
        )

    if isinstance(error, HTTPException):
        status_code = int(getattr(error, "code", None) or HttpStatus.INTERNAL_SERVER_ERROR)
        is_server_error = status_code >= HttpStatus.INTERNAL_SERVER_ERROR
        severity = ErrorSeverity.HIGH if is_server_error else ErrorSeverity.MEDIUM
        return ErrorMetadata(
            status_code=status_code,
            category=ErrorCategory.SYSTEM if is_server_error else ErrorCategory.BUSINESS,
            severity=severity,
            message_key="INTERNAL_ERROR" if is_server_error else "INVALID_REQUEST",
            message=getattr(error, "description", None) or ErrorMessages.INTERNAL_ERROR,
            recoverable=not is_server_error,
        )

    return ErrorMetadata(
        status_code=HttpStatus.INTERNAL_SERVER_ERROR,
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        message_key="INTERNAL_ERROR",
        message=ErrorMessages.INTERNAL_ERROR,
        recoverable=False,
    )


def build_public_context(context: ErrorContext) -> dict[str, Any]:
    """构建可对外暴露的错误上下文信息."""
    context.ensure_request()
    payload: dict[str, Any] = {
        "request_id": context.request_id,
        "user_id": context.user_id,
    }
    if context.url:
        payload["url"] = context.url
    if context.method:
        payload["method"] = context.method
    if context.extra:
        payload["meta"] = {key: value for key, value in context.extra.items() if value is not None}
    return payload


def get_error_suggestions(category: ErrorCategory) -> list[str]:
    """根据错误类别获取建议的解决方案."""
    suggestions_map = {
        ErrorCategory.VALIDATION: ["检查输入数据", "根据提示修正请求参数"],
        ErrorCategory.BUSINESS: ["确认表格或记录是否存在", "刷新页面后重试"],
        ErrorCategory.AUTHENTICATION: ["重新登录"],
        ErrorCategory.CONFIGURATION: ["检查表格列配置", "查看错误日志"],
        ErrorCategory.DATABASE: ["检查数据库连接", "稍后重试"],
        ErrorCategory.SYSTEM: ["联系管理员", "查看错误日志"],
    }
    return suggestions_map.get(category, ["联系管理员", "查看错误日志"])


__all__ = [
    "ErrorContext",
    "ErrorMetadata",
    "build_public_context",
    "derive_error_metadata",
    "get_error_suggestions",
]
