"""统一响应工具.

提供统一的成功/错误响应结构,避免在视图层散落 JSON 拼装逻辑.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from flask import Response, jsonify

from editgrid.constants import HttpStatus
from editgrid.constants.system_constants import SuccessMessages
from editgrid.errors import map_exception_to_status
from editgrid.utils.structlog_config import ErrorContext, enhanced_error_handler
from editgrid.utils.time_utils import time_utils

if TYPE_CHECKING:
    from collections.abc import Mapping

    from editgrid.types import JsonDict, JsonValue


def unified_success_response(
    data: object | None = None,
    message: object | None = None,
    *,
    status: int = HttpStatus.OK,
) -> tuple[JsonDict, int]:
    """生成统一的成功响应载荷.

    Args:
        data: 响应数据,可选.
        message: 成功消息,可选,默认为"操作成功".
        status: HTTP 状态码,默认为 200.

    Returns:
        (响应载荷字典, HTTP 状态码).

    """
    payload: JsonDict = {
        "success": True,
        "error": False,
        "message": str(message) if message is not None else SuccessMessages.OPERATION_SUCCESS,
        "timestamp": time_utils.now().isoformat(),
    }
    if data is not None:
        payload["data"] = cast("JsonValue", data)
    return payload, status


def unified_error_response(
    error: BaseException,
    *,
    status_code: int | None = None,
    extra: Mapping[str, JsonValue] | None = None,
    context: ErrorContext | None = None,
) -> tuple[JsonDict, int]:
    """生成统一的错误响应载荷.

    Args:
        error: 异常对象.
        status_code: HTTP 状态码,可选,默认根据异常类型自动映射.
        extra: 额外的错误信息,可选.
        context: 错误上下文,可选.

    Returns:
        (错误响应载荷字典, HTTP 状态码).

    """
    safe_error = error if isinstance(error, Exception) else Exception(str(error))
    context = context or ErrorContext(safe_error)
    payload = cast("JsonDict", enhanced_error_handler(safe_error, context, extra=extra))
    final_status = status_code or map_exception_to_status(safe_error, default=HttpStatus.INTERNAL_SERVER_ERROR)
    payload.setdefault("success", False)
    return payload, final_status


def jsonify_unified_success(*args: object, **kwargs: object) -> tuple[Response, int]:
    """返回 Flask Response 对象的成功响应便捷函数."""
    payload, status = unified_success_response(*args, **kwargs)  # type: ignore[arg-type]
    return jsonify(payload), status
