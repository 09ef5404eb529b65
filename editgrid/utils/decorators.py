"""
行内编辑表格 - 装饰器工具
"""

from functools import wraps
from typing import Any

from flask import request
from flask_login import current_user

from editgrid.constants.system_constants import ErrorMessages
from editgrid.errors import AuthenticationError
from editgrid.utils.structlog_config import get_system_logger, should_log_debug


def login_required(f: Any) -> Any:  # noqa: ANN401
    """要求调用者已登录的装饰器,未登录时抛出 AuthenticationError."""

    @wraps(f)
    def decorated_function(*args, **kwargs: Any) -> Any:  # noqa: ANN401
        system_logger = get_system_logger()

        if not current_user.is_authenticated:
            system_logger.warning(
                "未认证访问受保护资源",
                module="decorators",
                request_path=request.path,
                request_method=request.method,
                ip_address=request.remote_addr,
                failure_reason="not_authenticated",
            )
            raise AuthenticationError(
                ErrorMessages.AUTHENTICATION_REQUIRED,
                message_key="AUTHENTICATION_REQUIRED",
                extra={"request_path": request.path, "request_method": request.method},
            )

        if should_log_debug():
            system_logger.debug(
                "登录验证通过",
                module="decorators",
                user_id=current_user.id,
                request_path=request.path,
            )
        return f(*args, **kwargs)

    return decorated_function
