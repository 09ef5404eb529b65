"""常量模块。

集中管理系统常量，包括错误消息、HTTP 状态码、用户角色与表格相关常量。
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

# 导入表格常量
from .grid_constants import (
    DEFAULT_EDITABLE_CSS_CLASS,
    DEFAULT_EDITABLE_NAMESPACE,
    FALSEY_STRINGS,
    ROW_FORM_ROUTE,
    SkipReason,
)

# 导入所有系统常量
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    SuccessMessages,
)

# 导入用户角色常量
from .user_roles import UserRole

__all__ = [
    "DEFAULT_EDITABLE_CSS_CLASS",
    "DEFAULT_EDITABLE_NAMESPACE",
    "FALSEY_STRINGS",
    "ROW_FORM_ROUTE",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "HttpStatus",
    "SkipReason",
    "SuccessMessages",
    "UserRole",
]
