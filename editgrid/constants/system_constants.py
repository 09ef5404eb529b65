"""行内编辑表格 - 常量定义模块

统一管理错误分类、严重度与提示文案.
"""

from enum import Enum


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    BUSINESS = "business"
    AUTHENTICATION = "authentication"
    CONFIGURATION = "configuration"
    DATABASE = "database"
    SYSTEM = "system"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "数据验证失败"
    RESOURCE_NOT_FOUND = "资源不存在"
    INVALID_REQUEST = "无效的请求"
    AUTHENTICATION_REQUIRED = "请先登录"

    # 数据库错误
    DATABASE_WRITE_ERROR = "数据写入失败"

    # 表格错误
    GRID_CONFIGURATION_ERROR = "表格配置错误"
    GRID_NOT_FOUND = "表格不存在"
    RECORD_NOT_FOUND = "记录不存在"
    INVALID_RECORD_ID = "记录 ID 必须为数字"
    INVALID_FIELD_FOR_COLUMN = '列 "{column}" 的字段不是有效的表单字段'
    FIELD_NOT_FOUND = '找不到列 "{column}" 对应的字段'
    UNKNOWN_FIELD_KIND = "未知的字段类型: {kind}"
    UNKNOWN_CASTER = "未知的类型转换: {caster}"


class SuccessMessages:
    """成功消息常量."""

    OPERATION_SUCCESS = "操作成功"
    GRID_SAVED = "表格保存成功"


__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "SuccessMessages",
]
