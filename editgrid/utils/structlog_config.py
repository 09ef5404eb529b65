"""结构化日志配置与辅助函数."""

from __future__ import annotations

import sys
from contextlib import suppress
from typing import TYPE_CHECKING, cast

import structlog
from flask import Flask, current_app, has_request_context
from flask_login import current_user

from editgrid.constants.system_constants import ErrorSeverity
from editgrid.settings import APP_VERSION
from editgrid.types import ContextDict, JsonValue, LoggerExtra, StructlogEventDict
from editgrid.utils.logging.context_vars import request_id_var, user_id_var
from editgrid.utils.logging.error_adapter import (
    ErrorContext,
    ErrorMetadata,
    build_public_context,
    derive_error_metadata,
    get_error_suggestions,
)

if TYPE_CHECKING:
    from structlog.typing import BindableLogger, Processor

LogField = JsonValue | ContextDict | LoggerExtra
ErrorPayload = dict[str, LogField]


class DebugFilter:
    """根据配置决定是否丢弃 DEBUG 日志的处理器."""

    def __init__(self, *, enabled: bool = False) -> None:
        self.enabled = enabled

    def set_enabled(self, *, enabled: bool) -> None:
        self.enabled = enabled

    def __call__(
        self,
        _logger: BindableLogger,
        method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        if method_name == "debug" and not self.enabled:
            raise structlog.DropEvent
        return event_dict


class StructlogConfig:
    """structlog 配置核心类.

    负责配置处理器链、上下文注入与调试日志过滤,可多次调用但只配置一次.

    Example:
        >>> config = StructlogConfig()
        >>> config.configure(app)
        >>> logger = get_logger('grids')

    """

    def __init__(self) -> None:
        self.debug_filter = DebugFilter(enabled=False)
        self.configured = False

    def configure(self, app: Flask | None = None) -> None:
        """初始化 structlog 处理器(幂等).

        Args:
            app: Flask 应用实例,可选.提供时根据 `ENABLE_DEBUG_LOG` 切换调试日志.

        """
        if not self.configured:
            processors = [
                self.debug_filter,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                self._add_request_context,
                self._add_user_context,
                self._add_global_context,
                self._get_console_renderer(),
            ]
            structlog.configure(
                processors=cast("list[Processor]", processors),
                context_class=dict,
                logger_factory=structlog.stdlib.LoggerFactory(),
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            )
            self.configured = True

        if app is not None:
            enable_debug = bool(app.config.get("ENABLE_DEBUG_LOG", False))
            self.debug_filter.set_enabled(enabled=enable_debug)

    @staticmethod
    def _add_request_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        """向事件字典写入 request_id/user_id."""
        if has_request_context():
            event_dict["request_id"] = request_id_var.get()
            event_dict["user_id"] = user_id_var.get()
        return event_dict

    @staticmethod
    def _add_user_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        """附加当前登录用户."""
        with suppress(RuntimeError):
            if current_user and getattr(current_user, "is_authenticated", False):
                event_dict["current_user_id"] = getattr(current_user, "id", None)
                event_dict["current_username"] = getattr(current_user, "username", None)
        return event_dict

    @staticmethod
    def _add_global_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        """附加应用名称、版本与 logger 名称."""
        try:
            event_dict["app_name"] = current_app.config["APP_NAME"]
            event_dict["app_version"] = current_app.config["APP_VERSION"]
        except (RuntimeError, KeyError):
            event_dict["app_name"] = "行内编辑表格"
            event_dict["app_version"] = APP_VERSION

        event_dict["logger_name"] = getattr(_logger, "name", "unknown")
        return event_dict

    @staticmethod
    def _get_console_renderer() -> Processor:
        """根据终端能力返回渲染器."""
        if sys.stdout.isatty():
            return structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=10),
            )
        return structlog.dev.ConsoleRenderer(colors=False)


structlog_config = StructlogConfig()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Example:
        >>> get_logger('grids').info('表格渲染完成', grid='articles')

    """
    structlog_config.configure()
    return structlog.get_logger(name)


def configure_structlog(app: Flask) -> None:
    """配置 structlog 并注册 Flask 钩子."""
    structlog_config.configure(app)

    @app.teardown_appcontext
    def log_teardown_error(exception: BaseException | None) -> None:
        if exception:
            get_logger("app").error("应用请求处理异常", module="system", exception=str(exception))


def should_log_debug() -> bool:
    """检查是否应该记录调试日志."""
    try:
        return bool(current_app.config.get("ENABLE_DEBUG_LOG", False))
    except RuntimeError:
        return False


def log_info(message: str, module: str = "app", **kwargs: LogField) -> None:
    """记录信息级别日志.

    Example:
        >>> log_info('表格批量保存完成', module='editable_columns', saved=3)

    """
    get_logger("app").info(message, module=module, **kwargs)


def log_warning(
    message: str,
    module: str = "app",
    exception: Exception | None = None,
    **kwargs: LogField,
) -> None:
    """记录警告级别日志,可附带异常文本."""
    logger = get_logger("app")
    if exception:
        logger.warning(message, module=module, exception=str(exception), **kwargs)
    else:
        logger.warning(message, module=module, **kwargs)


def log_error(
    message: str,
    module: str = "app",
    exception: Exception | None = None,
    **kwargs: LogField,
) -> None:
    """记录错误级别日志,提供异常时输出堆栈."""
    logger = get_logger("app")
    if exception:
        logger.error(message, module=module, error=str(exception), exc_info=exception, **kwargs)
    else:
        logger.error(message, module=module, **kwargs)


def log_critical(
    message: str,
    module: str = "app",
    exception: Exception | None = None,
    **kwargs: LogField,
) -> None:
    """记录严重错误级别日志."""
    logger = get_logger("app")
    if exception:
        logger.critical(message, module=module, error=str(exception), **kwargs)
    else:
        logger.critical(message, module=module, **kwargs)


def log_debug(message: str, module: str = "app", **kwargs: LogField) -> None:
    """记录调试级别日志,仅在启用调试日志时输出."""
    if not should_log_debug():
        return
    get_logger("app").debug(message, module=module, **kwargs)


def get_system_logger() -> structlog.stdlib.BoundLogger:
    """返回系统级 logger."""
    return get_logger("system")


def get_grid_logger() -> structlog.stdlib.BoundLogger:
    """返回表格模块 logger."""
    return get_logger("grids")


def enhanced_error_handler(
    error: Exception,
    context: ErrorContext | None = None,
    *,
    extra: LoggerExtra | None = None,
) -> ErrorPayload:
    """增强的错误处理器.

    将异常转换为结构化的错误响应,包含错误分类、严重级别和建议,并按严重度写日志.

    Args:
        error: 异常对象.
        context: 错误上下文,可选.如果未提供会自动创建.
        extra: 额外的上下文信息,可选.

    Returns:
        结构化的错误响应字典.

    """
    context = context or ErrorContext(error)
    context.ensure_request()

    metadata = derive_error_metadata(error)
    public_context = build_public_context(context)

    payload: ErrorPayload = {
        "error": True,
        "error_id": context.error_id,
        "category": metadata.category.value,
        "severity": metadata.severity.value,
        "message_code": metadata.message_key,
        "message": metadata.message,
        "timestamp": context.timestamp.isoformat(),
        "recoverable": metadata.recoverable,
        "suggestions": get_error_suggestions(metadata.category),
        "context": public_context,
    }
    if extra:
        payload["extra"] = dict(extra)

    _log_enhanced_error(error, metadata, payload)
    return payload


def _log_enhanced_error(error: Exception, metadata: ErrorMetadata, payload: ErrorPayload) -> None:
    log_kwargs: dict[str, LogField] = {
        "error_id": payload["error_id"],
        "category": payload["category"],
        "severity": payload["severity"],
        "context": payload.get("context"),
    }
    if "extra" in payload:
        log_kwargs["extra"] = payload["extra"]

    message_text = str(payload.get("message", ""))
    if metadata.severity == ErrorSeverity.CRITICAL:
        log_critical(message_text, module="error_handler", exception=error, **log_kwargs)
    elif metadata.severity == ErrorSeverity.HIGH:
        log_error(message_text, module="error_handler", exception=error, **log_kwargs)
    else:
        log_warning(message_text, module="error_handler", exception=error, **log_kwargs)


__all__ = [
    "ErrorContext",
    "ErrorMetadata",
    "configure_structlog",
    "enhanced_error_handler",
    "get_grid_logger",
    "get_logger",
    "get_system_logger",
    "log_critical",
    "log_debug",
    "log_error",
    "log_info",
    "log_warning",
    "should_log_debug",
]
