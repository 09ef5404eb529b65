"""行内编辑表格 - Flask 应用初始化.

表格的可编辑列直接渲染为表单控件,修改后一次提交、逐条保存.
"""

import logging
from functools import lru_cache
from importlib import import_module
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from flask import Blueprint, Flask, jsonify, request
from flask.typing import ResponseReturnValue
from flask_bcrypt import Bcrypt
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect

from editgrid.settings import Settings
from editgrid.types.extensions import EditGridFlask, EditGridLoginManager
from editgrid.utils.response_utils import unified_error_response
from editgrid.utils.structlog_config import (
    ErrorContext,
    configure_structlog,
    enhanced_error_handler,
)

if TYPE_CHECKING:
    from editgrid.grids.definitions.base import GridDefinition
    from editgrid.models.user import User

# 初始化扩展
db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager: EditGridLoginManager = EditGridLoginManager()
csrf = CSRFProtect()


@lru_cache(maxsize=1)
def get_user_model() -> type["User"]:
    """延迟加载 User 模型,避免循环导入."""
    return import_module("editgrid.models.user").User


def create_app(
    *,
    settings: Settings | None = None,
    grid_definitions: "list[GridDefinition] | None" = None,
) -> EditGridFlask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.
        grid_definitions: 可选的表格定义,默认注册全部内置表格.

    Returns:
        EditGridFlask: Flask应用实例

    """
    resolved_settings = settings or Settings.load()
    app = EditGridFlask(__name__)

    # 配置应用
    configure_app(app, resolved_settings)

    # 配置会话安全
    configure_security(app, resolved_settings)

    # 初始化扩展
    initialize_extensions(app, resolved_settings)

    # 请求上下文与请求完成日志
    from editgrid.infra.logging.request_middleware import register_request_logging

    register_request_logging(app)

    # 注册蓝图
    configure_blueprints(app)

    # 配置日志
    configure_logging(app)

    # 配置统一日志系统
    configure_structlog(app)

    # 设置全局日志级别
    log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger().setLevel(getattr(logging, log_level_name, logging.INFO))

    # 注册表格
    configure_grids(app, grid_definitions)

    # 注册增强的错误处理器
    app.enhanced_error_handler = enhanced_error_handler

    # 注册全局错误处理器
    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        payload, status_code = unified_error_response(error, context=ErrorContext(error, request))
        return jsonify(payload), status_code

    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置."""
    app.config.from_mapping(settings.to_flask_config())
    app.config.setdefault("APPLICATION_ROOT", "/")


def configure_security(app: Flask, settings: Settings) -> None:
    """配置会话安全参数与 Cookie 选项."""
    app.config["PERMANENT_SESSION_LIFETIME"] = settings.session_lifetime_seconds
    app.config["SESSION_COOKIE_SECURE"] = settings.is_production
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["SESSION_COOKIE_NAME"] = "editgrid_session"


def initialize_extensions(app: Flask, settings: Settings) -> None:
    """初始化数据库、CSRF、密码加密与登录管理.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,用于扩展初始化参数注入.

    """
    # 初始化数据库
    db.init_app(app)

    # 初始化CSRF保护(批量保存表单)
    csrf.init_app(app)

    # 初始化密码加密
    bcrypt.init_app(app)

    # 初始化登录管理;会话由宿主应用建立,此处只负责加载用户
    login_manager.init_app(app)
    login_manager.login_message = "请先登录"
    login_manager.session_protection = "basic"
    login_manager.remember_cookie_duration = settings.session_lifetime_seconds
    login_manager.remember_cookie_httponly = True

    @login_manager.user_loader
    def load_user(user_id: str) -> "User | None":
        if not user_id.isdigit():
            return None
        return db.session.get(get_user_model(), int(user_id))


def configure_blueprints(app: Flask) -> None:
    """注册所有蓝图以暴露路由."""
    blueprint_specs: list[tuple[str, str, str | None]] = [
        ("editgrid.routes.main", "main_bp", None),
        ("editgrid.routes.grids", "grids_bp", "/grids"),
    ]

    blueprints: list[tuple[Blueprint, str | None]] = []
    for module_path, attr_name, prefix in blueprint_specs:
        module = import_module(module_path)
        blueprint = getattr(module, attr_name)
        blueprints.append((blueprint, prefix))

    for blueprint, prefix in blueprints:
        if prefix:
            app.register_blueprint(blueprint, url_prefix=prefix)
        else:
            app.register_blueprint(blueprint)


def configure_logging(app: Flask) -> None:
    """非调试、非测试环境挂载滚动文件日志."""
    if not app.debug and not app.testing:
        log_path = Path(app.config["LOG_FILE"])
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=app.config["LOG_MAX_SIZE"],
            backupCount=app.config["LOG_BACKUP_COUNT"],
        )
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"),
        )
        file_handler.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        app.logger.addHandler(file_handler)

        app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        app.logger.info("行内编辑表格应用启动")


def configure_grids(app: Flask, definitions: "list[GridDefinition] | None" = None) -> None:
    """注册表格定义."""
    from editgrid.grids.registry import init_grid_registry

    init_grid_registry(app, definitions)


from editgrid.models import Article, User  # noqa: F401, E402
