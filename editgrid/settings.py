"""行内编辑表格 - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口.
- `create_app(settings=...)` 只消费 Settings,不直接读取环境变量.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- 生产环境更严格: 缺失密钥/连接串会直接抛出 ValueError.
"""

from __future__ import annotations

import logging
import re
import secrets
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from editgrid.constants import DEFAULT_EDITABLE_CSS_CLASS, DEFAULT_EDITABLE_NAMESPACE

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

DEFAULT_ENVIRONMENT = "development"
APP_VERSION = "0.3.0"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FILE = "userdata/logs/app.log"
DEFAULT_LOG_MAX_SIZE_BYTES = 10 * 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 5

DEFAULT_SESSION_LIFETIME_SECONDS = 3600
DEFAULT_MAX_CONTENT_LENGTH_BYTES = 4 * 1024 * 1024

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_NAMESPACE_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _resolve_sqlite_fallback_url() -> str:
    db_path = PROJECT_ROOT / "userdata" / "editgrid_dev.db"
    return f"sqlite:///{db_path.absolute()}"


class Settings(BaseSettings):
    """应用运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="FLASK_ENV")
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")

    app_name: str = Field(default="行内编辑表格", validation_alias="APP_NAME")
    app_version: str = APP_VERSION

    secret_key: str = Field(default="", validation_alias="SECRET_KEY")
    database_url: str = Field(default="", validation_alias="DATABASE_URL")

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")
    log_file: str = Field(default=DEFAULT_LOG_FILE, validation_alias="LOG_FILE")
    log_max_size_bytes: int = Field(default=DEFAULT_LOG_MAX_SIZE_BYTES, validation_alias="LOG_MAX_SIZE")
    log_backup_count: int = Field(default=DEFAULT_LOG_BACKUP_COUNT, validation_alias="LOG_BACKUP_COUNT")
    enable_debug_log: bool = Field(default=False, validation_alias="ENABLE_DEBUG_LOG")

    session_lifetime_seconds: int = Field(
        default=DEFAULT_SESSION_LIFETIME_SECONDS,
        validation_alias="PERMANENT_SESSION_LIFETIME",
    )
    max_content_length_bytes: int = Field(
        default=DEFAULT_MAX_CONTENT_LENGTH_BYTES,
        validation_alias="MAX_CONTENT_LENGTH",
    )
    csrf_enabled: bool = Field(default=True, validation_alias="WTF_CSRF_ENABLED")

    # 字段名编码中的命名空间段,同一页面多个表格组件依靠它避免冲突
    editable_namespace: str = Field(default=DEFAULT_EDITABLE_NAMESPACE, validation_alias="EDITGRID_NAMESPACE")
    editable_css_class: str = Field(default=DEFAULT_EDITABLE_CSS_CLASS, validation_alias="EDITGRID_CSS_CLASS")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    @property
    def is_testing(self) -> bool:
        """当前是否为测试环境."""
        return self.environment.strip().lower() in {"testing", "test"}

    @property
    def sqlalchemy_engine_options(self) -> dict[str, object]:
        """生成 SQLAlchemy Engine 配置选项."""
        if self.database_url.startswith("sqlite"):
            return {"pool_pre_ping": True, "connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True, "echo": bool(self.debug)}

    def to_flask_config(self) -> dict[str, object]:
        """转换为 Flask app.config 可写入的配置字典."""
        return {
            "ENV": self.environment,
            "DEBUG": self.debug,
            "TESTING": self.is_testing,
            "APP_NAME": self.app_name,
            "APP_VERSION": self.app_version,
            "SECRET_KEY": self.secret_key,
            "SQLALCHEMY_DATABASE_URI": self.database_url,
            "SQLALCHEMY_TRACK_MODIFICATIONS": False,
            "SQLALCHEMY_ENGINE_OPTIONS": dict(self.sqlalchemy_engine_options),
            "LOG_LEVEL": self.log_level,
            "LOG_FILE": self.log_file,
            "LOG_MAX_SIZE": self.log_max_size_bytes,
            "LOG_BACKUP_COUNT": self.log_backup_count,
            "ENABLE_DEBUG_LOG": self.enable_debug_log,
            "BCRYPT_LOG_ROUNDS": 4 if self.is_testing else 12,
            "PERMANENT_SESSION_LIFETIME": self.session_lifetime_seconds,
            "MAX_CONTENT_LENGTH": self.max_content_length_bytes,
            "WTF_CSRF_ENABLED": self.csrf_enabled,
            "EDITGRID_NAMESPACE": self.editable_namespace,
            "EDITGRID_CSS_CLASS": self.editable_css_class,
        }

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @model_validator(mode="after")
    def _apply_defaults_and_validate(self) -> Settings:
        environment_normalized = self.environment.strip().lower()

        debug = self._resolve_debug(environment_normalized)
        self._ensure_secret_key(debug)
        self._ensure_database_url(environment_normalized)

        self._validate()
        return self

    def _resolve_debug(self, environment_normalized: str) -> bool:
        if "debug" in self.model_fields_set:
            return bool(self.debug)
        debug = environment_normalized != "production"
        object.__setattr__(self, "debug", debug)
        return debug

    def _ensure_secret_key(self, debug: bool) -> None:
        if self.secret_key:
            return
        if not debug:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        object.__setattr__(self, "secret_key", secrets.token_urlsafe(32))
        logger.warning("⚠️  开发环境使用随机生成的SECRET_KEY,生产环境请设置环境变量")

    def _ensure_database_url(self, environment_normalized: str) -> None:
        if self.database_url:
            return
        if environment_normalized == "production":
            raise ValueError("DATABASE_URL environment variable must be set in production")

        object.__setattr__(self, "database_url", _resolve_sqlite_fallback_url())
        if environment_normalized not in {"testing", "test"}:
            logger.warning("⚠️  未设置 DATABASE_URL, 非 production 环境将回退 SQLite")

    def _validate(self) -> None:
        """执行跨字段校验,统一抛出可读的 ValueError."""
        checks: list[tuple[str, bool]] = [
            ("LOG_LEVEL 仅支持 DEBUG/INFO/WARNING/ERROR/CRITICAL", self.log_level not in _VALID_LOG_LEVELS),
            ("LOG_MAX_SIZE 必须为正整数(字节)", self.log_max_size_bytes <= 0),
            ("LOG_BACKUP_COUNT 必须为非负整数", self.log_backup_count < 0),
            ("PERMANENT_SESSION_LIFETIME 必须为正整数(秒)", self.session_lifetime_seconds <= 0),
            ("MAX_CONTENT_LENGTH 必须为正整数(字节)", self.max_content_length_bytes <= 0),
            (
                "EDITGRID_NAMESPACE 只能包含字母、数字与下划线",
                not _NAMESPACE_PATTERN.match(self.editable_namespace),
            ),
            ("EDITGRID_CSS_CLASS 不能为空", not self.editable_css_class),
        ]
        errors = [message for message, condition in checks if condition]
        if errors:
            joined = "; ".join(errors)
            raise ValueError(f"配置校验失败: {joined}")
