"""行内编辑表格 - 本地开发环境启动文件."""

from __future__ import annotations

import os
import secrets
from datetime import date
from typing import TYPE_CHECKING, Final

from editgrid import create_app, db
from editgrid.constants import UserRole
from editgrid.models import Article, User
from editgrid.utils.structlog_config import get_system_logger

if TYPE_CHECKING:
    from flask import Flask

os.environ.setdefault("FLASK_ENV", "development")

DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[str] = "5001"
DEFAULT_DEBUG: Final[str] = "true"


def _ensure_demo_data(flask_app: Flask) -> None:
    """建表并写入示例账号与文章, 已存在时跳过."""
    logger = get_system_logger()
    with flask_app.app_context():
        db.create_all()
        if db.session.scalar(db.select(User).filter_by(username="admin")) is not None:
            return

        password = f"Demo{secrets.token_hex(4)}9"
        admin = User("admin", password, role=UserRole.ADMIN)
        db.session.add(admin)
        db.session.add_all(
            [
                Article(title="第一篇", body="你好", status="published", sort_order=1, owner=admin,
                        published_on=date.today()),
                Article(title="草稿", status="draft", sort_order=2, owner=admin),
            ],
        )
        db.session.commit()
        logger.info("已创建示例数据", username="admin", password=password)


def _load_runtime_config() -> tuple[str, int, bool]:
    """读取开发服务器运行参数."""
    host = os.environ.get("FLASK_HOST") or DEFAULT_HOST
    port = int(os.environ.get("FLASK_PORT", DEFAULT_PORT))
    debug = os.environ.get("FLASK_DEBUG", DEFAULT_DEBUG).lower() == "true"
    return host, port, debug


def main() -> None:
    """启动 Flask 开发服务器."""
    app = create_app()
    host, port, debug = _load_runtime_config()
    _ensure_demo_data(app)
    get_system_logger().info("行内编辑表格开发环境已启动", url=f"http://{host}:{port}", debug=debug)
    app.run(host=host, port=port, debug=debug, threaded=True, use_reloader=False)


if __name__ == "__main__":
    main()
