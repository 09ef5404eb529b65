"""行内编辑表格 - WSGI 入口文件."""

from __future__ import annotations

import os

os.environ.setdefault("FLASK_ENV", "production")

from editgrid import create_app  # noqa: E402

application = app = create_app()


if __name__ == "__main__":
    application.run(
        host=os.environ.get("FLASK_HOST", "127.0.0.1"),
        port=int(os.environ.get("FLASK_PORT", "5001")),
        debug=False,
    )
