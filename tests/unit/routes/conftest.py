# tests/unit/routes/conftest.py
"""路由测试专用 fixtures.

提供 test_client 和认证会话相关的 fixtures。
"""

import pytest


def _login(app, user_id: int):
    client = app.test_client()
    with client.session_transaction() as session:
        session["_user_id"] = str(user_id)
    return client


@pytest.fixture(scope="function")
def client(app):
    """创建测试客户端."""
    return app.test_client()


@pytest.fixture(scope="function")
def auth_client(app, seeded):
    """以管理员身份登录的测试客户端."""
    return _login(app, seeded["admin"])


@pytest.fixture(scope="function")
def editor_client(app, seeded):
    """以编辑身份登录的测试客户端."""
    return _login(app, seeded["editor"])


@pytest.fixture(scope="function")
def viewer_client(app, seeded):
    """以查看者身份登录的测试客户端."""
    return _login(app, seeded["viewer"])
