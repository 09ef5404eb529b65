# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供环境隔离与表格测试用的内存仓库。
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

import pytest

from editgrid import create_app, db
from editgrid.constants import UserRole
from editgrid.forms.fields import FieldComponent, FormField, create_field
from editgrid.models import Article, User
from editgrid.settings import Settings


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - unit tests 不依赖外部数据库
    - 避免开发者本机环境变量影响测试稳定性
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.delenv("EDITGRID_NAMESPACE", raising=False)
    monkeypatch.delenv("EDITGRID_CSS_CLASS", raising=False)
    monkeypatch.delenv("WTF_CSRF_ENABLED", raising=False)


@dataclass
class FakeRecord:
    """内存记录,字段与示例文章一致。"""

    id: int
    Title: str = ""
    Body: str | None = None
    editable: bool = True


class FakeRepository:
    """实现 RecordRepository 协议的内存仓库。"""

    def __init__(self, records=(), *, schema=None) -> None:
        self.records = {record.id: record for record in records}
        # 列名 -> 字段类型,模拟模型结构
        self.schema: dict[str, FieldComponent] = dict(
            schema if schema is not None else {"Title": FieldComponent.TEXT, "Body": FieldComponent.TEXTAREA},
        )
        self.saved: list[Any] = []

    @property
    def data_class(self) -> type:
        return FakeRecord

    def list(self):
        return list(self.records.values())

    def get(self, record_id: int):
        return self.records.get(record_id)

    def can_edit(self, record) -> bool:
        return bool(getattr(record, "editable", False))

    def is_editable(self, record_id: int) -> bool:
        record = self.get(record_id)
        return record is not None and self.can_edit(record)

    def save(self, record) -> None:
        self.saved.append(record)

    def summary_fields(self) -> list[str]:
        return list(self.schema)

    def default_field_for(self, column: str) -> FormField | None:
        kind = self.schema.get(column)
        if kind is None:
            return None
        return create_field(kind, column)


@pytest.fixture
def fake_repository() -> FakeRepository:
    return FakeRepository(
        [
            FakeRecord(id=3, Title="Three", Body="body 3"),
            FakeRecord(id=5, Title="Five", Body="body 5"),
            FakeRecord(id=7, Title="Seven", Body="body 7"),
        ],
    )


@pytest.fixture
def record_factory() -> type[FakeRecord]:
    return FakeRecord


@pytest.fixture
def repository_factory() -> type[FakeRepository]:
    return FakeRepository


@pytest.fixture(scope="function")
def app(monkeypatch):
    """创建测试应用实例,表结构建在内存 SQLite 中."""
    monkeypatch.setenv("WTF_CSRF_ENABLED", "false")

    settings = Settings.load()
    app = create_app(settings=settings)
    app.config["TESTING"] = True

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def seeded(app):
    """写入管理员、编辑、查看者以及三篇文章,返回各自 ID."""
    with app.app_context():
        admin = User(username="test_admin", password="TestPass1", role=UserRole.ADMIN)
        editor = User(username="test_editor", password="TestPass1", role=UserRole.EDITOR)
        viewer = User(username="test_viewer", password="TestPass1", role=UserRole.VIEWER)
        db.session.add_all([admin, editor, viewer])
        db.session.flush()

        articles = [
            Article(title="Admin post", body="a", status="published", sort_order=1, owner_id=admin.id),
            Article(
                title="Editor post",
                body="e",
                status="draft",
                sort_order=2,
                owner_id=editor.id,
                published_on=date(2024, 1, 2),
            ),
            Article(title="Another admin post", body="o", status="draft", sort_order=3, owner_id=admin.id),
        ]
        db.session.add_all(articles)
        db.session.commit()
        return {
            "admin": admin.id,
            "editor": editor.id,
            "viewer": viewer.id,
            "articles": [article.id for article in articles],
        }
