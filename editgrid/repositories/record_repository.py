"""表格记录仓库.

表格只通过本模块定义的窄接口访问记录:
- 列表与单条查询
- 当前用户是否可编辑
- 持久化
- 按列名推导默认编辑字段(模型结构脚手架)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from flask_login import current_user
from sqlalchemy import inspect as sa_inspect
from sqlalchemy import types as sa_types
from sqlalchemy.exc import NoInspectionAvailable, SQLAlchemyError

from editgrid import db
from editgrid.errors import DatabaseError
from editgrid.forms.fields import FieldComponent, FormField, create_field
from editgrid.utils.structlog_config import log_error


@runtime_checkable
class RecordRepository(Protocol):
    """表格组件依赖的记录仓库协议."""

    @property
    def data_class(self) -> type:
        """协议属性: 记录类型."""
        ...

    def list(self) -> Sequence[Any]:
        """协议方法: 返回表格要展示的记录."""
        ...

    def get(self, record_id: int) -> Any | None:
        """协议方法: 按 ID 获取记录."""
        ...

    def can_edit(self, record: Any) -> bool:
        """协议方法: 当前用户能否编辑该记录."""
        ...

    def is_editable(self, record_id: int) -> bool:
        """协议方法: 记录存在且当前用户可编辑."""
        ...

    def save(self, record: Any) -> None:
        """协议方法: 持久化记录."""
        ...

    def summary_fields(self) -> list[str]:
        """协议方法: 默认展示的列."""
        ...

    def default_field_for(self, column: str) -> FormField | None:
        """协议方法: 按列推导默认字段,模型中不存在该列时返回 None."""
        ...


def _column_kind(column_type: sa_types.TypeEngine[Any]) -> FieldComponent:
    if isinstance(column_type, sa_types.Enum):
        return FieldComponent.SELECT
    if isinstance(column_type, sa_types.Boolean):
        return FieldComponent.CHECKBOX
    if isinstance(column_type, sa_types.DateTime):
        return FieldComponent.DATETIME
    if isinstance(column_type, sa_types.Date):
        return FieldComponent.DATE
    if isinstance(column_type, (sa_types.Integer, sa_types.Numeric, sa_types.Float)):
        return FieldComponent.NUMBER
    if isinstance(column_type, sa_types.Text):
        return FieldComponent.TEXTAREA
    return FieldComponent.TEXT


def _enum_options(column_type: sa_types.Enum) -> list[tuple[object, str]]:
    return [(choice, str(choice).replace("_", " ").title()) for choice in column_type.enums]


class SQLAlchemyRecordRepository:
    """基于 Flask-SQLAlchemy 会话的记录仓库.

    Args:
        model: 声明式模型类.
        order_by: 列表排序字段名,默认按主键.

    """

    def __init__(self, model: type, *, order_by: str | None = None) -> None:
        self.model = model
        self.order_by = order_by

    @property
    def data_class(self) -> type:
        return self.model

    def list(self) -> list[Any]:
        stmt = db.select(self.model)
        if self.order_by:
            stmt = stmt.order_by(getattr(self.model, self.order_by))
        else:
            stmt = stmt.order_by(*self._mapper().primary_key)
        return list(db.session.scalars(stmt).all())

    def get(self, record_id: int) -> Any | None:
        return db.session.get(self.model, record_id)

    def can_edit(self, record: Any) -> bool:
        """模型实现 `can_edit(user)` 时交由模型判断,否则要求已登录."""
        if not getattr(current_user, "is_authenticated", False):
            return False
        checker = getattr(record, "can_edit", None)
        if callable(checker):
            return bool(checker(current_user))
        return True

    def is_editable(self, record_id: int) -> bool:
        record = self.get(record_id)
        return record is not None and self.can_edit(record)

    def save(self, record: Any) -> None:
        """提交单条记录.

        Raises:
            DatabaseError: 提交失败时回滚并抛出.

        """
        try:
            db.session.add(record)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            log_error(
                "记录保存失败",
                module="record_repository",
                exception=exc,
                model=self.model.__name__,
            )
            raise DatabaseError(extra={"model": self.model.__name__}) from exc

    def summary_fields(self) -> list[str]:
        """默认展示除主键与外键外的全部列."""
        return [
            column.key
            for column in self._mapper().column_attrs
            if not column.columns[0].primary_key and not column.columns[0].foreign_keys
        ]

    def default_field_for(self, column: str) -> FormField | None:
        """按映射列类型构造默认字段.

        - 主键渲染为只读字段
        - Enum 渲染为下拉框并带上可选值
        - 非空列(复选框除外)标记为必填
        模型中不存在的列(包括点号路径)返回 None.
        """
        attribute = self._mapper().column_attrs.get(column) if "." not in column else None
        if attribute is None:
            return None

        mapped_column = attribute.columns[0]
        if mapped_column.primary_key:
            return create_field(FieldComponent.READONLY, column)

        kind = _column_kind(mapped_column.type)
        kwargs: dict[str, Any] = {}
        if kind is FieldComponent.SELECT:
            kwargs["options"] = _enum_options(mapped_column.type)
        if kind is FieldComponent.NUMBER and isinstance(mapped_column.type, (sa_types.Numeric, sa_types.Float)):
            scale = getattr(mapped_column.type, "scale", None)
            kwargs["scale"] = scale if scale is not None else 2
        if kind is not FieldComponent.CHECKBOX:
            kwargs["required"] = not mapped_column.nullable
        return create_field(kind, column, **kwargs)

    def _mapper(self) -> Any:
        try:
            return sa_inspect(self.model)
        except NoInspectionAvailable as exc:
            msg = f"{self.model!r} 不是 SQLAlchemy 映射类"
            raise TypeError(msg) from exc


__all__ = ["RecordRepository", "SQLAlchemyRecordRepository"]
