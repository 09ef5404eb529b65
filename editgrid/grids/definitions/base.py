"""表格定义模型.

一个 GridDefinition 描述一张表格的数据来源与列配置,在请求中按需构建为 Grid.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from editgrid.constants import DEFAULT_EDITABLE_CSS_CLASS, DEFAULT_EDITABLE_NAMESPACE
from editgrid.grids.data_columns import DataColumns
from editgrid.grids.editable_columns import EditableColumns
from editgrid.grids.grid import Grid
from editgrid.repositories.record_repository import SQLAlchemyRecordRepository

if TYPE_CHECKING:
    from editgrid.repositories.record_repository import RecordRepository


@dataclass(slots=True)
class GridDefinition:
    """表格定义.

    Attributes:
        name: 表格名,同时是 URL 段与提交数据的顶层键.
        title: 页面标题.
        model: SQLAlchemy 模型类.
        display_fields: 可编辑列描述,见 EditableColumns.
        readonly_fields: 始终只读展示的列(排在可编辑列之前).
        field_casting: 列类型转换.
        field_formatting: 列展示格式化.
        order_by: 列表排序字段.
        description: 页面说明.

    """

    name: str
    title: str
    model: type
    display_fields: Mapping[str, Any] = field(default_factory=dict)
    readonly_fields: Mapping[str, Any] = field(default_factory=dict)
    field_casting: Mapping[str, Any] = field(default_factory=dict)
    field_formatting: Mapping[str, Any] = field(default_factory=dict)
    order_by: str | None = None
    description: str | None = None

    def build_repository(self) -> RecordRepository:
        return SQLAlchemyRecordRepository(self.model, order_by=self.order_by)

    def build_grid(
        self,
        *,
        link: str | None = None,
        namespace: str = DEFAULT_EDITABLE_NAMESPACE,
        css_class: str = DEFAULT_EDITABLE_CSS_CLASS,
        repository: RecordRepository | None = None,
    ) -> Grid:
        components: list[object] = []
        if self.readonly_fields:
            components.append(
                DataColumns(
                    self.readonly_fields,
                    field_casting=self.field_casting,
                    field_formatting=self.field_formatting,
                ),
            )
        components.append(
            EditableColumns(
                self.display_fields or None,
                field_casting=self.field_casting,
                field_formatting=self.field_formatting,
                namespace=namespace,
                css_class=css_class,
            ),
        )
        return Grid(
            self.name,
            repository or self.build_repository(),
            components,
            title=self.title,
            link=link,
        )


__all__ = ["GridDefinition"]
