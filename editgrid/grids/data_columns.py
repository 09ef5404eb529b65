"""只读数据列组件: 展示字段、类型转换与展示格式化."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from markupsafe import Markup, escape

from editgrid.forms.fields import humanize
from editgrid.grids.casting import Caster, Formatter, format_value, resolve_caster

if TYPE_CHECKING:
    from editgrid.grids.grid import Grid

ColumnDescriptor = Any


class DataColumns:
    """按 display_fields 渲染列的默认组件.

    Args:
        display_fields: {列名: 描述} 有序映射;描述为字符串时视为列标题,
            为映射时可带 `title` 键.未配置时使用仓库的默认展示列.
        field_casting: {列名: 类型转换}.
        field_formatting: {列名: 格式化}.

    """

    def __init__(
        self,
        display_fields: Mapping[str, ColumnDescriptor] | None = None,
        *,
        field_casting: Mapping[str, str | Caster] | None = None,
        field_formatting: Mapping[str, str | Formatter] | None = None,
    ) -> None:
        self.display_fields: dict[str, ColumnDescriptor] | None = (
            dict(display_fields) if display_fields is not None else None
        )
        self.field_casting: dict[str, str | Caster] = dict(field_casting or {})
        self.field_formatting: dict[str, str | Formatter] = dict(field_formatting or {})
        # 尽早暴露未知的类型转换名
        for caster in self.field_casting.values():
            resolve_caster(caster)

    def set_display_fields(self, display_fields: Mapping[str, ColumnDescriptor]) -> DataColumns:
        self.display_fields = dict(display_fields)
        return self

    def set_field_casting(self, field_casting: Mapping[str, str | Caster]) -> DataColumns:
        for caster in field_casting.values():
            resolve_caster(caster)
        self.field_casting = dict(field_casting)
        return self

    def set_field_formatting(self, field_formatting: Mapping[str, str | Formatter]) -> DataColumns:
        self.field_formatting = dict(field_formatting)
        return self

    def get_display_fields(self, grid: Grid) -> dict[str, ColumnDescriptor]:
        if self.display_fields is None:
            return {column: humanize(column) for column in grid.repository.summary_fields()}
        return self.display_fields

    # 列提供者钩子
    def augment_columns(self, grid: Grid, columns: list[str]) -> list[str]:
        return [*columns, *(column for column in self.get_display_fields(grid) if column not in columns)]

    def get_columns_handled(self, grid: Grid) -> list[str]:
        return list(self.get_display_fields(grid))

    def get_column_metadata(self, grid: Grid, column: str) -> dict[str, Any]:
        descriptor = self.get_display_fields(grid).get(column)
        if isinstance(descriptor, str):
            return {"title": descriptor}
        if isinstance(descriptor, Mapping) and descriptor.get("title"):
            return {"title": str(descriptor["title"])}
        return {"title": humanize(column)}

    def transform_value(self, grid: Grid, record: Any, column: str) -> Any:
        """读取列值并依次应用类型转换与格式化."""
        value = grid.get_casted_value(record, column, self.field_casting.get(column))
        formatter = self.field_formatting.get(column)
        if formatter is not None:
            value = format_value(value, record, formatter)
        return value

    def get_column_content(self, grid: Grid, record: Any, column: str) -> Markup:
        value = self.transform_value(grid, record, column)
        if value is None:
            return Markup("")
        return escape(value)


__all__ = ["ColumnDescriptor", "DataColumns"]
