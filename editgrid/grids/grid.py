"""表格对象与组件钩子协议.

表格本身只负责编排: 列由组件提供,单元格由组件渲染,保存与子路由也交给组件处理.
组件按需实现下列任一协议(鸭子类型):

- ColumnProvider: 列与单元格内容
- HtmlFragmentProvider: 渲染前追加 CSS 类等
- SaveHandler: 批量保存
- UrlHandlerProvider: 声明子路由 -> 处理方法名
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from markupsafe import Markup, escape
from werkzeug.exceptions import MethodNotAllowed, NotFound
from werkzeug.routing import Map, Rule

from editgrid.constants.system_constants import ErrorMessages
from editgrid.errors import NotFoundError
from editgrid.forms.fields import humanize
from editgrid.grids.casting import Caster, cast_value
from editgrid.utils.templating import render_fragment

if TYPE_CHECKING:
    from editgrid.repositories.record_repository import RecordRepository


@runtime_checkable
class ColumnProvider(Protocol):
    """提供列与单元格内容的组件."""

    def augment_columns(self, grid: Grid, columns: list[str]) -> list[str]:
        """协议方法: 追加本组件处理的列."""
        ...

    def get_columns_handled(self, grid: Grid) -> list[str]:
        """协议方法: 返回本组件处理的列."""
        ...

    def get_column_metadata(self, grid: Grid, column: str) -> dict[str, Any]:
        """协议方法: 返回列标题等元信息."""
        ...

    def get_column_content(self, grid: Grid, record: Any, column: str) -> Markup:
        """协议方法: 渲染单元格."""
        ...


@runtime_checkable
class HtmlFragmentProvider(Protocol):
    """渲染前可修改表格的组件."""

    def get_html_fragments(self, grid: Grid) -> dict[str, Markup]:
        """协议方法: 返回附加到表格前后的片段."""
        ...


@runtime_checkable
class SaveHandler(Protocol):
    """处理批量保存的组件."""

    def handle_save(self, grid: Grid, record: Any | None) -> Any:
        """协议方法: 保存表格提交的数据."""
        ...


@runtime_checkable
class UrlHandlerProvider(Protocol):
    """声明表格子路由的组件."""

    def get_url_handlers(self, grid: Grid) -> Mapping[str, str]:
        """协议方法: 返回 {路由规则: 方法名}."""
        ...


class Grid:
    """行内编辑表格.

    Attributes:
        name: 表格名,也是提交数据的顶层键.
        repository: 记录仓库.
        components: 按顺序排列的组件.
        title: 表格标题.
        link: 表格页面地址,子路由以它为前缀.
        value: 本表格对应的提交数据切片.

    """

    def __init__(
        self,
        name: str,
        repository: RecordRepository,
        components: Iterable[object] = (),
        *,
        title: str | None = None,
        link: str | None = None,
    ) -> None:
        self.name = name
        self.repository = repository
        self.components: list[object] = list(components)
        self.title = title if title is not None else humanize(name)
        self.link = link or f"/{name}"
        self.value: Any = None
        self.extra_classes: list[str] = []

    def __repr__(self) -> str:
        return f"<Grid name={self.name!r}>"

    # ------------------------------------------------------------------ #
    # 基础属性
    # ------------------------------------------------------------------ #
    def set_value(self, value: Any) -> Grid:
        self.value = value
        return self

    def add_extra_class(self, css_class: str) -> Grid:
        if css_class not in self.extra_classes:
            self.extra_classes.append(css_class)
        return self

    def get_list(self) -> Sequence[Any]:
        return self.repository.list()

    def link_to(self, *segments: object) -> str:
        """拼接表格子路径,例如 `link_to("editable/form", 3)`."""
        parts = [self.link.rstrip("/")]
        parts.extend(str(segment).strip("/") for segment in segments)
        return "/".join(parts)

    def get_data_field_value(self, record: Any, column: str) -> Any:
        """读取记录的列值,支持点号路径与无参方法;路径中断时返回 None."""
        current: Any = record
        for segment in column.split("."):
            if current is None:
                return None
            current = getattr(current, segment, None)
            if callable(current) and not isinstance(current, type):
                current = current()
        return current

    def get_casted_value(self, record: Any, column: str, caster: str | Caster | None = None) -> Any:
        value = self.get_data_field_value(record, column)
        if caster is None:
            return value
        return cast_value(value, caster)

    # ------------------------------------------------------------------ #
    # 列
    # ------------------------------------------------------------------ #
    def column_providers(self) -> list[ColumnProvider]:
        return [component for component in self.components if isinstance(component, ColumnProvider)]

    def get_columns(self) -> list[str]:
        """按组件顺序合并得到的列,重复列只保留第一次出现."""
        columns: list[str] = []
        for component in self.column_providers():
            columns = component.augment_columns(self, columns)
        return list(dict.fromkeys(columns))

    def _provider_for(self, column: str) -> ColumnProvider | None:
        # 后加入的组件优先,例如 EditableColumns 覆盖 DataColumns
        for component in reversed(self.column_providers()):
            if column in component.get_columns_handled(self):
                return component
        return None

    def get_column_metadata(self, column: str) -> dict[str, Any]:
        provider = self._provider_for(column)
        if provider is None:
            return {"title": humanize(column)}
        return provider.get_column_metadata(self, column)

    def get_column_content(self, record: Any, column: str) -> Markup:
        provider = self._provider_for(column)
        if provider is None:
            value = self.get_data_field_value(record, column)
            return escape("" if value is None else value)
        return provider.get_column_content(self, record, column)

    # ------------------------------------------------------------------ #
    # 渲染
    # ------------------------------------------------------------------ #
    def render(self) -> Markup:
        """渲染完整的 `<table>`,HTML 片段组件的 before/after 片段包在表格两侧."""
        fragments: dict[str, list[Markup]] = {"before": [], "after": []}
        for component in self.components:
            if isinstance(component, HtmlFragmentProvider):
                for position, fragment in (component.get_html_fragments(self) or {}).items():
                    fragments.setdefault(position, []).append(Markup(fragment))

        columns = self.get_columns()
        return render_fragment(
            "grids/partials/table.html",
            grid=self,
            css_class=" ".join(["grid", *self.extra_classes]),
            columns=[
                {"name": column, "title": self.get_column_metadata(column).get("title", humanize(column))}
                for column in columns
            ],
            rows=[self._build_row(record, columns) for record in self.get_list()],
            before=fragments["before"],
            after=fragments["after"],
        )

    def __html__(self) -> Markup:
        return self.render()

    def _build_row(self, record: Any, columns: list[str]) -> dict[str, Any]:
        return {
            "record_id": getattr(record, "id", None),
            "cells": [{"column": column, "content": self.get_column_content(record, column)} for column in columns],
        }

    # ------------------------------------------------------------------ #
    # 保存与子路由
    # ------------------------------------------------------------------ #
    def save_into(self, record: Any | None = None) -> list[Any]:
        """把提交数据交给每个保存组件,返回各组件的结果."""
        return [
            component.handle_save(self, record)
            for component in self.components
            if isinstance(component, SaveHandler)
        ]

    def url_map(self) -> tuple[Map, dict[str, Callable[..., Any]]]:
        rules: list[Rule] = []
        handlers: dict[str, Callable[..., Any]] = {}
        for index, component in enumerate(self.components):
            if not isinstance(component, UrlHandlerProvider):
                continue
            for pattern, method_name in component.get_url_handlers(self).items():
                endpoint = f"{index}:{method_name}"
                rules.append(Rule(f"/{pattern.strip('/')}", endpoint=endpoint, methods=["GET", "POST"]))
                handlers[endpoint] = getattr(component, method_name)
        return Map(rules, strict_slashes=False), handlers

    def handle_request(self, path: str, method: str = "GET") -> Any:
        """把子路径分发给声明了该路由的组件.

        Raises:
            NotFoundError: 没有组件处理该路径.

        """
        url_map, handlers = self.url_map()
        adapter = url_map.bind("localhost", url_scheme="http")
        try:
            endpoint, params = adapter.match(f"/{path.strip('/')}", method=method.upper())
        except (NotFound, MethodNotAllowed) as exc:
            raise NotFoundError(
                ErrorMessages.RESOURCE_NOT_FOUND,
                extra={"grid": self.name, "path": path},
            ) from exc
        return handlers[endpoint](self, params)


__all__ = [
    "ColumnProvider",
    "Grid",
    "HtmlFragmentProvider",
    "SaveHandler",
    "UrlHandlerProvider",
]
