"""表格注册表.

应用启动时注册 GridDefinition,请求中按名称构建新的 Grid 实例,
Grid 及其组件不在请求之间共享.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, cast

from flask import Flask, current_app

from editgrid.constants import DEFAULT_EDITABLE_CSS_CLASS, DEFAULT_EDITABLE_NAMESPACE
from editgrid.constants.system_constants import ErrorMessages
from editgrid.errors import ConfigurationError, NotFoundError
from editgrid.utils.structlog_config import get_grid_logger

if TYPE_CHECKING:
    from editgrid.grids.definitions.base import GridDefinition
    from editgrid.grids.grid import Grid
    from editgrid.types.extensions import EditGridFlask

EXTENSION_KEY = "editgrid.grids"


class GridRegistry:
    """按名称保存表格定义."""

    def __init__(
        self,
        definitions: Iterable[GridDefinition] = (),
        *,
        namespace: str = DEFAULT_EDITABLE_NAMESPACE,
        css_class: str = DEFAULT_EDITABLE_CSS_CLASS,
    ) -> None:
        self.namespace = namespace
        self.css_class = css_class
        self._definitions: dict[str, GridDefinition] = {}
        for definition in definitions:
            self.register(definition)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def register(self, definition: GridDefinition) -> GridDefinition:
        """注册表格定义.

        Raises:
            ConfigurationError: 表格名已注册.

        """
        if definition.name in self._definitions:
            raise ConfigurationError(f"表格 {definition.name} 重复注册", extra={"grid": definition.name})
        self._definitions[definition.name] = definition
        return definition

    def names(self) -> list[str]:
        return list(self._definitions)

    def definitions(self) -> list[GridDefinition]:
        return list(self._definitions.values())

    def get_definition(self, name: str) -> GridDefinition:
        definition = self._definitions.get(name)
        if definition is None:
            raise NotFoundError(ErrorMessages.GRID_NOT_FOUND, message_key="GRID_NOT_FOUND", extra={"grid": name})
        return definition

    def build(self, name: str, *, link: str | None = None) -> Grid:
        """构建表格实例.

        Raises:
            NotFoundError: 表格未注册.

        """
        return self.get_definition(name).build_grid(
            link=link,
            namespace=self.namespace,
            css_class=self.css_class,
        )


def init_grid_registry(app: Flask, definitions: Iterable[GridDefinition] | None = None) -> GridRegistry:
    """创建注册表并挂到应用上,未指定定义时注册全部内置表格."""
    if definitions is None:
        from editgrid.grids.definitions import builtin_grid_definitions

        definitions = builtin_grid_definitions()

    registry = GridRegistry(
        definitions,
        namespace=app.config.get("EDITGRID_NAMESPACE", DEFAULT_EDITABLE_NAMESPACE),
        css_class=app.config.get("EDITGRID_CSS_CLASS", DEFAULT_EDITABLE_CSS_CLASS),
    )
    app.extensions[EXTENSION_KEY] = registry
    cast("EditGridFlask", app).grid_registry = registry
    get_grid_logger().info("表格注册完成", module="grids", grids=registry.names())
    return registry


def get_grid_registry() -> GridRegistry:
    """返回当前应用的表格注册表."""
    registry = current_app.extensions.get(EXTENSION_KEY)
    if registry is None:
        raise ConfigurationError("表格注册表未初始化")
    return cast(GridRegistry, registry)


__all__ = ["EXTENSION_KEY", "GridRegistry", "get_grid_registry", "init_grid_registry"]
