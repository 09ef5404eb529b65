"""表格定义集合，按需惰性导入避免循环依赖。"""

from __future__ import annotations

from importlib import import_module
from typing import Any

from .base import GridDefinition

_LAZY_ATTRS: dict[str, str] = {
    "ARTICLE_GRID_DEFINITION": "editgrid.grids.definitions.articles",
}

__all__ = [
    "GridDefinition",
    "builtin_grid_definitions",
    *_LAZY_ATTRS.keys(),
]


def builtin_grid_definitions() -> list[GridDefinition]:
    """返回应用启动时注册的全部内置表格定义。"""
    return [__getattr__(name) for name in _LAZY_ATTRS]


def __getattr__(name: str) -> Any:
    """在首次访问时加载具体表格定义，规避导入环。"""

    if name not in _LAZY_ATTRS:
        raise AttributeError(f"module 'editgrid.grids.definitions' 没有属性 {name}")

    module = import_module(_LAZY_ATTRS[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
