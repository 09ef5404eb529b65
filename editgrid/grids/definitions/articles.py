"""文章表格定义."""

from __future__ import annotations

from typing import Any

from editgrid.forms.fields import FieldComponent, TextareaField
from editgrid.grids.definitions.base import GridDefinition
from editgrid.models.article import Article


def _body_field(record: Any, column: str, grid: Any) -> TextareaField:
    del record, grid
    return TextareaField(column, "正文", rows=2)


ARTICLE_GRID_DEFINITION = GridDefinition(
    name="articles",
    title="文章",
    model=Article,
    description="直接在表格中修改文章,修改后统一保存.",
    readonly_fields={
        "id": "ID",
    },
    display_fields={
        "title": "标题",
        "body": {"callback": _body_field},
        "status": {"title": "状态"},
        "sort_order": {"field": FieldComponent.NUMBER, "title": "排序"},
        "is_featured": "推荐",
        "published_on": {"field": "date", "title": "发布日期"},
        "owner.username": "作者",
    },
    field_casting={
        "sort_order": "int",
    },
    field_formatting={
        "owner.username": "@$value",
    },
    order_by="sort_order",
)

__all__ = ["ARTICLE_GRID_DEFINITION"]
