"""表单对象: 数据加载、合并、校验、写回与渲染."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Flag, auto

from markupsafe import Markup

from editgrid.forms.field_list import FieldList
from editgrid.forms.fields import FormField
from editgrid.utils.templating import render_fragment

_MISSING = object()


class MergeMode(Flag):
    """load_data_from 的合并模式.

    - DEFAULT: 数据源中不存在的字段保持原值.
    - CLEAR_MISSING: 数据源中不存在的字段重置为空值.
    - IGNORE_FALSEISH: 忽略数据源中为假值的条目.
    """

    DEFAULT = 0
    CLEAR_MISSING = auto()
    IGNORE_FALSEISH = auto()


def lookup_value(source: object, name: str) -> object:
    """从 mapping 或对象中读取值,支持点号路径;不存在时返回 `_MISSING`."""
    if isinstance(source, Mapping):
        return source[name] if name in source else _MISSING

    current: object = source
    for segment in name.split("."):
        if current is None or not hasattr(current, segment):
            return _MISSING
        current = getattr(current, segment)
    return current


class Form:
    """持有一组字段的表单.

    Attributes:
        name: 表单名称.
        fields: 字段集合.
        action: 表单提交地址.

    """

    def __init__(self, name: str, fields: FieldList, *, action: str | None = None, method: str = "post") -> None:
        self.name = name
        self.fields = fields
        self.action = action
        self.method = method

    def set_form_action(self, action: str) -> Form:
        self.action = action
        return self

    def load_data_from(self, source: object, mode: MergeMode = MergeMode.DEFAULT) -> Form:
        """从 mapping 或记录对象加载字段值.

        Args:
            source: 提交的字段值 mapping,或一条记录.
            mode: 合并模式,见 MergeMode.

        Returns:
            表单自身,便于链式调用.

        """
        for field in self.fields:
            value = lookup_value(source, field.get_name())
            if value is _MISSING:
                if MergeMode.CLEAR_MISSING in mode:
                    field.set_value(field.empty_value())
                continue
            if MergeMode.IGNORE_FALSEISH in mode and not value:
                continue
            field.set_value(value)
        return self

    def validate(self) -> dict[str, str]:
        """校验可写字段,返回 {字段名: 错误信息}."""
        errors: dict[str, str] = {}
        for field in self.fields.saveable_fields():
            message = field.validate()
            if message:
                errors[field.get_name()] = message
        return errors

    def save_into(self, record: object) -> None:
        """将可写字段的值写回记录,只读字段不写."""
        for field in self.fields.saveable_fields():
            field.save_into(record)

    def data(self) -> dict[str, object | None]:
        return {field.get_name(): field.data_value() for field in self.fields.saveable_fields()}

    def render(self) -> Markup:
        return render_fragment("grids/partials/row_form.html", form=self)

    def __html__(self) -> Markup:
        return self.render()


__all__ = ["Form", "MergeMode", "lookup_value"]
