"""表单字段类型与字段类型注册表.

每个字段对象代表一个可渲染的输入控件,持有 name/value,并负责:
- 渲染为 HTML(MarkupSafe 转义)
- 把提交值转换为写入记录的值
- 简单的输入校验
"""

from __future__ import annotations

import copy
import re
from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, ClassVar

from markupsafe import Markup, escape

from editgrid.constants import FALSEY_STRINGS
from editgrid.constants.system_constants import ErrorMessages
from editgrid.errors import ConfigurationError
from editgrid.utils.time_utils import time_utils

_HTML_ID_PATTERN = re.compile(r"[^A-Za-z0-9_-]+")


class FieldComponent(str, Enum):
    """表单控件类型."""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    SELECT = "select"
    DATE = "date"
    DATETIME = "datetime"
    HIDDEN = "hidden"
    READONLY = "readonly"


def html_params(**attributes: object) -> Markup:
    """将属性字典渲染为 HTML 属性串.

    `class_` 会转换为 `class`;True 渲染为布尔属性;False/None 省略.

    Example:
        >>> html_params(name="title", required=True, class_="input")
        Markup(' name="title" required class="input"')

    """
    parts: list[str] = []
    for key, value in attributes.items():
        attr_name = key.rstrip("_").replace("_", "-") if key != "class_" else "class"
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {escape(attr_name)}")
            continue
        parts.append(f' {escape(attr_name)}="{escape(value)}"')
    return Markup("".join(parts))


def humanize(name: str) -> str:
    """将列名转换为默认标题,例如 `published_on` -> `Published On`."""
    leaf = name.split(".")[-1]
    return " ".join(part.capitalize() for part in leaf.split("_") if part) or name


class FormField:
    """表单字段基类(默认渲染为单行文本输入).

    Attributes:
        name: 输入控件的 name 属性,也是写回记录时的属性名.
        title: 标签文字.
        value: 当前值.
        required: 是否必填,仅影响校验.
        attributes: 额外的 HTML 属性.

    """

    component: ClassVar[FieldComponent] = FieldComponent.TEXT
    input_type: ClassVar[str] = "text"
    readonly: ClassVar[bool] = False

    def __init__(
        self,
        name: str,
        title: str | None = None,
        value: object | None = None,
        *,
        required: bool = False,
        attributes: Mapping[str, object] | None = None,
    ) -> None:
        self.name = name
        self.title = title if title is not None else humanize(name)
        self.value = value
        self.required = required
        self.attributes: dict[str, object] = dict(attributes or {})
        self.extra_classes: list[str] = []

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"

    def __html__(self) -> Markup:
        return self.render()

    def get_name(self) -> str:
        return self.name

    def set_name(self, name: str) -> FormField:
        self.name = name
        return self

    def set_value(self, value: object | None) -> FormField:
        self.value = value
        return self

    def add_extra_class(self, css_class: str) -> FormField:
        if css_class not in self.extra_classes:
            self.extra_classes.append(css_class)
        return self

    @property
    def is_readonly(self) -> bool:
        return self.readonly

    @property
    def html_id(self) -> str:
        return _HTML_ID_PATTERN.sub("_", self.name).strip("_")

    def empty_value(self) -> object | None:
        """合并模式为"清空缺失字段"时写入的空值."""
        return ""

    def display_value(self) -> str:
        """渲染到控件中的字符串值."""
        if self.value is None:
            return ""
        if isinstance(self.value, Markup):
            return self.value
        return str(self.value)

    def data_value(self) -> object | None:
        """写回记录的值."""
        return self.value

    def validate(self) -> str | None:
        """返回错误信息,通过时返回 None."""
        shape_error = self._shape_error()
        if shape_error:
            return shape_error
        if self.required and self._is_blank():
            return f"{self.title} 不能为空"
        return None

    def save_into(self, record: object) -> None:
        setattr(record, self.name, self.data_value())

    def copy(self) -> FormField:
        """复制字段,避免同一字段对象在多行之间共享状态."""
        duplicate = copy.copy(self)
        duplicate.attributes = dict(self.attributes)
        duplicate.extra_classes = list(self.extra_classes)
        return duplicate

    def render(self) -> Markup:
        return Markup("<input{}>").format(
            html_params(
                type=self.input_type,
                name=self.name,
                id=self.html_id,
                value=self.display_value(),
                class_=self._css_class(),
                required=self.required,
                **self.attributes,
            ),
        )

    def _css_class(self) -> str:
        return " ".join(["field", self.component.value, *self.extra_classes])

    def _is_blank(self) -> bool:
        return self.value is None or (isinstance(self.value, str) and not self.value.strip())

    def _shape_error(self) -> str | None:
        # 单个控件只接受标量值
        if isinstance(self.value, (Mapping, list, tuple, set)):
            return f"{self.title} 的取值格式无效"
        return None


class TextField(FormField):
    """单行文本字段."""


class TextareaField(FormField):
    """多行文本字段."""

    component = FieldComponent.TEXTAREA

    def __init__(self, name: str, title: str | None = None, value: object | None = None, *, rows: int = 3, **kwargs: Any) -> None:
        super().__init__(name, title, value, **kwargs)
        self.rows = rows

    def render(self) -> Markup:
        return Markup("<textarea{}>{}</textarea>").format(
            html_params(
                name=self.name,
                id=self.html_id,
                rows=self.rows,
                class_=self._css_class(),
                required=self.required,
                **self.attributes,
            ),
            self.display_value(),
        )


class NumberField(FormField):
    """数字字段.

    `scale` 为 0 时写回 int,否则写回 Decimal.
    """

    component = FieldComponent.NUMBER
    input_type = "number"

    def __init__(self, name: str, title: str | None = None, value: object | None = None, *, scale: int = 0, **kwargs: Any) -> None:
        super().__init__(name, title, value, **kwargs)
        self.scale = scale
        self.attributes.setdefault("step", "1" if scale == 0 else f"{Decimal(1).scaleb(-scale):f}")

    def empty_value(self) -> object | None:
        return None

    def data_value(self) -> int | Decimal | None:
        if self._is_blank():
            return None
        if isinstance(self.value, bool):
            return int(self.value)
        number = Decimal(str(self.value).strip())
        if self.scale == 0:
            return int(number)
        return number.quantize(Decimal(1).scaleb(-self.scale))

    def validate(self) -> str | None:
        error = super().validate()
        if error or self._is_blank():
            return error
        try:
            number = Decimal(str(self.value).strip())
        except InvalidOperation:
            return f"{self.title} 必须为数字"
        if not number.is_finite():
            return f"{self.title} 必须为数字"
        if self.scale == 0 and number != number.to_integral_value():
            return f"{self.title} 必须为整数"
        return None


class CheckboxField(FormField):
    """复选框字段,未勾选的复选框不会被提交,清空时写回 False."""

    component = FieldComponent.CHECKBOX
    input_type = "checkbox"

    def empty_value(self) -> object | None:
        return False

    def data_value(self) -> bool:
        if isinstance(self.value, str):
            return self.value.strip().lower() not in FALSEY_STRINGS
        return bool(self.value)

    def validate(self) -> str | None:
        return self._shape_error()

    def render(self) -> Markup:
        return Markup("<input{}>").format(
            html_params(
                type="checkbox",
                name=self.name,
                id=self.html_id,
                value="1",
                checked=self.data_value(),
                class_=self._css_class(),
                **self.attributes,
            ),
        )


class SelectField(FormField):
    """下拉字段,options 为 (值, 标签) 序列或 {值: 标签} 映射."""

    component = FieldComponent.SELECT

    def __init__(
        self,
        name: str,
        title: str | None = None,
        value: object | None = None,
        *,
        options: Iterable[tuple[object, str]] | Mapping[object, str] = (),
        empty_label: str | None = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(name, title, value, **kwargs)
        source = options.items() if isinstance(options, Mapping) else options
        self.options: list[tuple[object, str]] = [(option_value, str(label)) for option_value, label in source]
        self.empty_label = empty_label

    def copy(self) -> SelectField:
        duplicate = super().copy()
        duplicate.options = list(self.options)
        return duplicate

    def empty_value(self) -> object | None:
        return None

    def display_value(self) -> str:
        if isinstance(self.value, Enum):
            return str(self.value.value)
        return super().display_value()

    def data_value(self) -> object | None:
        if self._is_blank():
            return None
        selected = self.display_value()
        for option_value, _label in self.options:
            if str(option_value) == selected:
                return option_value
        return self.value

    def validate(self) -> str | None:
        error = super().validate()
        if error or self._is_blank():
            return error
        selected = self.display_value()
        if not any(str(option_value) == selected for option_value, _label in self.options):
            return f"{self.title} 的取值无效"
        return None

    def render(self) -> Markup:
        selected = self.display_value()
        rendered_options: list[Markup] = []
        if self.empty_label is not None:
            rendered_options.append(Markup('<option value="">{}</option>').format(self.empty_label))
        for option_value, label in self.options:
            rendered_options.append(
                Markup("<option{}>{}</option>").format(
                    html_params(value=str(option_value), selected=str(option_value) == selected),
                    label,
                ),
            )
        return Markup("<select{}>{}</select>").format(
            html_params(
                name=self.name,
                id=self.html_id,
                class_=self._css_class(),
                required=self.required,
                **self.attributes,
            ),
            Markup("").join(rendered_options),
        )


class DateField(FormField):
    """日期字段,写回 datetime.date."""

    component = FieldComponent.DATE
    input_type = "date"

    def empty_value(self) -> object | None:
        return None

    def display_value(self) -> str:
        if isinstance(self.value, datetime):
            return self.value.date().isoformat()
        if isinstance(self.value, date):
            return self.value.isoformat()
        return super().display_value()

    def data_value(self) -> date | None:
        return time_utils.parse_date(self.value if not self._is_blank() else None)

    def validate(self) -> str | None:
        error = super().validate()
        if error or self._is_blank():
            return error
        try:
            self.data_value()
        except ValueError:
            return f"{self.title} 不是有效的日期"
        return None


class DatetimeField(DateField):
    """日期时间字段,写回 datetime.datetime."""

    component = FieldComponent.DATETIME
    input_type = "datetime-local"

    def display_value(self) -> str:
        if isinstance(self.value, datetime):
            return self.value.replace(tzinfo=None).isoformat(timespec="minutes")
        return FormField.display_value(self)

    def data_value(self) -> datetime | None:
        return time_utils.parse_datetime(self.value if not self._is_blank() else None)

    def validate(self) -> str | None:
        error = FormField.validate(self)
        if error or self._is_blank():
            return error
        try:
            self.data_value()
        except ValueError:
            return f"{self.title} 不是有效的时间"
        return None


class HiddenField(FormField):
    """隐藏字段."""

    component = FieldComponent.HIDDEN
    input_type = "hidden"


class ReadonlyField(FormField):
    """只读展示字段,不渲染输入控件,也不会写回记录."""

    component = FieldComponent.READONLY
    readonly = True

    def validate(self) -> str | None:
        return None

    def save_into(self, record: object) -> None:
        del record

    def render(self) -> Markup:
        return Markup("<span{}>{}</span>").format(
            html_params(id=self.html_id, class_=self._css_class()),
            self.display_value(),
        )


FieldFactory = Callable[..., FormField]

_FIELD_FACTORIES: dict[str, FieldFactory] = {
    FieldComponent.TEXT.value: TextField,
    FieldComponent.TEXTAREA.value: TextareaField,
    FieldComponent.NUMBER.value: NumberField,
    FieldComponent.CHECKBOX.value: CheckboxField,
    FieldComponent.SELECT.value: SelectField,
    FieldComponent.DATE.value: DateField,
    FieldComponent.DATETIME.value: DatetimeField,
    FieldComponent.HIDDEN.value: HiddenField,
    FieldComponent.READONLY.value: ReadonlyField,
}


def _normalize_kind(kind: FieldComponent | str) -> str:
    if isinstance(kind, FieldComponent):
        return kind.value
    return str(kind).strip().lower()


def register_field_kind(kind: FieldComponent | str, factory: FieldFactory) -> None:
    """注册(或覆盖)字段类型对应的构造函数."""
    _FIELD_FACTORIES[_normalize_kind(kind)] = factory


def create_field(kind: FieldComponent | str | type[FormField], name: str, **kwargs: Any) -> FormField:
    """按字段类型标识构造字段.

    Args:
        kind: FieldComponent、其字符串值、已注册的自定义类型名或 FormField 子类.
        name: 字段名(即列名).
        **kwargs: 透传给构造函数的参数.

    Raises:
        ConfigurationError: 未注册的字段类型.

    """
    if isinstance(kind, type) and issubclass(kind, FormField):
        return kind(name, **kwargs)
    factory = _FIELD_FACTORIES.get(_normalize_kind(kind))
    if factory is None:
        raise ConfigurationError(
            ErrorMessages.UNKNOWN_FIELD_KIND.format(kind=kind),
            extra={"kind": str(kind), "field": name},
        )
    return factory(name, **kwargs)


def registered_field_kinds() -> list[str]:
    return sorted(_FIELD_FACTORIES)


__all__ = [
    "CheckboxField",
    "DateField",
    "DatetimeField",
    "FieldComponent",
    "FieldFactory",
    "FormField",
    "HiddenField",
    "NumberField",
    "ReadonlyField",
    "SelectField",
    "TextField",
    "TextareaField",
    "create_field",
    "html_params",
    "humanize",
    "register_field_kind",
    "registered_field_kinds",
]
