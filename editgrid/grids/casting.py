"""列值的类型转换(casting)与展示格式化(formatting).

casting 配置示例::

    field_casting = {"sort_order": "int", "summary": "limit:40", "owner": str.upper}

formatting 配置示例::

    field_formatting = {
        "title": "$value ($status)",
        "price": lambda value, record: f"¥{value:.2f}",
    }
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from string import Template
from typing import Any

from markupsafe import Markup, escape

from editgrid.constants import FALSEY_STRINGS
from editgrid.constants.system_constants import ErrorMessages
from editgrid.errors import ConfigurationError
from editgrid.utils.time_utils import time_utils

Caster = Callable[[Any], Any]
Formatter = Callable[[Any, Any], Any]

_ELLIPSIS = "..."


def _to_int(value: Any) -> int:
    return int(Decimal(str(value).strip()))


def _to_float(value: Any) -> float:
    return float(value)


def _to_decimal(value: Any) -> Decimal:
    return Decimal(str(value).strip())


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in FALSEY_STRINGS
    return bool(value)


def _to_date(value: Any) -> date | None:
    return time_utils.parse_date(value)


def _to_datetime(value: Any) -> datetime | None:
    return time_utils.parse_datetime(value)


def _limit(length: int) -> Caster:
    def _truncate(value: Any) -> str:
        text = str(value)
        if len(text) <= length:
            return text
        return text[: max(length - len(_ELLIPSIS), 0)] + _ELLIPSIS

    return _truncate


CASTERS: dict[str, Caster] = {
    "int": _to_int,
    "float": _to_float,
    "decimal": _to_decimal,
    "bool": _to_bool,
    "str": str,
    "date": _to_date,
    "datetime": _to_datetime,
    "upper": lambda value: str(value).upper(),
    "lower": lambda value: str(value).lower(),
}


def resolve_caster(caster: str | Caster) -> Caster:
    """将 casting 配置解析为可调用对象.

    支持已注册名称、带参数的 `limit:N` 以及任意可调用对象.

    Raises:
        ConfigurationError: 名称未注册或参数非法.

    """
    if callable(caster):
        return caster

    name, _, argument = str(caster).partition(":")
    name = name.strip().lower()
    if name == "limit":
        try:
            return _limit(int(argument))
        except ValueError as exc:
            raise ConfigurationError(
                ErrorMessages.UNKNOWN_CASTER.format(caster=caster),
                extra={"caster": str(caster)},
            ) from exc

    resolved = CASTERS.get(name)
    if resolved is None:
        raise ConfigurationError(ErrorMessages.UNKNOWN_CASTER.format(caster=caster), extra={"caster": str(caster)})
    return resolved


def cast_value(value: Any, caster: str | Caster) -> Any:
    """按配置转换值.

    None 原样返回;转换失败(ValueError/TypeError/InvalidOperation)时返回原值.
    """
    convert = resolve_caster(caster)
    if value is None:
        return None
    try:
        return convert(value)
    except (ValueError, TypeError, InvalidOperation):
        return value


def format_value(value: Any, record: object, formatter: str | Formatter) -> Any:
    """按配置格式化展示值.

    - 可调用对象: `formatter(value, record)`.
    - 字符串模板: `$value` 为当前值,`$<属性名>` 读取记录属性;插入的值会被 HTML 转义,
      模板本身视为可信标记.
    """
    if callable(formatter):
        return formatter(value, record)

    template = Template(str(formatter))
    mapping: dict[str, Any] = {"value": escape("" if value is None else value)}
    for identifier in template.get_identifiers():
        if identifier == "value" or not hasattr(record, identifier):
            continue
        attribute = getattr(record, identifier)
        mapping[identifier] = escape("" if attribute is None else attribute)
    return Markup(template.safe_substitute(mapping))


__all__ = ["CASTERS", "Caster", "Formatter", "cast_value", "format_value", "resolve_caster"]
