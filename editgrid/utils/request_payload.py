"""请求 payload 解析与规范化.

目标:
- 统一处理 JSON dict 与 Werkzeug MultiDict(form).
- 将 `grid[Namespace][5][title]` 这类方括号键名还原为嵌套 dict.
- 提供最小的输入规范化(NUL 清理),不做业务校验.

注意:
- 无法解析为方括号结构的键原样保留在顶层,与嵌套结构冲突的键直接忽略.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, cast

from editgrid.types import MutablePayloadDict, PayloadValue, ScalarValue

_BRACKET_KEY_PATTERN = re.compile(r"^(?P<head>[^\[\]]+)(?P<tail>(?:\[[^\[\]]+\])+)$")
_BRACKET_SEGMENT_PATTERN = re.compile(r"\[([^\[\]]+)\]")


def split_bracket_key(key: str) -> list[str] | None:
    """拆分方括号键名.

    Args:
        key: 形如 `a[b][c]` 的键名.

    Returns:
        `["a", "b", "c"]`;不含方括号或格式非法时返回 None.

    """
    match = _BRACKET_KEY_PATTERN.match(key)
    if match is None:
        return None
    return [match.group("head"), *_BRACKET_SEGMENT_PATTERN.findall(match.group("tail"))]


def parse_nested_form(payload: object | None) -> MutablePayloadDict:
    """解析表单或 JSON payload,得到嵌套结构.

    Args:
        payload: JSON dict 或 MultiDict 兼容对象.

    Returns:
        嵌套 dict.MultiDict 同名多值时取最后一个值.

    Raises:
        TypeError: payload 既不是 mapping 也不是 MultiDict.

    """
    if payload is None:
        return {}

    if hasattr(payload, "getlist"):
        multi_dict = cast(Any, payload)
        items = [(key, (multi_dict.getlist(key) or [None])[-1]) for key in multi_dict.keys()]
    elif isinstance(payload, Mapping):
        items = list(payload.items())
    else:
        raise TypeError("payload 必须为 mapping 或 MultiDict 兼容对象")

    nested: MutablePayloadDict = {}
    for key, value in items:
        cleaned = _sanitize_value(value)
        segments = split_bracket_key(str(key))
        if segments is None:
            nested.setdefault(str(key), cleaned)
            continue
        _assign_path(nested, segments, cleaned)
    return nested


def _assign_path(target: MutablePayloadDict, segments: list[str], value: PayloadValue) -> None:
    node: MutablePayloadDict = target
    for segment in segments[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            return
        node = cast(MutablePayloadDict, child)
    leaf = segments[-1]
    if isinstance(node.get(leaf), dict):
        return
    node[leaf] = value


def _sanitize_value(value: object) -> PayloadValue:
    if isinstance(value, Mapping):
        return {str(key): _sanitize_value(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_sanitize_scalar_value(item) for item in value]
    return _sanitize_scalar_value(value)


def _sanitize_scalar_value(value: object) -> ScalarValue:
    if value is None:
        return None
    if isinstance(value, bool | int | float):
        return value
    if isinstance(value, bytes | bytearray):
        return _strip_nul(value.decode(errors="ignore"))
    return _strip_nul(str(value))


def _strip_nul(value: str) -> str:
    return value.replace("\x00", "")


__all__ = ["parse_nested_form", "split_bracket_key"]
