"""可编辑单元格输入控件的 name 编码与解码.

编码格式: `GRIDNAME[NAMESPACE][RECORDID][FIELDNAME]`

命名空间段用于区分同一页面内的多个表格组件;解码时命名空间与表格名都必须一致,
记录 ID 必须为纯数字,否则视为不属于本组件的表单数据.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from editgrid.constants import DEFAULT_EDITABLE_NAMESPACE
from editgrid.errors import ConfigurationError

_FIELD_NAME_PATTERN = re.compile(
    r"^(?P<grid>[^\[\]]+)\[(?P<namespace>[^\[\]]+)\]\[(?P<record_id>[0-9]+)\]\[(?P<field>[^\[\]]+)\]$",
)
_RECORD_ID_PATTERN = re.compile(r"^[0-9]+$")


def is_record_id(value: object) -> bool:
    """判断值是否为合法的记录 ID(非负整数或纯数字字符串)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    return isinstance(value, str) and _RECORD_ID_PATTERN.match(value) is not None


@dataclass(frozen=True, slots=True)
class DecodedFieldName:
    """解码后的字段名各段."""

    grid_name: str
    namespace: str
    record_id: int
    field_name: str


class FieldNameCodec:
    """绑定命名空间的字段名编解码器."""

    def __init__(self, namespace: str = DEFAULT_EDITABLE_NAMESPACE) -> None:
        self._ensure_segment("namespace", namespace)
        self.namespace = namespace

    def encode(self, grid_name: str, record_id: int | str, field_name: str) -> str:
        """生成输入控件 name.

        Raises:
            ConfigurationError: 任一段为空、含方括号,或记录 ID 不是非负整数.

        """
        self._ensure_segment("grid_name", grid_name)
        self._ensure_segment("field_name", field_name)
        if not is_record_id(record_id):
            raise ConfigurationError(f"记录 ID 无法编码: {record_id!r}", extra={"record_id": str(record_id)})
        return f"{grid_name}[{self.namespace}][{int(record_id)}][{field_name}]"

    def decode(self, name: str, *, grid_name: str | None = None) -> DecodedFieldName | None:
        """解析输入控件 name.

        Args:
            name: 输入控件 name.
            grid_name: 期望的表格名,提供时不一致即返回 None.

        Returns:
            DecodedFieldName;格式不符、命名空间或表格名不一致时返回 None.

        """
        match = _FIELD_NAME_PATTERN.match(name)
        if match is None:
            return None
        if match.group("namespace") != self.namespace:
            return None
        if grid_name is not None and match.group("grid") != grid_name:
            return None
        return DecodedFieldName(
            grid_name=match.group("grid"),
            namespace=match.group("namespace"),
            record_id=int(match.group("record_id")),
            field_name=match.group("field"),
        )

    @staticmethod
    def _ensure_segment(label: str, value: str) -> None:
        if not value or "[" in value or "]" in value:
            raise ConfigurationError(f"{label} 不能为空且不能包含方括号: {value!r}", extra={label: value})


__all__ = ["DecodedFieldName", "FieldNameCodec", "is_record_id"]
