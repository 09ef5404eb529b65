"""有序字段集合与字段查找结果."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from editgrid.constants.system_constants import ErrorMessages
from editgrid.errors import ConfigurationError
from editgrid.forms.fields import FormField


class ResolutionStatus(str, Enum):
    """字段解析/查找结果状态."""

    RESOLVED = "resolved"
    COLUMN_NOT_CONFIGURED = "column_not_configured"
    INVALID_FIELD = "invalid_field"


@dataclass(frozen=True, slots=True)
class FieldResolution:
    """列 -> 字段的解析结果.

    Attributes:
        column: 列名.
        status: 解析状态.
        field: 解析成功时的字段.
        produced: 列描述返回的非字段对象(仅 INVALID_FIELD 时有值).

    """

    column: str
    status: ResolutionStatus
    field: FormField | None = None
    produced: object | None = None

    @classmethod
    def resolved(cls, column: str, field: FormField) -> FieldResolution:
        return cls(column=column, status=ResolutionStatus.RESOLVED, field=field)

    @classmethod
    def not_configured(cls, column: str) -> FieldResolution:
        return cls(column=column, status=ResolutionStatus.COLUMN_NOT_CONFIGURED)

    @classmethod
    def invalid(cls, column: str, produced: object | None) -> FieldResolution:
        return cls(column=column, status=ResolutionStatus.INVALID_FIELD, produced=produced)

    @property
    def ok(self) -> bool:
        return self.status is ResolutionStatus.RESOLVED

    def unwrap(self) -> FormField:
        """返回字段,未解析成功时抛出 ConfigurationError.

        Raises:
            ConfigurationError: 列未配置或列描述返回了非字段对象.

        """
        if self.field is not None and self.ok:
            return self.field
        if self.status is ResolutionStatus.INVALID_FIELD:
            raise ConfigurationError(
                ErrorMessages.INVALID_FIELD_FOR_COLUMN.format(column=self.column),
                extra={"column": self.column, "produced_type": type(self.produced).__name__},
            )
        raise ConfigurationError(
            ErrorMessages.FIELD_NOT_FOUND.format(column=self.column),
            extra={"column": self.column},
        )


class FieldList:
    """按插入顺序保存的字段集合,字段名唯一(后加入的同名字段覆盖前者位置上的字段)."""

    def __init__(self, fields: Iterable[FormField] = ()) -> None:
        self._fields: list[FormField] = []
        for field in fields:
            self.push(field)

    def __iter__(self) -> Iterator[FormField]:
        return iter(list(self._fields))

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return self.field_by_name(str(name)) is not None

    def push(self, field: FormField) -> FieldList:
        for index, existing in enumerate(self._fields):
            if existing.get_name() == field.get_name():
                self._fields[index] = field
                return self
        self._fields.append(field)
        return self

    def field_by_name(self, name: str) -> FormField | None:
        for field in self._fields:
            if field.get_name() == name:
                return field
        return None

    def find(self, name: str) -> FieldResolution:
        field = self.field_by_name(name)
        if field is None:
            return FieldResolution.not_configured(name)
        return FieldResolution.resolved(name, field)

    def names(self) -> list[str]:
        return [field.get_name() for field in self._fields]

    def saveable_fields(self) -> list[FormField]:
        """可写回记录的字段(排除只读字段)."""
        return [field for field in self._fields if not field.is_readonly]


__all__ = ["FieldList", "FieldResolution", "ResolutionStatus"]
