"""表单字段包

集中管理字段类型、字段集合与表单对象。
"""

from .field_list import FieldList, FieldResolution, ResolutionStatus
from .fields import (
    CheckboxField,
    DateField,
    DatetimeField,
    FieldComponent,
    FormField,
    HiddenField,
    NumberField,
    ReadonlyField,
    SelectField,
    TextareaField,
    TextField,
    create_field,
    register_field_kind,
)
from .form import Form, MergeMode

__all__ = [
    "CheckboxField",
    "DateField",
    "DatetimeField",
    "FieldComponent",
    "FieldList",
    "FieldResolution",
    "Form",
    "FormField",
    "HiddenField",
    "MergeMode",
    "NumberField",
    "ReadonlyField",
    "ResolutionStatus",
    "SelectField",
    "TextField",
    "TextareaField",
    "create_field",
    "register_field_kind",
]
