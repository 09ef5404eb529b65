"""表格行内编辑相关常量."""

from enum import Enum

# 字段名编码中的命名空间段: GRID[NAMESPACE][ID][FIELD]
DEFAULT_EDITABLE_NAMESPACE = "EditableColumns"

# 可编辑表格追加到 <table> 上的 CSS 类
DEFAULT_EDITABLE_CSS_CLASS = "grid-editable"

# 单行表单片段的子路由
ROW_FORM_ROUTE = "editable/form/<record_id>"

# 布尔转换与复选框提交值中视为 False 的字符串
FALSEY_STRINGS = frozenset({"", "0", "false", "off", "no", "none"})


class SkipReason(str, Enum):
    """批量保存时跳过某条记录的原因."""

    INVALID_ID = "invalid_id"
    INVALID_VALUES = "invalid_values"
    NOT_FOUND = "not_found"
    NOT_EDITABLE = "not_editable"
    INVALID_INPUT = "invalid_input"
