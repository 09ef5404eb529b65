"""可编辑列组件.

在 DataColumns 的基础上把单元格渲染为表单控件,并负责:

1. 字段解析: 列描述 -> FormField(回调 / callback / field 类型 / 模型默认字段 / 只读字段)
2. 单元格渲染: 复制字段、转换并格式化值、写入编码后的 name
3. 批量保存: 解析 `{记录 ID: {字段名: 值}}`,逐条鉴权、绑定并保存
4. 单行表单片段: `editable/form/<id>`
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

from editgrid.constants import DEFAULT_EDITABLE_CSS_CLASS, DEFAULT_EDITABLE_NAMESPACE, ROW_FORM_ROUTE, SkipReason
from editgrid.constants.system_constants import ErrorMessages
from editgrid.errors import NotFoundError, ValidationError
from editgrid.forms.field_list import FieldList, FieldResolution
from editgrid.forms.fields import FormField, ReadonlyField, create_field
from editgrid.forms.form import Form, MergeMode
from editgrid.grids.data_columns import ColumnDescriptor, DataColumns
from editgrid.grids.field_names import FieldNameCodec, is_record_id
from editgrid.utils.structlog_config import log_debug, log_info, log_warning

if TYPE_CHECKING:
    from editgrid.grids.casting import Caster, Formatter
    from editgrid.grids.grid import Grid

ROW_FORM_PATH = ROW_FORM_ROUTE.rsplit("/", 1)[0]

MODULE = "editable_columns"


@dataclass(slots=True)
class SkippedRecord:
    """批量保存中被跳过的一条记录."""

    record_id: str
    reason: SkipReason
    errors: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"record_id": self.record_id, "reason": self.reason.value}
        if self.errors:
            payload["errors"] = dict(self.errors)
        return payload


@dataclass(slots=True)
class SaveReport:
    """批量保存结果,部分保存属于正常结果."""

    saved_ids: list[int] = field(default_factory=list)
    skipped: list[SkippedRecord] = field(default_factory=list)

    @property
    def saved_count(self) -> int:
        return len(self.saved_ids)

    def skip(self, record_id: object, reason: SkipReason, errors: Mapping[str, str] | None = None) -> None:
        self.skipped.append(SkippedRecord(record_id=str(record_id), reason=reason, errors=dict(errors or {})))

    def to_dict(self) -> dict[str, Any]:
        return {
            "saved_ids": list(self.saved_ids),
            "skipped": [entry.to_dict() for entry in self.skipped],
        }


class EditableColumns(DataColumns):
    """行内编辑列.

    display_fields 中每列的描述决定渲染哪种控件,按以下顺序解析(先命中者生效):

    - 可调用对象: `callback(record, column, grid)` 返回 FormField
    - 含 `callback` 键的映射: 同上
    - 含 `field` 键的映射: 字段类型标识或 FormField 子类,以列名构造
    - FormField 子类本身: 以列名构造
    - 其他(未配置或只有标题): 仓库按模型列推导默认字段,模型没有该列时为只读字段

    Args:
        display_fields: 列描述,见上.
        field_casting: 渲染前的类型转换.
        field_formatting: 渲染前的展示格式化.
        namespace: 字段名编码中的命名空间段.
        css_class: 追加到表格上的 CSS 类.

    """

    def __init__(
        self,
        display_fields: Mapping[str, ColumnDescriptor] | None = None,
        *,
        field_casting: Mapping[str, str | Caster] | None = None,
        field_formatting: Mapping[str, str | Formatter] | None = None,
        namespace: str = DEFAULT_EDITABLE_NAMESPACE,
        css_class: str = DEFAULT_EDITABLE_CSS_CLASS,
    ) -> None:
        super().__init__(display_fields, field_casting=field_casting, field_formatting=field_formatting)
        self.codec = FieldNameCodec(namespace)
        self.css_class = css_class

    @property
    def namespace(self) -> str:
        return self.codec.namespace

    # ------------------------------------------------------------------ #
    # 字段解析
    # ------------------------------------------------------------------ #
    def resolve_field(self, column: str, record: Any, grid: Grid) -> FieldResolution:
        """解析单列的编辑字段,不抛异常,错误通过 FieldResolution 状态表达."""
        descriptor = self.get_display_fields(grid).get(column)

        if isinstance(descriptor, type) and issubclass(descriptor, FormField):
            produced: object = descriptor(column)
        elif callable(descriptor):
            produced = descriptor(record, column, grid)
        elif isinstance(descriptor, Mapping) and descriptor.get("callback") is not None:
            callback = descriptor["callback"]
            if not callable(callback):
                return FieldResolution.invalid(column, callback)
            produced = callback(record, column, grid)
        elif isinstance(descriptor, Mapping) and "field" in descriptor:
            produced = create_field(descriptor["field"], column)
        else:
            produced = grid.repository.default_field_for(column) or ReadonlyField(column)
            title = self.get_column_metadata(grid, column)["title"]
            if isinstance(produced, FormField):
                produced.title = title

        if not isinstance(produced, FormField):
            return FieldResolution.invalid(column, produced)
        return FieldResolution.resolved(column, produced)

    def get_fields(self, grid: Grid, record: Any) -> FieldList:
        """按展示顺序构建记录的字段集合.

        Raises:
            ConfigurationError: 任一列的描述返回了非字段对象.

        """
        fields = FieldList()
        for column in self.get_columns_handled(grid):
            fields.push(self.resolve_field(column, record, grid).unwrap())
        return fields

    def get_form(self, grid: Grid, record: Any) -> Form:
        """构建并从记录加载值的表单."""
        record_id = self._record_id(record)
        form = Form(f"{grid.name}-{record_id}", self.get_fields(grid, record))
        form.set_form_action(grid.link_to(ROW_FORM_PATH, record_id))
        return form.load_data_from(record)

    def get_field_name(self, grid: Grid, record_id: int | str, field_name: str) -> str:
        return self.codec.encode(grid.name, record_id, field_name)

    # ------------------------------------------------------------------ #
    # 渲染
    # ------------------------------------------------------------------ #
    def get_column_content(self, grid: Grid, record: Any, column: str) -> Markup:
        """渲染单元格: 不可编辑的记录走只读渲染,否则渲染为表单控件."""
        if not grid.repository.can_edit(record):
            return super().get_column_content(grid, record, column)

        fields = self.get_fields(grid, record)
        cell_field = fields.find(column).unwrap().copy()
        value = self.transform_value(grid, record, column)
        cell_field.set_name(self.get_field_name(grid, self._record_id(record), cell_field.get_name()))
        cell_field.set_value(value)
        return cell_field.render()

    def get_html_fragments(self, grid: Grid) -> dict[str, Markup]:
        grid.add_extra_class(self.css_class)
        return {}

    # ------------------------------------------------------------------ #
    # 批量保存
    # ------------------------------------------------------------------ #
    def posted_edit_set(self, grid: Grid) -> Mapping[Any, Any] | None:
        """从表格提交数据中取出本组件的编辑集,缺失或结构不符时返回 None."""
        if not isinstance(grid.value, Mapping):
            return None
        edit_set = grid.value.get(self.namespace)
        if not isinstance(edit_set, Mapping):
            return None
        return edit_set

    def handle_save(self, grid: Grid, record: Any | None = None) -> SaveReport:
        """保存提交的编辑集.

        每条记录独立处理: ID 非法、值不是映射、记录不存在、无权编辑或输入校验失败的
        记录被跳过,其余记录逐条提交;已提交的记录不会因后续记录失败而回滚.

        Args:
            grid: 表格,`grid.value` 为本表格的提交数据.
            record: 触发保存的记录,本组件不使用.

        Returns:
            SaveReport: 已保存与被跳过的记录.

        Raises:
            DatabaseError: 单条记录提交失败.

        """
        del record
        report = SaveReport()
        edit_set = self.posted_edit_set(grid)
        if edit_set is None:
            log_debug("未提交可编辑列数据,跳过保存", module=MODULE, grid=grid.name)
            return report

        for raw_id, values in edit_set.items():
            if not is_record_id(raw_id):
                self._skip(report, grid, raw_id, SkipReason.INVALID_ID)
                continue
            if not isinstance(values, Mapping):
                self._skip(report, grid, raw_id, SkipReason.INVALID_VALUES)
                continue

            record_id = int(raw_id)
            target = grid.repository.get(record_id)
            if target is None:
                self._skip(report, grid, raw_id, SkipReason.NOT_FOUND)
                continue
            if not grid.repository.can_edit(target):
                self._skip(report, grid, raw_id, SkipReason.NOT_EDITABLE)
                continue

            form = self.get_form(grid, target).load_data_from(values, MergeMode.CLEAR_MISSING)
            errors = form.validate()
            if errors:
                self._skip(report, grid, raw_id, SkipReason.INVALID_INPUT, errors)
                continue

            form.save_into(target)
            grid.repository.save(target)
            report.saved_ids.append(record_id)

        log_info(
            "表格批量保存完成",
            module=MODULE,
            grid=grid.name,
            saved_ids=report.saved_ids,
            skipped_count=len(report.skipped),
        )
        return report

    @staticmethod
    def _skip(
        report: SaveReport,
        grid: Grid,
        record_id: object,
        reason: SkipReason,
        errors: Mapping[str, str] | None = None,
    ) -> None:
        report.skip(record_id, reason, errors)
        log_warning(
            "跳过记录",
            module=MODULE,
            grid=grid.name,
            record_id=str(record_id),
            reason=reason.value,
            errors=dict(errors or {}),
        )

    # ------------------------------------------------------------------ #
    # 子路由
    # ------------------------------------------------------------------ #
    def get_url_handlers(self, grid: Grid) -> dict[str, str]:
        del grid
        return {ROW_FORM_ROUTE: "handle_form"}

    def handle_form(self, grid: Grid, params: Mapping[str, Any]) -> Form:
        """返回单条记录的表单片段,字段 name 已按表格编码.

        Raises:
            ValidationError: 记录 ID 不是纯数字.
            NotFoundError: 记录不存在.

        """
        raw_id = str(params.get("record_id", ""))
        if not is_record_id(raw_id):
            raise ValidationError(ErrorMessages.INVALID_RECORD_ID, extra={"grid": grid.name, "record_id": raw_id})

        record = grid.repository.get(int(raw_id))
        if record is None:
            raise NotFoundError(
                ErrorMessages.RECORD_NOT_FOUND,
                message_key="RECORD_NOT_FOUND",
                extra={"grid": grid.name, "record_id": raw_id},
            )

        form = self.get_form(grid, record)
        renamed = FieldList(
            form_field.copy().set_name(self.get_field_name(grid, raw_id, form_field.get_name()))
            for form_field in form.fields
        )
        return Form(form.name, renamed, action=form.action)

    @staticmethod
    def _record_id(record: Any) -> Any:
        return getattr(record, "id", None)


__all__ = ["EditableColumns", "SaveReport", "SkippedRecord"]
