"""
行内编辑表格 - 表格路由

- GET  /grids/<grid>                      表格页面
- POST /grids/<grid>                      批量保存
- GET|POST /grids/<grid>/<子路径>          组件子路由(如 editable/form/<id>)
"""

from collections.abc import Mapping

from flask import Blueprint, Response, flash, redirect, render_template, request, url_for
from flask.typing import ResponseReturnValue

from editgrid import csrf
from editgrid.constants.system_constants import SuccessMessages
from editgrid.grids.editable_columns import SaveReport
from editgrid.grids.grid import Grid
from editgrid.grids.registry import get_grid_registry
from editgrid.utils.decorators import login_required
from editgrid.utils.request_payload import parse_nested_form
from editgrid.utils.response_utils import jsonify_unified_success
from editgrid.utils.structlog_config import log_info

# 创建蓝图
grids_bp = Blueprint("grids", __name__)


def _build_grid(grid_name: str) -> Grid:
    return get_grid_registry().build(grid_name, link=url_for("grids.show", grid_name=grid_name))


def _wants_json() -> bool:
    return request.is_json or request.accept_mimetypes.best == "application/json"


def _merge_reports(results: list[object]) -> dict[str, list[object]]:
    saved_ids: list[object] = []
    skipped: list[object] = []
    for result in results:
        if isinstance(result, SaveReport):
            payload = result.to_dict()
            saved_ids.extend(payload["saved_ids"])
            skipped.extend(payload["skipped"])
    return {"saved_ids": saved_ids, "skipped": skipped}


@grids_bp.route("/<grid_name>", methods=["GET"])
def show(grid_name: str) -> str:
    """表格页面。"""
    definition = get_grid_registry().get_definition(grid_name)
    grid = _build_grid(grid_name)
    return render_template("grids/show.html", grid=grid, definition=definition)


@grids_bp.route("/<grid_name>", methods=["POST"])
@login_required
def save(grid_name: str) -> ResponseReturnValue:
    """批量保存表格中修改过的单元格。

    表单数据与 JSON 均可,结构为 `{grid: {Namespace: {记录 ID: {字段: 值}}}}`。
    """
    grid = _build_grid(grid_name)
    if request.is_json:
        # 非对象的 JSON(数组、字符串、数字)视为没有提交任何编辑
        payload = request.get_json(silent=True) or {}
        if not isinstance(payload, Mapping):
            payload = {}
    else:
        payload = request.form
    posted = parse_nested_form(payload)
    grid.set_value(posted.get(grid.name))

    summary = _merge_reports(grid.save_into())
    log_info(
        "表格提交处理完成",
        module="grids",
        grid=grid.name,
        saved_count=len(summary["saved_ids"]),
        skipped_count=len(summary["skipped"]),
    )

    if _wants_json():
        return jsonify_unified_success(data={"grid": grid.name, **summary}, message=SuccessMessages.GRID_SAVED)

    flash(f"{SuccessMessages.GRID_SAVED}: {len(summary['saved_ids'])} 条", "success")
    if summary["skipped"]:
        flash(f"{len(summary['skipped'])} 条记录未保存", "warning")
    return redirect(url_for("grids.show", grid_name=grid_name))


@grids_bp.route("/<grid_name>/<path:action>", methods=["GET", "POST"])
@csrf.exempt
def dispatch(grid_name: str, action: str) -> ResponseReturnValue:
    """把子路径交给表格组件处理,返回 HTML 片段。"""
    grid = _build_grid(grid_name)
    result = grid.handle_request(action, request.method)
    if hasattr(result, "__html__"):
        return Response(result.__html__(), mimetype="text/html")
    return result
