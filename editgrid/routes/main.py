"""
行内编辑表格 - 首页路由
"""

from flask import Blueprint, render_template

from editgrid.grids.registry import get_grid_registry

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def index() -> str:
    """列出已注册的表格。"""
    return render_template("index.html", definitions=get_grid_registry().definitions())
