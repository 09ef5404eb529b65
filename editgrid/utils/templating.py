"""HTML 片段模板渲染.

表格与单行表单的外层结构写在 `templates/grids/partials/` 中.
有应用上下文时使用应用的 Jinja 环境(宿主应用可覆盖模板),否则使用包内模板.
"""

from __future__ import annotations

from functools import lru_cache

from flask import current_app, has_app_context
from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup


@lru_cache(maxsize=1)
def _package_environment() -> Environment:
    return Environment(
        loader=PackageLoader("editgrid", "templates"),
        autoescape=select_autoescape(["html"]),
    )


def render_fragment(template_name: str, **context: object) -> Markup:
    """渲染片段模板,返回 Markup.

    Args:
        template_name: 模板路径,如 `grids/partials/table.html`.
        **context: 模板变量.

    """
    environment = current_app.jinja_env if has_app_context() else _package_environment()
    return Markup(environment.get_template(template_name).render(**context))


__all__ = ["render_fragment"]
