# tests/unit/grids/conftest.py
"""表格组件测试专用 fixtures."""

import pytest

from editgrid.grids.editable_columns import EditableColumns
from editgrid.grids.grid import Grid


@pytest.fixture
def editable_columns() -> EditableColumns:
    return EditableColumns({"Title": "Title", "Body": "Body"})


@pytest.fixture
def grid(fake_repository, editable_columns) -> Grid:
    return Grid("articles", fake_repository, [editable_columns], link="/grids/articles")
