import pytest
from markupsafe import Markup

from editgrid.errors import ConfigurationError
from editgrid.forms.fields import TextField
from editgrid.grids.data_columns import DataColumns
from editgrid.grids.editable_columns import EditableColumns
from editgrid.grids.grid import Grid


@pytest.mark.unit
def test_editable_record_renders_input_with_encoded_name(grid, fake_repository) -> None:
    html = str(grid.get_column_content(fake_repository.get(5), "Title"))

    assert html.startswith("<input")
    assert 'name="articles[EditableColumns][5][Title]"' in html
    assert 'value="Five"' in html


@pytest.mark.unit
def test_textarea_cell_renders_value_as_content(grid, fake_repository) -> None:
    html = str(grid.get_column_content(fake_repository.get(3), "Body"))

    assert html.startswith("<textarea")
    assert ">body 3</textarea>" in html


@pytest.mark.unit
def test_non_editable_record_renders_plain_escaped_text(grid, fake_repository) -> None:
    record = fake_repository.get(7)
    record.editable = False
    record.Title = "<b>Seven</b>"

    html = str(grid.get_column_content(record, "Title"))

    assert html == "&lt;b&gt;Seven&lt;/b&gt;"
    assert "<input" not in html


@pytest.mark.unit
def test_rendering_does_not_share_field_state_between_rows(grid, fake_repository) -> None:
    first = str(grid.get_column_content(fake_repository.get(3), "Title"))
    second = str(grid.get_column_content(fake_repository.get(5), "Title"))

    assert "[3][Title]" in first and 'value="Three"' in first
    assert "[5][Title]" in second and 'value="Five"' in second


@pytest.mark.unit
def test_casting_and_formatting_apply_before_rendering(fake_repository) -> None:
    columns = EditableColumns(
        {"Title": "Title"},
        field_casting={"Title": "upper"},
        field_formatting={"Title": "$value!"},
    )
    grid = Grid("articles", fake_repository, [columns])

    html = str(grid.get_column_content(fake_repository.get(3), "Title"))

    assert 'value="THREE!"' in html


@pytest.mark.unit
def test_callback_field_with_other_name_cannot_be_located(fake_repository) -> None:
    columns = EditableColumns({"Title": lambda record, column, grid: TextField("Headline")})
    grid = Grid("articles", fake_repository, [columns])

    with pytest.raises(ConfigurationError, match="Title"):
        grid.get_column_content(fake_repository.get(3), "Title")


@pytest.mark.unit
def test_grid_render_builds_table_with_editable_class(grid) -> None:
    html = str(grid.render())

    assert 'class="grid grid-editable"' in html
    assert "<th" in html and ">Title</th>" in html
    assert html.count("<tr") == 4
    assert 'data-record-id="7"' in html


@pytest.mark.unit
def test_readonly_columns_before_editable_columns(fake_repository) -> None:
    grid = Grid(
        "articles",
        fake_repository,
        [DataColumns({"id": "ID"}), EditableColumns({"Title": "标题"})],
    )

    assert grid.get_columns() == ["id", "Title"]
    assert str(grid.get_column_content(fake_repository.get(3), "id")) == "3"
    assert grid.get_column_metadata("Title") == {"title": "标题"}


@pytest.mark.unit
def test_cell_values_are_read_through_grid_casting_hook(fake_repository) -> None:
    class _BracketGrid(Grid):
        def get_casted_value(self, record, column, caster=None):
            return f"[{super().get_casted_value(record, column, caster)}]"

    grid = _BracketGrid("articles", fake_repository, [DataColumns({"Title": "Title"}, field_casting={"Title": "upper"})])

    assert str(grid.get_column_content(fake_repository.get(3), "Title")) == "[THREE]"


@pytest.mark.unit
def test_grid_render_wraps_table_with_component_fragments(fake_repository) -> None:
    class _Banner:
        def get_html_fragments(self, grid):
            return {"before": Markup("<p>top</p>"), "after": Markup("<p>bottom</p>")}

    grid = Grid("articles", fake_repository, [DataColumns({"Title": "Title"}), _Banner()])
    fake_repository.get(3).Title = "<b>x</b>"

    html = str(grid.render())

    assert html.startswith("<p>top</p>")
    assert html.endswith("<p>bottom</p>")
    assert 'data-grid="articles"' in html
    assert "&lt;b&gt;x&lt;/b&gt;" in html
