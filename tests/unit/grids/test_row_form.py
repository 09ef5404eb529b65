import pytest

from editgrid.errors import NotFoundError, ValidationError
from editgrid.forms.form import Form


@pytest.mark.unit
def test_row_form_contains_every_column_with_encoded_names(grid) -> None:
    form = grid.handle_request("editable/form/3")

    assert isinstance(form, Form)
    assert form.fields.names() == [
        "articles[EditableColumns][3][Title]",
        "articles[EditableColumns][3][Body]",
    ]
    assert form.action == "/grids/articles/editable/form/3"
    html = str(form.render())
    assert 'value="Three"' in html
    assert ">body 3</textarea>" in html


@pytest.mark.unit
def test_row_form_rejects_non_numeric_id(grid) -> None:
    with pytest.raises(ValidationError) as exc_info:
        grid.handle_request("editable/form/42a")

    assert exc_info.value.status_code == 400


@pytest.mark.unit
def test_row_form_unknown_record_is_not_found(grid) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        grid.handle_request("editable/form/9999999", "POST")

    assert exc_info.value.status_code == 404


@pytest.mark.unit
def test_unknown_sub_route_is_not_found(grid) -> None:
    with pytest.raises(NotFoundError):
        grid.handle_request("editable/unknown/3")


@pytest.mark.unit
def test_row_form_does_not_rename_cached_fields(grid, editable_columns, fake_repository) -> None:
    grid.handle_request("editable/form/3")

    fields = editable_columns.get_fields(grid, fake_repository.get(3))

    assert fields.names() == ["Title", "Body"]
