import pytest
from werkzeug.datastructures import MultiDict

from editgrid.utils.request_payload import parse_nested_form, split_bracket_key


@pytest.mark.unit
def test_split_bracket_key() -> None:
    assert split_bracket_key("articles[EditableColumns][5][title]") == ["articles", "EditableColumns", "5", "title"]
    assert split_bracket_key("csrf_token") is None
    assert split_bracket_key("broken[key") is None


@pytest.mark.unit
def test_form_keys_become_nested_dicts_and_siblings_pass_through() -> None:
    form = MultiDict(
        [
            ("csrf_token", "abc"),
            ("articles[EditableColumns][5][title]", "Hi"),
            ("articles[EditableColumns][5][body]", "x\x00y"),
            ("articles[EditableColumns][7][title]", "first"),
            ("articles[EditableColumns][7][title]", "last"),
        ],
    )

    parsed = parse_nested_form(form)

    assert parsed == {
        "csrf_token": "abc",
        "articles": {
            "EditableColumns": {
                "5": {"title": "Hi", "body": "xy"},
                "7": {"title": "last"},
            },
        },
    }


@pytest.mark.unit
def test_conflicting_paths_are_ignored() -> None:
    parsed = parse_nested_form({"grid[ns]": "flat", "grid[ns][1][title]": "nested"})

    assert parsed == {"grid": {"ns": "flat"}}


@pytest.mark.unit
def test_json_mapping_is_kept_nested() -> None:
    payload = {"articles": {"EditableColumns": {"5": {"title": "Hi"}}}}

    assert parse_nested_form(payload) == payload


@pytest.mark.unit
def test_unsupported_payload_type() -> None:
    assert parse_nested_form(None) == {}
    with pytest.raises(TypeError):
        parse_nested_form(["not", "a", "mapping"])
