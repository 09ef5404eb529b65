import pytest

from editgrid.errors import ConfigurationError
from editgrid.grids.field_names import DecodedFieldName, FieldNameCodec, is_record_id


@pytest.mark.unit
def test_encode_uses_bracketed_layout() -> None:
    codec = FieldNameCodec("EditableColumns")

    assert codec.encode("articles", 5, "title") == "articles[EditableColumns][5][title]"


@pytest.mark.unit
def test_encoded_name_decodes_to_same_parts() -> None:
    codec = FieldNameCodec("EditableColumns")
    name = codec.encode("articles", "42", "published_on")

    decoded = codec.decode(name, grid_name="articles")

    assert decoded == DecodedFieldName("articles", "EditableColumns", 42, "published_on")


@pytest.mark.unit
def test_decode_rejects_other_record_grid_and_namespace() -> None:
    codec = FieldNameCodec("EditableColumns")
    name = codec.encode("articles", 5, "title")

    assert codec.decode(name).record_id == 5
    assert codec.decode(name, grid_name="users") is None
    assert FieldNameCodec("OtherColumns").decode(name) is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "name",
    [
        "csrf_token",
        "articles[EditableColumns][abc][title]",
        "articles[EditableColumns][5]",
        "articles[EditableColumns][5][title][extra]",
        "articles[EditableColumns][-1][title]",
    ],
)
def test_decode_ignores_foreign_names(name: str) -> None:
    assert FieldNameCodec("EditableColumns").decode(name) is None


@pytest.mark.unit
def test_encode_rejects_brackets_and_bad_ids() -> None:
    codec = FieldNameCodec()

    with pytest.raises(ConfigurationError):
        codec.encode("arti[cles", 1, "title")
    with pytest.raises(ConfigurationError):
        codec.encode("articles", "1a", "title")
    with pytest.raises(ConfigurationError):
        FieldNameCodec("")


@pytest.mark.unit
def test_is_record_id() -> None:
    assert is_record_id("0")
    assert is_record_id(12)
    assert not is_record_id("12a")
    assert not is_record_id("")
    assert not is_record_id(-1)
    assert not is_record_id(True)
