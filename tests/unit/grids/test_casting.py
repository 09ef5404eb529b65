from datetime import date
from types import SimpleNamespace

import pytest
from markupsafe import Markup

from editgrid.errors import ConfigurationError
from editgrid.grids.casting import cast_value, format_value, resolve_caster


@pytest.mark.unit
def test_named_casters() -> None:
    assert cast_value("7", "int") == 7
    assert cast_value("yes", "bool") is True
    assert cast_value("0", "bool") is False
    assert cast_value("2024-02-29", "date") == date(2024, 2, 29)
    assert cast_value("abc", "upper") == "ABC"


@pytest.mark.unit
def test_cast_keeps_none_and_unconvertible_values() -> None:
    assert cast_value(None, "int") is None
    assert cast_value("n/a", "int") == "n/a"


@pytest.mark.unit
def test_limit_caster_truncates_with_ellipsis() -> None:
    assert cast_value("abcdefghij", "limit:6") == "abc..."
    assert cast_value("short", "limit:6") == "short"


@pytest.mark.unit
def test_unknown_caster_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        resolve_caster("rot13")
    with pytest.raises(ConfigurationError):
        resolve_caster("limit:x")


@pytest.mark.unit
def test_template_formatter_escapes_inserted_values() -> None:
    record = SimpleNamespace(status="<draft>")

    formatted = format_value("Hi & bye", record, "<b>$value</b> ($status) $missing")

    assert isinstance(formatted, Markup)
    assert str(formatted) == "<b>Hi &amp; bye</b> (&lt;draft&gt;) $missing"


@pytest.mark.unit
def test_callable_formatter_receives_record() -> None:
    record = SimpleNamespace(currency="EUR")

    assert format_value(3, record, lambda value, rec: f"{value} {rec.currency}") == "3 EUR"
