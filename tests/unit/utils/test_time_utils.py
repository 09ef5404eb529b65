"""
TimeUtils工具类单元测试
"""
from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from editgrid.utils.time_utils import TimeUtils


@pytest.mark.unit
def test_now():
    """当前时间带 UTC 时区."""
    now = TimeUtils.now()
    assert isinstance(now, datetime)
    assert now.tzinfo == UTC


@pytest.mark.unit
@pytest.mark.parametrize("value", [None, ""])
def test_parse_empty_values(value):
    assert TimeUtils.parse_date(value) is None
    assert TimeUtils.parse_datetime(value) is None


@pytest.mark.unit
def test_parse_date():
    assert TimeUtils.parse_date("2024-03-04") == date(2024, 3, 4)
    assert TimeUtils.parse_date(" 2024-03-04 ") == date(2024, 3, 4)
    assert TimeUtils.parse_date(datetime(2024, 3, 4, 10, 30)) == date(2024, 3, 4)
    assert TimeUtils.parse_date(date(2024, 3, 4)) == date(2024, 3, 4)


@pytest.mark.unit
def test_parse_date_invalid():
    with pytest.raises(ValueError):
        TimeUtils.parse_date("2024-13-40")


@pytest.mark.unit
def test_parse_datetime():
    assert TimeUtils.parse_datetime("2024-03-04T10:30") == datetime(2024, 3, 4, 10, 30)
    assert TimeUtils.parse_datetime(date(2024, 3, 4)) == datetime(2024, 3, 4)
    assert TimeUtils.parse_datetime("2024-03-04T10:30:00Z") == datetime(2024, 3, 4, 10, 30, tzinfo=UTC)


@pytest.mark.unit
def test_parse_datetime_keeps_offset():
    parsed = TimeUtils.parse_datetime("2024-03-04T18:30:00+08:00")
    assert parsed.utcoffset() == timedelta(hours=8)
    assert parsed.astimezone(timezone.utc).hour == 10


@pytest.mark.unit
def test_parse_datetime_invalid():
    with pytest.raises(ValueError):
        TimeUtils.parse_datetime("not a time")
