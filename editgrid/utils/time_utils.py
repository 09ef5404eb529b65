"""统一时间处理工具模块."""

from datetime import UTC, date, datetime


class TimeUtils:
    """统一时间处理工具类."""

    @staticmethod
    def now() -> datetime:
        """获取当前 UTC 时间."""
        return datetime.now(UTC)

    @staticmethod
    def parse_date(value: str | date | datetime | None) -> date | None:
        """将 ISO 字符串或 datetime 规整为 date,空值返回 None.

        Raises:
            ValueError: 字符串不是合法的 ISO 日期.

        """
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return date.fromisoformat(str(value).strip())

    @staticmethod
    def parse_datetime(value: str | date | datetime | None) -> datetime | None:
        """将 ISO 字符串规整为 datetime,空值返回 None.

        Raises:
            ValueError: 字符串不是合法的 ISO 时间.

        """
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, datetime.min.time())
        raw = str(value).strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        return datetime.fromisoformat(raw)


time_utils = TimeUtils()
