"""行内编辑表格 - 数据模型."""

from .article import ARTICLE_STATUSES, Article
from .user import User

__all__ = ["ARTICLE_STATUSES", "Article", "User"]
