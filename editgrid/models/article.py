"""行内编辑表格 - 文章模型(示例表格的数据来源)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from editgrid import db
from editgrid.utils.time_utils import time_utils

if TYPE_CHECKING:
    from editgrid.models.user import User

ARTICLE_STATUSES = ("draft", "published", "archived")


class Article(db.Model):
    """文章模型.

    Attributes:
        id: 主键.
        title: 标题.
        body: 正文.
        status: 状态,draft/published/archived.
        sort_order: 排序.
        is_featured: 是否推荐.
        published_on: 发布日期.
        owner_id: 作者 ID.
        updated_at: 更新时间.

    """

    __tablename__ = "articles"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    body = db.Column(db.Text, nullable=True)
    status = db.Column(db.Enum(*ARTICLE_STATUSES, name="article_status"), nullable=False, default="draft")
    sort_order = db.Column(db.Integer, nullable=True, default=0)
    is_featured = db.Column(db.Boolean, nullable=False, default=False)
    published_on = db.Column(db.Date, nullable=True)
    owner_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now)

    owner = db.relationship("User", lazy="joined")

    def can_edit(self, user: User | None) -> bool:
        """管理员可编辑全部文章,编辑只能编辑自己的文章."""
        if user is None or not getattr(user, "is_authenticated", False) or not user.can_write():
            return False
        if user.is_admin():
            return True
        return self.owner_id is not None and self.owner_id == user.id

    def __repr__(self) -> str:
        return f"<Article {self.id} {self.title!r}>"
