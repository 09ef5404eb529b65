"""
用户角色常量

定义用户角色，避免魔法字符串。
"""


class UserRole:
    """用户角色常量."""

    ADMIN = "admin"             # 管理员,可编辑全部记录
    EDITOR = "editor"           # 编辑,仅可编辑自己的记录
    VIEWER = "viewer"           # 查看者（只读）

    @classmethod
    def can_write(cls, role: str | None) -> bool:
        """判断角色是否具备写权限."""
        return role in (cls.ADMIN, cls.EDITOR)
