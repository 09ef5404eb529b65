"""行内编辑表格 - 用户模型."""

from flask_login import UserMixin

from editgrid import bcrypt, db
from editgrid.constants import UserRole
from editgrid.utils.time_utils import time_utils

MIN_USER_PASSWORD_LENGTH = 8


class User(UserMixin, db.Model):
    """用户模型.

    表格只关心用户的角色与启用状态,用于判断能否编辑某条记录.
    继承 Flask-Login 的 UserMixin 提供会话管理功能.

    Attributes:
        id: 用户 ID,主键.
        username: 用户名,唯一索引.
        password: 加密后的密码(bcrypt).
        role: 用户角色,可选值: admin、editor、viewer.
        created_at: 创建时间.
        is_active: 是否启用.

    """

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(50), nullable=False, default=UserRole.VIEWER)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=time_utils.now)
    is_active: bool = db.Column(db.Boolean, default=True, nullable=False)  # pyright: ignore[reportIncompatibleMethodOverride]

    def __init__(self, username: str | None = None, password: str | None = None, role: str = UserRole.VIEWER) -> None:
        """初始化用户.

        Args:
            username: 用户名
            password: 密码
            role: 角色

        """
        if username is not None:
            self.username = username
        if password is not None:
            self.set_password(password)
        self.role = role or UserRole.VIEWER
        self.is_active = True

    def set_password(self, password: str) -> None:
        """设置密码(加密).

        Raises:
            ValueError: 密码长度不足或缺少大小写字母、数字.

        """
        if len(password) < MIN_USER_PASSWORD_LENGTH:
            error_msg = f"密码长度至少{MIN_USER_PASSWORD_LENGTH}位"
            raise ValueError(error_msg)
        if not any(c.isupper() for c in password):
            error_msg = "密码必须包含大写字母"
            raise ValueError(error_msg)
        if not any(c.islower() for c in password):
            error_msg = "密码必须包含小写字母"
            raise ValueError(error_msg)
        if not any(c.isdigit() for c in password):
            error_msg = "密码必须包含数字"
            raise ValueError(error_msg)

        self.password = bcrypt.generate_password_hash(password).decode("utf-8")

    def check_password(self, password: str) -> bool:
        return bcrypt.check_password_hash(self.password, password)

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_write(self) -> bool:
        """启用状态且角色具备写权限."""
        return bool(self.is_active) and UserRole.can_write(self.role)

    def __repr__(self) -> str:
        return f"<User {self.username}>"
