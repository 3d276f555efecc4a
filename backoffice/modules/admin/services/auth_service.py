"""
认证服务
"""
import logging
from datetime import datetime
from typing import Optional, Dict, Any
from fastapi import Request
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.core.exceptions import AuthException
from backoffice.core.middleware import get_client_ip
from backoffice.modules.admin.dao.user_dao import UserDao
from backoffice.modules.admin.models.system import SysUser
from backoffice.modules.admin.schemas.auth import UserLogin, LoginResponse, LoginUserSummary
from backoffice.modules.admin.services.log_service import LoginLogService, LOGIN_SUCCESS, LOGIN_FAIL
from backoffice.modules.admin.services.permission_service import PermissionService
from backoffice.modules.admin.utils.auth_util import AuthContext, PasswordUtil, JWTUtil

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "用户名或密码错误"


class AuthService:
    """认证服务类"""

    @classmethod
    def validate_user(cls, db: Session, username: str, password: str,
                      request: Optional[Request] = None, tenant_id: Optional[str] = None) -> SysUser:
        """
        校验用户身份，成功与失败都记录登录日志

        Args:
            db: 数据库会话
            username: 用户名
            password: 密码
            request: 请求对象
            tenant_id: 租户编号

        Returns:
            用户对象（已更新最后登录信息）

        Raises:
            AuthException: 用户不存在、已停用或密码错误
        """
        user = UserDao.get_user_by_name(db, username, tenant_id)
        if not user:
            LoginLogService.record(username, LOGIN_FAIL, "用户不存在", request, tenant_id)
            raise AuthException(LOGIN_FAILED_MESSAGE)

        if user.status != '0':
            LoginLogService.record(username, LOGIN_FAIL, "用户已被停用", request, user.tenant_id)
            raise AuthException("用户已被停用，请联系管理员")

        if not PasswordUtil.verify_password(password, user.password):
            LoginLogService.record(username, LOGIN_FAIL, "密码错误", request, user.tenant_id)
            raise AuthException(LOGIN_FAILED_MESSAGE)

        login_ip = get_client_ip(request) if request is not None else ""
        try:
            UserDao.update_login_info(db, user.user_id, login_ip, datetime.now())
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(user)

        LoginLogService.record(username, LOGIN_SUCCESS, "登录成功", request, user.tenant_id)
        return user

    @classmethod
    def create_token(cls, user: SysUser) -> str:
        """
        签发访问令牌

        Args:
            user: 用户对象

        Returns:
            JWT令牌
        """
        claims = {
            "sub": str(user.user_id),
            "user_id": user.user_id,
            "username": user.user_name,
            "nick_name": user.nick_name,
            "status": user.status,
            "tenant_id": user.tenant_id or settings.DEFAULT_TENANT_ID,
            "dept_id": user.dept_id,
        }
        return JWTUtil.create_access_token(claims)

    @classmethod
    def login(cls, db: Session, login_data: UserLogin, request: Optional[Request] = None) -> LoginResponse:
        """
        用户登录

        Args:
            db: 数据库会话
            login_data: 登录数据
            request: 请求对象

        Returns:
            {access_token, token_type, expires_in, user}
        """
        user = cls.validate_user(db, login_data.username, login_data.password, request, login_data.tenant_id)
        logger.info(f"用户登录成功: {user.user_name}")
        return LoginResponse(
            access_token=cls.create_token(user),
            expires_in=JWTUtil.get_token_expire_time(),
            user=LoginUserSummary(
                id=user.user_id,
                user_name=user.user_name,
                nick_name=user.nick_name,
                status=user.status,
                login_date=user.login_date,
            )
        )

    @classmethod
    def logout(cls, token: Optional[str], request: Optional[Request] = None) -> None:
        """
        注销：令牌无效或已过期也照常处理，总是记录一条注销日志

        Args:
            token: Bearer令牌，可为空
            request: 请求对象
        """
        claims = JWTUtil.decode_without_verify(token) if token else None
        user_name = (claims or {}).get("username") or ""
        tenant_id = (claims or {}).get("tenant_id")
        LoginLogService.record(user_name, LOGIN_SUCCESS, "退出成功", request, tenant_id)
        logger.info(f"用户注销: {user_name or '未知用户'}")

    @classmethod
    def get_user_info(cls, db: Session, auth: AuthContext) -> Dict[str, Any]:
        return PermissionService.get_user_info_services(db, auth)
