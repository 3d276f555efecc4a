"""
权限验证依赖注入模块
提供 FastAPI 依赖注入函数，用于获取当前认证上下文和校验接口权限
"""
import logging
from typing import Callable
from fastapi import Request, Depends
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.core.exceptions import AuthException, PermissionDenied
from backoffice.db.session import get_db
from backoffice.modules.admin.services.permission_service import PermissionService
from backoffice.modules.admin.utils.auth_util import AuthContext

logger = logging.getLogger(__name__)

# 关闭认证时使用的匿名上下文
ANONYMOUS_CONTEXT = AuthContext(user_id=0, user_name="anonymous", tenant_id=settings.DEFAULT_TENANT_ID)


def get_auth_context(request: Request) -> AuthContext:
    """
    获取当前认证上下文（依赖注入）

    使用示例:
        @router.get("/list")
        def get_list(auth: AuthContext = Depends(get_auth_context)):
            ...

    Args:
        request: FastAPI 请求对象

    Returns:
        AuthContext 对象

    Raises:
        AuthException: 未认证
    """
    auth = getattr(request.state, "auth", None)
    if auth is None:
        if not settings.AUTH_ENABLED:
            return ANONYMOUS_CONTEXT
        raise AuthException()
    return auth


def require_permission(code: str) -> Callable:
    """
    生成接口权限校验依赖

    使用示例:
        @router.get("/list", dependencies=[Depends(require_permission("system:user:list"))])

    Args:
        code: 权限字符串，如 system:user:list

    Returns:
        依赖函数，校验通过时返回当前认证上下文
    """
    def checker(auth: AuthContext = Depends(get_auth_context), db: Session = Depends(get_db)) -> AuthContext:
        if not settings.AUTH_ENABLED:
            return auth
        permissions = PermissionService.get_user_permissions(db, auth.user_id)
        if not PermissionService.has_permission(permissions, code):
            logger.warning(f"用户 {auth.user_name} 缺少权限 {code}")
            raise PermissionDenied()
        return auth

    return checker
