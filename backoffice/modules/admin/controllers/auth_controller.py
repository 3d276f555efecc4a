"""
认证控制器
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from backoffice.core.permission_dependencies import get_auth_context
from backoffice.db.session import get_db
from backoffice.modules.admin.schemas.auth import UserLogin
from backoffice.modules.admin.services.auth_service import AuthService
from backoffice.modules.admin.utils.auth_util import AuthContext, JWTUtil
from backoffice.modules.admin.utils.response_util import ResponseUtil


router = APIRouter(prefix="/auth", tags=["认证管理"])


@router.post("/login", summary="用户登录")
def login(
    request: Request,
    login_data: UserLogin,
    db: Session = Depends(get_db)
):
    """
    用户登录接口

    Args:
        request: 请求对象
        login_data: 登录数据
        db: 数据库会话

    Returns:
        {access_token, token_type, expires_in, user}
    """
    result = AuthService.login(db, login_data, request)
    return ResponseUtil.success(data=result, message="登录成功")


@router.post("/logout", summary="用户登出")
def logout(request: Request):
    """
    用户登出接口，令牌无效或已过期也返回成功
    """
    token = JWTUtil.extract_bearer_token(request.headers.get("Authorization"))
    AuthService.logout(token, request)
    return ResponseUtil.success(message="退出成功")


@router.get("/getInfo", summary="获取用户信息")
def get_info(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """
    获取当前用户信息、权限字符串与角色键
    """
    return ResponseUtil.success(data=AuthService.get_user_info(db, auth), message="获取成功")
