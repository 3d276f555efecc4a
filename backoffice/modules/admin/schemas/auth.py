"""
认证相关的Pydantic模式
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from backoffice.modules.admin.schemas.common import CAMEL_CONFIG
from backoffice.modules.admin.schemas.user import UserModel


class UserLogin(BaseModel):
    """用户登录请求模式"""
    username: str = Field(..., min_length=1, description="用户名")
    password: str = Field(..., min_length=1, description="密码")
    tenant_id: Optional[str] = Field(None, description="租户编号")

    model_config = CAMEL_CONFIG


class LoginUserSummary(BaseModel):
    """登录成功返回的用户摘要"""
    id: int = Field(..., description="用户ID")
    user_name: str = Field(..., description="用户名")
    nick_name: Optional[str] = Field(None, description="昵称")
    status: Optional[str] = Field(None, description="状态")
    login_date: Optional[datetime] = Field(None, description="最后登录时间")

    model_config = CAMEL_CONFIG


class LoginResponse(BaseModel):
    """登录响应，access_token 字段名保持下划线写法"""
    access_token: str = Field(..., serialization_alias="access_token", description="访问令牌")
    token_type: str = Field(default="bearer", serialization_alias="token_type", description="令牌类型")
    expires_in: int = Field(..., serialization_alias="expires_in", description="过期时间（秒）")
    user: LoginUserSummary = Field(..., description="用户摘要")

    model_config = CAMEL_CONFIG


class UserInfoResponse(BaseModel):
    """getInfo 响应：用户、权限字符串、角色键"""
    user: UserModel = Field(..., description="用户信息")
    permissions: List[str] = Field(default_factory=list, description="权限列表")
    roles: List[str] = Field(default_factory=list, description="角色键列表")

    model_config = CAMEL_CONFIG
