"""
用户管理相关的Pydantic模型
"""
import re
from datetime import datetime
from typing import Optional, List, Literal, Dict, Any
from pydantic import BaseModel, Field, validator

from backoffice.modules.admin.schemas.common import CAMEL_CONFIG, PageQueryModel
from backoffice.modules.admin.schemas.dept import EMAIL_PATTERN
from backoffice.modules.admin.schemas.role import RoleModel


def _check_email(v: Optional[str]) -> Optional[str]:
    if v and v.strip():
        if not re.match(EMAIL_PATTERN, v.strip()):
            raise ValueError('邮箱格式不正确')
        return v.strip()
    return v


def _check_phone(v: Optional[str]) -> Optional[str]:
    if v and not v.isdigit():
        raise ValueError('手机号码只能包含数字')
    return v


class UserModel(BaseModel):
    """用户基础模型，不含密码"""
    user_id: Optional[int] = Field(None, description="用户ID")
    tenant_id: Optional[str] = Field(None, description="租户编号")
    dept_id: Optional[int] = Field(None, description="部门ID")
    user_name: Optional[str] = Field(None, description="用户账号")
    nick_name: Optional[str] = Field(None, description="用户昵称")
    user_type: Optional[str] = Field("sys_user", description="用户类型")
    email: Optional[str] = Field(None, description="用户邮箱")
    phonenumber: Optional[str] = Field(None, description="手机号码")
    sex: Optional[str] = Field("0", description="用户性别（0男 1女 2未知）")
    avatar: Optional[str] = Field(None, description="头像地址")
    status: Optional[str] = Field("0", description="帐号状态（0正常 1停用）")
    del_flag: Optional[str] = Field("0", description="删除标志（0代表存在 2代表删除）")
    login_ip: Optional[str] = Field(None, description="最后登录IP")
    login_date: Optional[datetime] = Field(None, description="最后登录时间")
    create_by: Optional[str] = Field(None, description="创建者")
    create_time: Optional[datetime] = Field(None, description="创建时间")
    update_by: Optional[str] = Field(None, description="更新者")
    update_time: Optional[datetime] = Field(None, description="更新时间")
    remark: Optional[str] = Field(None, description="备注")

    # 扩展字段
    dept_name: Optional[str] = Field(None, description="部门名称")
    roles: Optional[List[RoleModel]] = Field(None, description="角色列表")
    role_ids: Optional[List[int]] = Field(None, description="角色ID列表")
    post_ids: Optional[List[int]] = Field(None, description="岗位ID列表")
    role_id: Optional[int] = Field(None, description="首个角色ID")

    model_config = CAMEL_CONFIG


class UserPageQueryModel(PageQueryModel):
    """用户分页查询模型"""
    user_name: Optional[str] = Field(None, description="用户账号")
    nick_name: Optional[str] = Field(None, description="用户昵称")
    phonenumber: Optional[str] = Field(None, description="手机号码")
    status: Optional[Literal["0", "1"]] = Field(None, description="帐号状态")
    dept_id: Optional[int] = Field(None, description="部门ID（包含子部门）")
    role_id: Optional[int] = Field(None, description="角色ID")


class _UserFormModel(BaseModel):
    dept_id: Optional[int] = Field(None, description="部门ID")
    user_name: str = Field(..., description="用户账号", min_length=1, max_length=30)
    nick_name: str = Field(..., description="用户昵称", min_length=1, max_length=30)
    email: Optional[str] = Field(None, description="用户邮箱", max_length=50)
    phonenumber: Optional[str] = Field(None, description="手机号码", max_length=11)
    sex: Optional[Literal["0", "1", "2"]] = Field("0", description="用户性别")
    avatar: Optional[str] = Field(None, description="头像地址")
    status: Optional[Literal["0", "1"]] = Field("0", description="帐号状态")
    remark: Optional[str] = Field(None, description="备注", max_length=500)
    role_ids: Optional[List[int]] = Field(None, description="角色ID列表")
    post_ids: Optional[List[int]] = Field(None, description="岗位ID列表")

    @validator('user_name')
    def validate_user_name(cls, v):
        if not v.strip():
            raise ValueError('用户账号不能为空')
        return v.strip()

    @validator('email')
    def validate_email(cls, v):
        return _check_email(v)

    @validator('phonenumber')
    def validate_phonenumber(cls, v):
        return _check_phone(v)

    model_config = CAMEL_CONFIG


class AddUserModel(_UserFormModel):
    """添加用户模型"""
    password: str = Field(..., description="密码", min_length=5, max_length=20)


class EditUserModel(_UserFormModel):
    """编辑用户模型"""
    user_id: int = Field(..., description="用户ID")
    password: Optional[str] = Field(None, description="密码（为空则不修改）", min_length=5, max_length=20)


class ResetPasswordModel(BaseModel):
    """重置密码模型"""
    user_id: int = Field(..., description="用户ID")
    password: str = Field(..., description="新密码", min_length=5, max_length=20)

    model_config = CAMEL_CONFIG


class ChangeUserStatusModel(BaseModel):
    """修改用户状态模型"""
    user_id: int = Field(..., description="用户ID")
    status: Literal["0", "1"] = Field(..., description="帐号状态（0正常 1停用）")

    model_config = CAMEL_CONFIG


class UserProfileModel(BaseModel):
    """用户个人信息模型"""
    nick_name: str = Field(..., description="用户昵称", min_length=1, max_length=30)
    email: Optional[str] = Field(None, description="用户邮箱", max_length=50)
    phonenumber: Optional[str] = Field(None, description="手机号码", max_length=11)
    sex: Optional[Literal["0", "1", "2"]] = Field("0", description="用户性别")

    @validator('email')
    def validate_email(cls, v):
        return _check_email(v)

    @validator('phonenumber')
    def validate_phonenumber(cls, v):
        return _check_phone(v)

    model_config = CAMEL_CONFIG


class UpdatePasswordModel(BaseModel):
    """修改密码模型"""
    old_password: str = Field(..., description="旧密码")
    new_password: str = Field(..., description="新密码", min_length=5, max_length=20)

    model_config = CAMEL_CONFIG


class UserAuthRoleModel(BaseModel):
    """用户授权角色模型"""
    user_id: int = Field(..., description="用户ID")
    role_ids: List[int] = Field(default=[], description="角色ID列表")

    model_config = CAMEL_CONFIG


class UserRoleAssignModel(BaseModel):
    """用户角色分配模型"""
    role_ids: List[int] = Field(default=[], description="角色ID列表")

    model_config = CAMEL_CONFIG


class UserPostAssignModel(BaseModel):
    """用户岗位分配模型"""
    post_ids: List[int] = Field(default=[], description="岗位ID列表")

    model_config = CAMEL_CONFIG


class UserDetailModel(BaseModel):
    """用户详情：用户信息、全部角色（已分配的 flag 为 True）、全部岗位"""
    user: Optional[UserModel] = Field(None, description="用户信息")
    roles: List[RoleModel] = Field(default=[], description="角色列表")
    posts: List[Dict[str, Any]] = Field(default=[], description="岗位列表")
    role_ids: List[int] = Field(default=[], description="已分配角色ID")
    post_ids: List[int] = Field(default=[], description="已分配岗位ID")

    model_config = CAMEL_CONFIG
