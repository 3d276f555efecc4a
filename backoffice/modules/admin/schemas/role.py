"""
角色管理相关的Pydantic schemas
"""
from datetime import datetime
from typing import List, Optional, Literal
from pydantic import BaseModel, Field, validator

from backoffice.modules.admin.schemas.common import CAMEL_CONFIG, PageQueryModel

DataScope = Literal['1', '2', '3', '4', '5', '6']


class RoleModel(BaseModel):
    """
    角色表对应pydantic模型
    """
    role_id: Optional[int] = Field(default=None, description='角色ID')
    tenant_id: Optional[str] = Field(default=None, description='租户编号')
    role_name: Optional[str] = Field(default=None, description='角色名称')
    role_key: Optional[str] = Field(default=None, description='角色权限字符串')
    role_sort: Optional[int] = Field(default=0, description='显示顺序')
    data_scope: Optional[str] = Field(default='1', description='数据范围（1全部 2自定义 3本部门 4本部门及以下 5仅本人 6部门及以下或本人）')
    menu_check_strictly: Optional[bool] = Field(default=True, description='菜单树选择项是否关联显示')
    dept_check_strictly: Optional[bool] = Field(default=True, description='部门树选择项是否关联显示')
    super_admin: bool = Field(default=False, description='是否超级管理员')
    status: Optional[str] = Field(default='0', description='角色状态（0正常 1停用）')
    del_flag: Optional[str] = Field(default='0', description='删除标志（0代表存在 2代表删除）')
    create_by: Optional[str] = Field(default=None, description='创建者')
    create_time: Optional[datetime] = Field(default=None, description='创建时间')
    update_by: Optional[str] = Field(default=None, description='更新者')
    update_time: Optional[datetime] = Field(default=None, description='更新时间')
    remark: Optional[str] = Field(default=None, description='备注')
    flag: bool = Field(default=False, description='前端选中标记')

    model_config = CAMEL_CONFIG


class RolePageQueryModel(PageQueryModel):
    """
    角色分页查询模型
    """
    role_name: Optional[str] = Field(default=None, description='角色名称')
    role_key: Optional[str] = Field(default=None, description='角色权限字符串')
    status: Optional[str] = Field(default=None, description='角色状态（0正常 1停用）')


class _RoleFormModel(BaseModel):
    role_name: str = Field(description='角色名称', max_length=30)
    role_key: str = Field(description='角色权限字符串', max_length=100)
    role_sort: int = Field(default=0, description='显示顺序')
    data_scope: DataScope = Field(default='2', description='数据范围')
    menu_check_strictly: bool = Field(default=True, description='菜单树选择项是否关联显示')
    dept_check_strictly: bool = Field(default=True, description='部门树选择项是否关联显示')
    status: Literal['0', '1'] = Field(default='0', description='角色状态（0正常 1停用）')
    remark: Optional[str] = Field(default=None, description='备注', max_length=500)
    menu_ids: Optional[List[int]] = Field(default=None, description='菜单权限ID列表')

    @validator('role_name')
    def validate_role_name(cls, v):
        if not v or not v.strip():
            raise ValueError('角色名称不能为空')
        return v.strip()

    @validator('role_key')
    def validate_role_key(cls, v):
        if not v or not v.strip():
            raise ValueError('角色权限字符串不能为空')
        return v.strip()

    model_config = CAMEL_CONFIG


class AddRoleModel(_RoleFormModel):
    """
    添加角色模型
    """


class EditRoleModel(_RoleFormModel):
    """
    编辑角色模型
    """
    role_id: int = Field(description='角色ID')


class ChangeRoleStatusModel(BaseModel):
    """
    修改角色状态模型
    """
    role_id: int = Field(description='角色ID')
    status: Literal['0', '1'] = Field(description='角色状态（0正常 1停用）')

    model_config = CAMEL_CONFIG


class RoleDataScopeModel(BaseModel):
    """
    角色数据权限模型
    """
    role_id: int = Field(description='角色ID')
    data_scope: DataScope = Field(description='数据范围')
    dept_check_strictly: Optional[bool] = Field(default=None, description='部门树选择项是否关联显示')

    model_config = CAMEL_CONFIG


class RoleMenuAssignModel(BaseModel):
    """
    角色菜单分配模型
    """
    menu_ids: List[int] = Field(default=[], description='菜单ID列表')

    model_config = CAMEL_CONFIG


class MenuRoleAssignModel(BaseModel):
    """
    菜单角色分配模型
    """
    role_ids: List[int] = Field(default=[], description='角色ID列表')

    model_config = CAMEL_CONFIG
