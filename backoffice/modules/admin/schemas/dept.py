"""
部门管理相关的Pydantic schemas
"""
import re
from datetime import datetime
from typing import List, Optional, Literal
from pydantic import BaseModel, Field, validator

from backoffice.modules.admin.schemas.common import CAMEL_CONFIG

PHONE_PATTERN = r'^1[3-9]\d{9}$|^(\d{3,4}-?)?\d{7,8}$|^400-\d{3}-\d{4}$'
EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


class DeptModel(BaseModel):
    """
    部门表对应pydantic模型
    """
    dept_id: Optional[int] = Field(default=None, description='部门ID')
    tenant_id: Optional[str] = Field(default=None, description='租户编号')
    parent_id: Optional[int] = Field(default=0, description='父部门ID')
    ancestors: Optional[str] = Field(default='', description='祖级列表')
    dept_name: Optional[str] = Field(default=None, description='部门名称')
    dept_category: Optional[str] = Field(default=None, description='部门类别编码')
    order_num: Optional[int] = Field(default=0, description='显示顺序')
    leader: Optional[str] = Field(default=None, description='负责人')
    phone: Optional[str] = Field(default=None, description='联系电话')
    email: Optional[str] = Field(default=None, description='邮箱')
    status: Optional[str] = Field(default='0', description='部门状态（0正常 1停用）')
    del_flag: Optional[str] = Field(default='0', description='删除标志（0代表存在 2代表删除）')
    create_by: Optional[str] = Field(default=None, description='创建者')
    create_time: Optional[datetime] = Field(default=None, description='创建时间')
    update_by: Optional[str] = Field(default=None, description='更新者')
    update_time: Optional[datetime] = Field(default=None, description='更新时间')
    children: Optional[List['DeptModel']] = Field(default=None, description='子部门列表')

    model_config = CAMEL_CONFIG


class DeptQueryModel(BaseModel):
    """
    部门查询模型
    """
    dept_name: Optional[str] = Field(default=None, description='部门名称')
    dept_category: Optional[str] = Field(default=None, description='部门类别编码')
    status: Optional[str] = Field(default=None, description='部门状态（0正常 1停用）')

    model_config = CAMEL_CONFIG


class _DeptFormModel(BaseModel):
    parent_id: int = Field(default=0, description='父部门ID')
    dept_name: str = Field(description='部门名称', max_length=30)
    dept_category: Optional[str] = Field(default=None, description='部门类别编码', max_length=100)
    order_num: int = Field(default=0, description='显示顺序')
    leader: Optional[str] = Field(default=None, description='负责人', max_length=20)
    phone: Optional[str] = Field(default=None, description='联系电话', max_length=20)
    email: Optional[str] = Field(default=None, description='邮箱', max_length=50)
    status: Literal['0', '1'] = Field(default='0', description='部门状态（0正常 1停用）')

    @validator('dept_name')
    def validate_dept_name(cls, v):
        if not v or not v.strip():
            raise ValueError('部门名称不能为空')
        return v.strip()

    @validator('phone')
    def validate_phone(cls, v):
        if v and v.strip():
            if not re.match(PHONE_PATTERN, v.strip()):
                raise ValueError('手机号格式不正确')
        return v.strip() if v else None

    @validator('email')
    def validate_email(cls, v):
        if v and v.strip():
            if not re.match(EMAIL_PATTERN, v.strip()):
                raise ValueError('邮箱格式不正确')
        return v.strip() if v else None

    model_config = CAMEL_CONFIG


class AddDeptModel(_DeptFormModel):
    """
    添加部门模型
    """


class EditDeptModel(_DeptFormModel):
    """
    编辑部门模型
    """
    dept_id: int = Field(description='部门ID')


# 递归解析子部门
DeptModel.model_rebuild()
