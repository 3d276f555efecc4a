"""
岗位管理相关的Pydantic schemas
"""
from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, Field

from backoffice.modules.admin.schemas.common import CAMEL_CONFIG, PageQueryModel


class PostModel(BaseModel):
    """
    岗位表对应pydantic模型
    """
    post_id: Optional[int] = Field(default=None, description='岗位ID')
    tenant_id: Optional[str] = Field(default=None, description='租户编号')
    dept_id: Optional[int] = Field(default=None, description='部门ID')
    post_code: Optional[str] = Field(default=None, description='岗位编码')
    post_category: Optional[str] = Field(default=None, description='岗位类别编码')
    post_name: Optional[str] = Field(default=None, description='岗位名称')
    post_sort: Optional[int] = Field(default=0, description='显示顺序')
    status: Optional[str] = Field(default='0', description='状态（0正常 1停用）')
    create_by: Optional[str] = Field(default=None, description='创建者')
    create_time: Optional[datetime] = Field(default=None, description='创建时间')
    update_by: Optional[str] = Field(default=None, description='更新者')
    update_time: Optional[datetime] = Field(default=None, description='更新时间')
    remark: Optional[str] = Field(default=None, description='备注')

    model_config = CAMEL_CONFIG


class PostPageQueryModel(PageQueryModel):
    """
    岗位分页查询模型
    """
    post_code: Optional[str] = Field(default=None, description='岗位编码')
    post_name: Optional[str] = Field(default=None, description='岗位名称')
    post_category: Optional[str] = Field(default=None, description='岗位类别编码')
    dept_id: Optional[int] = Field(default=None, description='部门ID')
    status: Optional[str] = Field(default=None, description='状态（0正常 1停用）')


class AddPostModel(BaseModel):
    """
    新增岗位模型
    """
    dept_id: Optional[int] = Field(default=None, description='部门ID')
    post_code: str = Field(..., min_length=1, max_length=64, description='岗位编码')
    post_category: Optional[str] = Field(default=None, max_length=100, description='岗位类别编码')
    post_name: str = Field(..., min_length=1, max_length=50, description='岗位名称')
    post_sort: int = Field(default=0, description='显示顺序')
    status: Literal['0', '1'] = Field(default='0', description='状态（0正常 1停用）')
    remark: Optional[str] = Field(default=None, max_length=500, description='备注')

    model_config = CAMEL_CONFIG


class EditPostModel(AddPostModel):
    """
    编辑岗位模型
    """
    post_id: int = Field(..., description='岗位ID')
