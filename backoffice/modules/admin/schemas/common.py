"""
通用的分页和响应模型
"""
from datetime import datetime
from typing import Generic, List, Optional, TypeVar, Any
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# 统一的模型配置：驼峰别名、允许字段名赋值、支持ORM对象
CAMEL_CONFIG = {
    "populate_by_name": True,
    "alias_generator": to_camel,
    "from_attributes": True
}


class PageQueryModel(BaseModel):
    """
    分页查询模型
    """
    page_num: int = Field(default=1, ge=1, description="当前页码")
    page_size: int = Field(default=10, ge=1, le=1000, description="每页显示条数")
    begin_time: Optional[datetime] = Field(default=None, description="开始时间")
    end_time: Optional[datetime] = Field(default=None, description="结束时间")

    model_config = CAMEL_CONFIG

    @property
    def offset(self) -> int:
        return (self.page_num - 1) * self.page_size


class CommonResponse(BaseModel):
    """通用响应模型"""
    code: int = Field(200, description="响应代码")
    result: bool = Field(True, description="是否成功")
    data: Optional[Any] = Field(None, description="响应数据")
    message: str = Field("操作成功", description="响应消息")


class PageResponseModel(BaseModel, Generic[T]):
    """
    分页响应模型
    """
    code: int = Field(200, description="响应代码")
    result: bool = Field(True, description="是否成功")
    rows: List[T] = Field(default=[], description="数据列表")
    total: int = Field(default=0, description="总条数")
    message: str = Field("查询成功", description="响应消息")


class IdsModel(BaseModel):
    """批量ID模型"""
    ids: List[int] = Field(default=[], description="ID列表")

    model_config = CAMEL_CONFIG


class StatusModel(BaseModel):
    """状态修改模型"""
    status: str = Field(pattern=r'^[01]$', description="状态（0正常 1停用）")

    model_config = CAMEL_CONFIG


class TreeOptionModel(BaseModel):
    """树形选择项"""
    id: int = Field(description="节点ID")
    label: str = Field(description="节点名称")
    parent_id: int = Field(default=0, description="父节点ID")
    weight: int = Field(default=0, description="排序")
    disabled: bool = Field(default=False, description="是否禁用")
    children: Optional[List['TreeOptionModel']] = Field(default=None, description="子节点")

    model_config = CAMEL_CONFIG


TreeOptionModel.model_rebuild()
