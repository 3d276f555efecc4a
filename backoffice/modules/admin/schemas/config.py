"""
参数配置、字典、通知公告相关的Pydantic schemas
"""
from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, Field, validator

from backoffice.modules.admin.schemas.common import CAMEL_CONFIG, PageQueryModel


class ConfigModel(BaseModel):
    """参数配置表对应pydantic模型"""
    config_id: Optional[int] = Field(default=None, description='参数主键')
    tenant_id: Optional[str] = Field(default=None, description='租户编号')
    config_name: Optional[str] = Field(default=None, description='参数名称')
    config_key: Optional[str] = Field(default=None, description='参数键名')
    config_value: Optional[str] = Field(default=None, description='参数键值')
    config_type: Optional[str] = Field(default='N', description='系统内置（Y是 N否）')
    create_by: Optional[str] = Field(default=None, description='创建者')
    create_time: Optional[datetime] = Field(default=None, description='创建时间')
    update_by: Optional[str] = Field(default=None, description='更新者')
    update_time: Optional[datetime] = Field(default=None, description='更新时间')
    remark: Optional[str] = Field(default=None, description='备注')

    model_config = CAMEL_CONFIG


class ConfigPageQueryModel(PageQueryModel):
    """参数配置分页查询模型"""
    config_name: Optional[str] = Field(default=None, description='参数名称')
    config_key: Optional[str] = Field(default=None, description='参数键名')
    config_type: Optional[str] = Field(default=None, description='系统内置（Y是 N否）')


class AddConfigModel(BaseModel):
    """新增参数配置模型"""
    config_name: str = Field(..., min_length=1, max_length=100, description='参数名称')
    config_key: str = Field(..., min_length=1, max_length=100, description='参数键名')
    config_value: str = Field(..., max_length=500, description='参数键值')
    config_type: Literal['Y', 'N'] = Field(default='N', description='系统内置（Y是 N否）')
    remark: Optional[str] = Field(default=None, max_length=500, description='备注')

    @validator('config_key')
    def validate_config_key(cls, v):
        if not v.strip():
            raise ValueError('参数键名不能为空')
        return v.strip()

    model_config = CAMEL_CONFIG


class EditConfigModel(AddConfigModel):
    """编辑参数配置模型"""
    config_id: int = Field(..., description='参数主键')


class DictTypeModel(BaseModel):
    """字典类型表对应pydantic模型"""
    dict_id: Optional[int] = Field(default=None, description='字典主键')
    tenant_id: Optional[str] = Field(default=None, description='租户编号')
    dict_name: Optional[str] = Field(default=None, description='字典名称')
    dict_type: Optional[str] = Field(default=None, description='字典类型')
    create_by: Optional[str] = Field(default=None, description='创建者')
    create_time: Optional[datetime] = Field(default=None, description='创建时间')
    update_by: Optional[str] = Field(default=None, description='更新者')
    update_time: Optional[datetime] = Field(default=None, description='更新时间')
    remark: Optional[str] = Field(default=None, description='备注')

    model_config = CAMEL_CONFIG


class DictTypePageQueryModel(PageQueryModel):
    """字典类型分页查询模型"""
    dict_name: Optional[str] = Field(default=None, description='字典名称')
    dict_type: Optional[str] = Field(default=None, description='字典类型')


class AddDictTypeModel(BaseModel):
    """新增字典类型模型"""
    dict_name: str = Field(..., min_length=1, max_length=100, description='字典名称')
    dict_type: str = Field(..., min_length=1, max_length=100, pattern=r'^[a-z][a-z0-9_]*$', description='字典类型')
    remark: Optional[str] = Field(default=None, max_length=500, description='备注')

    model_config = CAMEL_CONFIG


class EditDictTypeModel(AddDictTypeModel):
    """编辑字典类型模型"""
    dict_id: int = Field(..., description='字典主键')


class DictDataModel(BaseModel):
    """字典数据表对应pydantic模型"""
    dict_code: Optional[int] = Field(default=None, description='字典编码')
    tenant_id: Optional[str] = Field(default=None, description='租户编号')
    dict_sort: Optional[int] = Field(default=0, description='字典排序')
    dict_label: Optional[str] = Field(default=None, description='字典标签')
    dict_value: Optional[str] = Field(default=None, description='字典键值')
    dict_type: Optional[str] = Field(default=None, description='字典类型')
    css_class: Optional[str] = Field(default=None, description='样式属性')
    list_class: Optional[str] = Field(default=None, description='表格回显样式')
    is_default: Optional[str] = Field(default='N', description='是否默认（Y是 N否）')
    create_by: Optional[str] = Field(default=None, description='创建者')
    create_time: Optional[datetime] = Field(default=None, description='创建时间')
    update_by: Optional[str] = Field(default=None, description='更新者')
    update_time: Optional[datetime] = Field(default=None, description='更新时间')
    remark: Optional[str] = Field(default=None, description='备注')

    model_config = CAMEL_CONFIG


class DictDataPageQueryModel(PageQueryModel):
    """字典数据分页查询模型"""
    dict_type: Optional[str] = Field(default=None, description='字典类型')
    dict_label: Optional[str] = Field(default=None, description='字典标签')


class AddDictDataModel(BaseModel):
    """新增字典数据模型"""
    dict_sort: int = Field(default=0, description='字典排序')
    dict_label: str = Field(..., min_length=1, max_length=100, description='字典标签')
    dict_value: str = Field(..., min_length=1, max_length=100, description='字典键值')
    dict_type: str = Field(..., min_length=1, max_length=100, description='字典类型')
    css_class: Optional[str] = Field(default=None, max_length=100, description='样式属性')
    list_class: Optional[str] = Field(default=None, max_length=100, description='表格回显样式')
    is_default: Literal['Y', 'N'] = Field(default='N', description='是否默认（Y是 N否）')
    remark: Optional[str] = Field(default=None, max_length=500, description='备注')

    model_config = CAMEL_CONFIG


class EditDictDataModel(AddDictDataModel):
    """编辑字典数据模型"""
    dict_code: int = Field(..., description='字典编码')


class NoticeModel(BaseModel):
    """通知公告表对应pydantic模型"""
    notice_id: Optional[int] = Field(default=None, description='公告ID')
    tenant_id: Optional[str] = Field(default=None, description='租户编号')
    notice_title: Optional[str] = Field(default=None, description='公告标题')
    notice_type: Optional[str] = Field(default=None, description='公告类型（1通知 2公告）')
    notice_content: Optional[str] = Field(default=None, description='公告内容')
    status: Optional[str] = Field(default='0', description='公告状态（0正常 1关闭）')
    create_by: Optional[str] = Field(default=None, description='创建者')
    create_time: Optional[datetime] = Field(default=None, description='创建时间')
    update_by: Optional[str] = Field(default=None, description='更新者')
    update_time: Optional[datetime] = Field(default=None, description='更新时间')
    remark: Optional[str] = Field(default=None, description='备注')

    model_config = CAMEL_CONFIG


class NoticePageQueryModel(PageQueryModel):
    """通知公告分页查询模型"""
    notice_title: Optional[str] = Field(default=None, description='公告标题')
    notice_type: Optional[str] = Field(default=None, description='公告类型')
    create_by: Optional[str] = Field(default=None, description='创建者')


class AddNoticeModel(BaseModel):
    """新增通知公告模型"""
    notice_title: str = Field(..., min_length=1, max_length=50, description='公告标题')
    notice_type: Literal['1', '2'] = Field(..., description='公告类型（1通知 2公告）')
    notice_content: Optional[str] = Field(default=None, description='公告内容')
    status: Literal['0', '1'] = Field(default='0', description='公告状态（0正常 1关闭）')
    remark: Optional[str] = Field(default=None, max_length=255, description='备注')

    model_config = CAMEL_CONFIG


class EditNoticeModel(AddNoticeModel):
    """编辑通知公告模型"""
    notice_id: int = Field(..., description='公告ID')
