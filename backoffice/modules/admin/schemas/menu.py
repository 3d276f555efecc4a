"""
菜单管理相关的Pydantic schemas
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Literal
from pydantic import BaseModel, Field, validator

from backoffice.modules.admin.schemas.common import CAMEL_CONFIG, TreeOptionModel

_TRUE_VALUES = {'1', 'true', 'yes', 'y', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'n', 'off', ''}


def normalize_flag(value: Any, default: str) -> str:
    """
    将前端传入的布尔类取值统一为 '0' / '1'

    支持 bool、0/1、'0'/'1'、'true'/'false' 等写法，None 取默认值
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return '1' if value else '0'
    if isinstance(value, (int, float)):
        return '1' if int(value) else '0'
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return '1'
    if text in _FALSE_VALUES:
        return '0'
    raise ValueError(f'无法识别的取值: {value}')


class MenuModel(BaseModel):
    """
    菜单表对应pydantic模型
    """
    menu_id: Optional[int] = Field(default=None, description='菜单ID')
    menu_name: Optional[str] = Field(default=None, description='菜单名称')
    parent_id: Optional[int] = Field(default=0, description='父菜单ID')
    order_num: Optional[int] = Field(default=0, description='显示顺序')
    path: Optional[str] = Field(default='', description='路由地址')
    component: Optional[str] = Field(default=None, description='组件路径')
    query_param: Optional[str] = Field(default=None, description='路由参数')
    is_frame: Optional[int] = Field(default=1, description='是否为外链（0是 1否）')
    is_cache: Optional[int] = Field(default=0, description='是否缓存（0缓存 1不缓存）')
    menu_type: Optional[str] = Field(default='', description='菜单类型（M目录 C菜单 F按钮）')
    visible: Optional[str] = Field(default='0', description='显示状态（0显示 1隐藏）')
    status: Optional[str] = Field(default='0', description='菜单状态（0正常 1停用）')
    perms: Optional[str] = Field(default=None, description='权限标识')
    icon: Optional[str] = Field(default='#', description='菜单图标')
    create_by: Optional[str] = Field(default=None, description='创建者')
    create_time: Optional[datetime] = Field(default=None, description='创建时间')
    update_by: Optional[str] = Field(default=None, description='更新者')
    update_time: Optional[datetime] = Field(default=None, description='更新时间')
    remark: Optional[str] = Field(default='', description='备注')
    children: Optional[List['MenuModel']] = Field(default=None, description='子菜单列表')

    model_config = CAMEL_CONFIG


class MenuQueryModel(BaseModel):
    """
    菜单查询模型
    """
    menu_name: Optional[str] = Field(default=None, description='菜单名称')
    visible: Optional[str] = Field(default=None, description='显示状态（0显示 1隐藏）')
    status: Optional[str] = Field(default=None, description='菜单状态（0正常 1停用）')

    model_config = CAMEL_CONFIG


class _MenuFormModel(BaseModel):
    parent_id: int = Field(default=0, description='父菜单ID')
    menu_name: str = Field(description='菜单名称', max_length=50)
    order_num: int = Field(default=0, description='显示顺序')
    path: Optional[str] = Field(default='', description='路由地址', max_length=200)
    component: Optional[str] = Field(default=None, description='组件路径', max_length=255)
    query_param: Optional[str] = Field(default=None, description='路由参数', max_length=255)
    is_frame: int = Field(default=1, description='是否为外链（0是 1否）')
    is_cache: int = Field(default=0, description='是否缓存（0缓存 1不缓存）')
    menu_type: Literal['M', 'C', 'F'] = Field(description='菜单类型（M目录 C菜单 F按钮）')
    visible: str = Field(default='0', description='显示状态（0显示 1隐藏）')
    status: str = Field(default='0', description='菜单状态（0正常 1停用）')
    perms: Optional[str] = Field(default=None, description='权限标识', max_length=100)
    icon: Optional[str] = Field(default='#', description='菜单图标', max_length=100)
    remark: Optional[str] = Field(default='', description='备注', max_length=500)

    @validator('menu_name')
    def validate_menu_name(cls, v):
        if not v or not v.strip():
            raise ValueError('菜单名称不能为空')
        return v.strip()

    @validator('is_frame', pre=True)
    def normalize_is_frame(cls, v):
        return int(normalize_flag(v, '1'))

    @validator('is_cache', pre=True)
    def normalize_is_cache(cls, v):
        return int(normalize_flag(v, '0'))

    @validator('visible', 'status', pre=True)
    def normalize_str_flag(cls, v):
        return normalize_flag(v, '0')

    @validator('perms')
    def validate_perms(cls, v):
        if not v or not v.strip():
            return None
        return ','.join(token.strip() for token in v.split(',') if token.strip())

    model_config = CAMEL_CONFIG


class AddMenuModel(_MenuFormModel):
    """
    添加菜单模型
    """


class EditMenuModel(_MenuFormModel):
    """
    编辑菜单模型
    """
    menu_id: int = Field(description='菜单ID')


class RoleMenuTreeModel(BaseModel):
    """角色菜单树：全部菜单与角色已选中的菜单ID"""
    menus: List[TreeOptionModel] = Field(default=[], description='菜单树')
    checked_keys: List[int] = Field(default=[], description='已选中的菜单ID')

    model_config = CAMEL_CONFIG


class RouterMetaModel(BaseModel):
    """路由元信息"""
    title: str = Field(description='菜单名称')
    icon: Optional[str] = Field(default=None, description='图标')
    no_cache: bool = Field(default=False, description='是否不缓存')
    link: Optional[str] = Field(default=None, description='外链地址')
    active_menu: Optional[str] = Field(default=None, description='高亮菜单')

    model_config = CAMEL_CONFIG


class RouterModel(BaseModel):
    """前端路由描述"""
    name: str = Field(description='路由名称')
    path: str = Field(description='路由地址')
    hidden: bool = Field(default=False, description='是否隐藏')
    component: str = Field(description='组件')
    query: Optional[str] = Field(default=None, description='路由参数')
    redirect: Optional[str] = Field(default=None, description='重定向')
    always_show: Optional[bool] = Field(default=None, description='是否总是显示')
    meta: RouterMetaModel = Field(description='元信息')
    children: Optional[List['RouterModel']] = Field(default=None, description='子路由')

    model_config = CAMEL_CONFIG

    def to_route(self) -> Dict[str, Any]:
        """输出给前端的字典，省略未设置的可选字段"""
        route = self.model_dump(by_alias=True, exclude_none=True)
        route['meta'] = self.meta.model_dump(by_alias=True)
        if self.children is not None:
            route['children'] = [child.to_route() for child in self.children]
        return route


class MergeRoutersModel(BaseModel):
    """前端静态路由表，与当前用户的动态路由合并"""
    static_routes: List[Dict[str, Any]] = Field(default_factory=list, description='静态路由表')

    model_config = CAMEL_CONFIG


# 递归解析子菜单
MenuModel.model_rebuild()
RouterModel.model_rebuild()
