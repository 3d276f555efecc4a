"""
登录日志与操作日志相关的Pydantic schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from backoffice.modules.admin.schemas.common import CAMEL_CONFIG, PageQueryModel


class LoginLogModel(BaseModel):
    """系统访问记录"""
    info_id: Optional[int] = Field(default=None, description='访问ID')
    tenant_id: Optional[str] = Field(default=None, description='租户编号')
    user_name: Optional[str] = Field(default=None, description='登录账号')
    status: Optional[int] = Field(default=0, description='登录状态（0成功 1失败）')
    ipaddr: Optional[str] = Field(default=None, description='登录IP地址')
    login_location: Optional[str] = Field(default=None, description='登录地点')
    browser: Optional[str] = Field(default=None, description='浏览器类型')
    os: Optional[str] = Field(default=None, description='操作系统')
    msg: Optional[str] = Field(default=None, description='提示消息')
    login_time: Optional[datetime] = Field(default=None, description='登录时间')
    client_key: Optional[str] = Field(default=None, description='客户端标识')
    device_type: Optional[str] = Field(default=None, description='设备类型')

    model_config = CAMEL_CONFIG


class LoginLogPageQueryModel(PageQueryModel):
    """登录日志分页查询模型"""
    ipaddr: Optional[str] = Field(default=None, description='登录IP地址')
    user_name: Optional[str] = Field(default=None, description='登录账号')
    status: Optional[int] = Field(default=None, description='登录状态（0成功 1失败）')


class OperLogModel(BaseModel):
    """操作日志记录"""
    oper_id: Optional[int] = Field(default=None, description='日志主键')
    tenant_id: Optional[str] = Field(default=None, description='租户编号')
    title: Optional[str] = Field(default=None, description='模块标题')
    business_type: Optional[int] = Field(default=0, description='业务类型')
    method: Optional[str] = Field(default=None, description='方法名称')
    request_method: Optional[str] = Field(default=None, description='请求方式')
    operator_type: Optional[int] = Field(default=0, description='操作类别')
    oper_name: Optional[str] = Field(default=None, description='操作人员')
    dept_name: Optional[str] = Field(default=None, description='部门名称')
    oper_url: Optional[str] = Field(default=None, description='请求URL')
    oper_ip: Optional[str] = Field(default=None, description='主机地址')
    oper_location: Optional[str] = Field(default=None, description='操作地点')
    oper_param: Optional[str] = Field(default=None, description='请求参数')
    json_result: Optional[str] = Field(default=None, description='返回参数')
    status: Optional[int] = Field(default=0, description='操作状态（0正常 1异常）')
    error_msg: Optional[str] = Field(default=None, description='错误消息')
    oper_time: Optional[datetime] = Field(default=None, description='操作时间')
    cost_time: Optional[int] = Field(default=0, description='消耗时间（毫秒）')

    model_config = CAMEL_CONFIG


class OperLogPageQueryModel(PageQueryModel):
    """操作日志分页查询模型"""
    title: Optional[str] = Field(default=None, description='模块标题')
    oper_name: Optional[str] = Field(default=None, description='操作人员')
    business_type: Optional[int] = Field(default=None, description='业务类型')
    status: Optional[int] = Field(default=None, description='操作状态')
