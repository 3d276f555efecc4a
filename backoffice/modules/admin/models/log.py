"""
审计日志数据库模型
"""
from sqlalchemy import Column, Integer, String, DateTime, BigInteger
from sqlalchemy.sql import func

from backoffice.db.base import Base, IdType


class SysLoginLog(Base):
    """系统访问记录"""
    __tablename__ = "sys_logininfor"

    info_id = Column(IdType, primary_key=True, autoincrement=True, comment="访问ID")
    tenant_id = Column(String(20), default="000000", comment="租户编号")
    user_name = Column(String(50), default="", comment="登录账号")
    status = Column(Integer, default=0, comment="登录状态（0成功 1失败）")
    ipaddr = Column(String(128), default="", comment="登录IP地址")
    login_location = Column(String(255), default="", comment="登录地点")
    browser = Column(String(50), default="", comment="浏览器类型")
    os = Column(String(50), default="", comment="操作系统")
    msg = Column(String(4000), default="", comment="提示消息")
    login_time = Column(DateTime, default=func.now(), comment="登录时间")
    client_key = Column(String(20), default="", comment="客户端标识")
    device_type = Column(String(20), default="", comment="设备类型")


class SysOperLog(Base):
    """操作日志记录"""
    __tablename__ = "sys_oper_log"

    oper_id = Column(IdType, primary_key=True, autoincrement=True, comment="日志主键")
    tenant_id = Column(String(20), default="000000", comment="租户编号")
    title = Column(String(50), default="", comment="模块标题")
    business_type = Column(Integer, default=0, comment="业务类型（0其它 1新增 2修改 3删除）")
    method = Column(String(100), default="", comment="方法名称")
    request_method = Column(String(10), default="", comment="请求方式")
    operator_type = Column(Integer, default=0, comment="操作类别（0其它 1后台用户 2手机端用户）")
    oper_name = Column(String(50), default="", comment="操作人员")
    dept_name = Column(String(50), default="", comment="部门名称")
    oper_url = Column(String(255), default="", comment="请求URL")
    oper_ip = Column(String(128), default="", comment="主机地址")
    oper_location = Column(String(255), default="", comment="操作地点")
    oper_param = Column(String(4000), default="", comment="请求参数")
    json_result = Column(String(4000), default="", comment="返回参数")
    status = Column(Integer, default=0, comment="操作状态（0正常 1异常）")
    error_msg = Column(String(4000), default="", comment="错误消息")
    oper_time = Column(DateTime, default=func.now(), comment="操作时间")
    cost_time = Column(BigInteger, default=0, comment="消耗时间（毫秒）")
