"""
系统监控控制器：操作日志与登录日志
"""
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backoffice.core.permission_dependencies import require_permission
from backoffice.db.session import get_db
from backoffice.modules.admin.schemas.log import LoginLogPageQueryModel, OperLogPageQueryModel
from backoffice.modules.admin.services.log_service import LoginLogService, OperLogService
from backoffice.modules.admin.utils.auth_util import AuthContext
from backoffice.modules.admin.utils.common_util import parse_ids
from backoffice.modules.admin.utils.excel_util import ExcelUtil
from backoffice.modules.admin.utils.response_util import ResponseUtil

logger = logging.getLogger(__name__)

operlog_router = APIRouter(prefix="/monitor/operlog", tags=["操作日志"])
logininfor_router = APIRouter(prefix="/monitor/logininfor", tags=["登录日志"])

OPER_LOG_EXPORT_COLUMNS = {
    'oper_id': '操作序号',
    'title': '操作模块',
    'business_type': '业务类型',
    'method': '请求方法',
    'request_method': '请求方式',
    'oper_name': '操作人员',
    'oper_url': '请求地址',
    'oper_ip': '操作地址',
    'oper_location': '操作地点',
    'oper_param': '请求参数',
    'json_result': '返回参数',
    'status': '状态',
    'error_msg': '错误消息',
    'oper_time': '操作时间',
    'cost_time': '消耗时间（毫秒）',
}

LOGIN_LOG_EXPORT_COLUMNS = {
    'info_id': '序号',
    'user_name': '用户账号',
    'status': '登录状态',
    'ipaddr': '登录地址',
    'login_location': '登录地点',
    'browser': '浏览器',
    'os': '操作系统',
    'msg': '提示消息',
    'login_time': '访问时间',
}


# ===========================================
# 操作日志
# ===========================================

@operlog_router.get("/list", summary="获取操作日志分页列表",
                    dependencies=[Depends(require_permission("monitor:operlog:list"))])
def get_oper_log_list(
    page_num: int = Query(1, alias="pageNum", ge=1, description="页码"),
    page_size: int = Query(10, alias="pageSize", ge=1, le=1000, description="每页大小"),
    title: Optional[str] = Query(None, description="模块标题"),
    oper_name: Optional[str] = Query(None, alias="operName", description="操作人员"),
    business_type: Optional[int] = Query(None, alias="businessType", description="业务类型"),
    status: Optional[int] = Query(None, description="操作状态"),
    begin_time: Optional[datetime] = Query(None, alias="beginTime", description="开始时间"),
    end_time: Optional[datetime] = Query(None, alias="endTime", description="结束时间"),
    db: Session = Depends(get_db)
):
    query_params = OperLogPageQueryModel(
        page_num=page_num,
        page_size=page_size,
        title=title,
        oper_name=oper_name,
        business_type=business_type,
        status=status,
        begin_time=begin_time,
        end_time=end_time
    )
    rows, total = OperLogService.get_oper_log_list_services(db, query_params)
    return ResponseUtil.page(rows, total)


@operlog_router.post("/export", summary="导出操作日志")
def export_oper_logs(
    query_params: Optional[OperLogPageQueryModel] = None,
    auth: AuthContext = Depends(require_permission("monitor:operlog:export")),
    db: Session = Depends(get_db)
):
    logs = OperLogService.get_oper_log_export_services(db, query_params or OperLogPageQueryModel())
    rows = [log.model_dump() for log in logs]
    return ExcelUtil.export_response(rows, OPER_LOG_EXPORT_COLUMNS, "operlog", sheet_name="操作日志")


@operlog_router.delete("/clean", summary="清空操作日志")
def clean_oper_logs(
    auth: AuthContext = Depends(require_permission("monitor:operlog:remove")),
    db: Session = Depends(get_db)
):
    count = OperLogService.clean_oper_log_services(db)
    return ResponseUtil.success(data=count, message="清空成功")


@operlog_router.delete("/{oper_ids}", summary="删除操作日志")
def delete_oper_logs(
    oper_ids: str,
    auth: AuthContext = Depends(require_permission("monitor:operlog:remove")),
    db: Session = Depends(get_db)
):
    count = OperLogService.delete_oper_log_services(db, parse_ids(oper_ids))
    return ResponseUtil.success(data=count, message="删除成功")


# ===========================================
# 登录日志
# ===========================================

@logininfor_router.get("/list", summary="获取登录日志分页列表",
                       dependencies=[Depends(require_permission("monitor:logininfor:list"))])
def get_login_log_list(
    page_num: int = Query(1, alias="pageNum", ge=1, description="页码"),
    page_size: int = Query(10, alias="pageSize", ge=1, le=1000, description="每页大小"),
    ipaddr: Optional[str] = Query(None, description="登录IP地址"),
    user_name: Optional[str] = Query(None, alias="userName", description="登录账号"),
    status: Optional[int] = Query(None, description="登录状态"),
    begin_time: Optional[datetime] = Query(None, alias="beginTime", description="开始时间"),
    end_time: Optional[datetime] = Query(None, alias="endTime", description="结束时间"),
    db: Session = Depends(get_db)
):
    query_params = LoginLogPageQueryModel(
        page_num=page_num,
        page_size=page_size,
        ipaddr=ipaddr,
        user_name=user_name,
        status=status,
        begin_time=begin_time,
        end_time=end_time
    )
    rows, total = LoginLogService.get_login_log_list_services(db, query_params)
    return ResponseUtil.page(rows, total)


@logininfor_router.post("/export", summary="导出登录日志")
def export_login_logs(
    query_params: Optional[LoginLogPageQueryModel] = None,
    auth: AuthContext = Depends(require_permission("monitor:logininfor:export")),
    db: Session = Depends(get_db)
):
    logs = LoginLogService.get_login_log_export_services(db, query_params or LoginLogPageQueryModel())
    rows = [log.model_dump() for log in logs]
    return ExcelUtil.export_response(rows, LOGIN_LOG_EXPORT_COLUMNS, "logininfor", sheet_name="登录日志")


@logininfor_router.get("/unlock/{user_name}", summary="解锁用户")
def unlock_user(
    user_name: str,
    auth: AuthContext = Depends(require_permission("monitor:logininfor:unlock")),
):
    """
    没有登录失败锁定记录，直接返回成功
    """
    logger.info(f"{auth.user_name} 解锁用户 {user_name}")
    return ResponseUtil.success(message="解锁成功")


@logininfor_router.delete("/clean", summary="清空登录日志")
def clean_login_logs(
    auth: AuthContext = Depends(require_permission("monitor:logininfor:remove")),
    db: Session = Depends(get_db)
):
    count = LoginLogService.clean_login_log_services(db)
    return ResponseUtil.success(data=count, message="清空成功")


@logininfor_router.delete("/{info_ids}", summary="删除登录日志")
def delete_login_logs(
    info_ids: str,
    auth: AuthContext = Depends(require_permission("monitor:logininfor:remove")),
    db: Session = Depends(get_db)
):
    count = LoginLogService.delete_login_log_services(db, parse_ids(info_ids))
    return ResponseUtil.success(data=count, message="删除成功")
