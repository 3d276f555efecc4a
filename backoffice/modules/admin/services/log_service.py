"""
审计日志服务层：登录日志与操作日志

日志写入使用独立会话，写入失败只记录到进程日志，不影响业务请求。
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from fastapi import Request
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.core.middleware import get_client_ip
from backoffice.db import session as db_session
from backoffice.modules.admin.dao.log_dao import LoginLogDao, OperLogDao
from backoffice.modules.admin.schemas.log import (
    LoginLogModel, LoginLogPageQueryModel, OperLogModel, OperLogPageQueryModel
)
from backoffice.modules.admin.utils.agent_util import parse_user_agent, get_ip_location

logger = logging.getLogger(__name__)

LOGIN_SUCCESS = 0
LOGIN_FAIL = 1


class LoginLogService:
    """
    登录日志服务
    """

    @classmethod
    def record(cls, user_name: str, status: int, msg: str, request: Optional[Request] = None,
               tenant_id: Optional[str] = None) -> None:
        """
        记录一条登录日志，任何异常都不向调用方抛出

        Args:
            user_name: 登录账号
            status: 0成功 1失败
            msg: 提示消息
            request: 当前请求，用于解析IP与User-Agent
            tenant_id: 租户编号
        """
        try:
            ip = get_client_ip(request) if request is not None else ""
            user_agent = request.headers.get("user-agent") if request is not None else None
            browser, os_name, device_type = parse_user_agent(user_agent)
            data = {
                "tenant_id": tenant_id or settings.DEFAULT_TENANT_ID,
                "user_name": user_name or "",
                "status": status,
                "ipaddr": ip,
                "login_location": get_ip_location(ip),
                "browser": browser,
                "os": os_name,
                "msg": msg,
                "login_time": datetime.now(),
                "client_key": "pc" if device_type == "pc" else "app",
                "device_type": device_type,
            }
            db = db_session.SessionLocal()
            try:
                LoginLogDao.add(db, data)
                db.commit()
            finally:
                db.close()
        except Exception:
            logger.error(f"写入登录日志失败: user={user_name}, msg={msg}", exc_info=True)

    @classmethod
    def get_login_log_list_services(cls, db: Session, query_params: LoginLogPageQueryModel) -> Tuple[List[LoginLogModel], int]:
        rows, total = LoginLogDao.get_page(db, query_params)
        return [LoginLogModel.model_validate(row) for row in rows], total

    @classmethod
    def get_login_log_export_services(cls, db: Session, query_params: LoginLogPageQueryModel) -> List[LoginLogModel]:
        return [LoginLogModel.model_validate(row) for row in LoginLogDao.get_list(db, query_params)]

    @classmethod
    def delete_login_log_services(cls, db: Session, info_ids: List[int]) -> int:
        count = LoginLogDao.delete_by_ids(db, info_ids)
        db.commit()
        return count

    @classmethod
    def clean_login_log_services(cls, db: Session) -> int:
        count = LoginLogDao.clean(db)
        db.commit()
        logger.info(f"清空登录日志 {count} 条")
        return count


class OperLogService:
    """
    操作日志服务
    """

    @classmethod
    def record(cls, data: Dict[str, Any]) -> None:
        """
        写入一条操作日志，任何异常都不向调用方抛出

        Args:
            data: 操作日志字段
        """
        try:
            data.setdefault("tenant_id", settings.DEFAULT_TENANT_ID)
            data.setdefault("oper_time", datetime.now())
            db = db_session.SessionLocal()
            try:
                OperLogDao.add(db, data)
                db.commit()
            finally:
                db.close()
        except Exception:
            logger.error(f"写入操作日志失败: {data.get('request_method')} {data.get('oper_url')}", exc_info=True)

    @classmethod
    def get_oper_log_list_services(cls, db: Session, query_params: OperLogPageQueryModel) -> Tuple[List[OperLogModel], int]:
        rows, total = OperLogDao.get_page(db, query_params)
        return [OperLogModel.model_validate(row) for row in rows], total

    @classmethod
    def get_oper_log_export_services(cls, db: Session, query_params: OperLogPageQueryModel) -> List[OperLogModel]:
        return [OperLogModel.model_validate(row) for row in OperLogDao.get_list(db, query_params)]

    @classmethod
    def delete_oper_log_services(cls, db: Session, oper_ids: List[int]) -> int:
        count = OperLogDao.delete_by_ids(db, oper_ids)
        db.commit()
        return count

    @classmethod
    def clean_oper_log_services(cls, db: Session) -> int:
        count = OperLogDao.clean(db)
        db.commit()
        logger.info(f"清空操作日志 {count} 条")
        return count
