"""
审计日志数据访问对象
"""
from typing import List, Dict, Any, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import select, and_, delete, desc, Select

from backoffice.modules.admin.dao.base_dao import paginate
from backoffice.modules.admin.models.log import SysLoginLog, SysOperLog
from backoffice.modules.admin.schemas.log import LoginLogPageQueryModel, OperLogPageQueryModel


class LoginLogDao:
    """登录日志数据访问对象"""

    @classmethod
    def build_query(cls, query_params: LoginLogPageQueryModel) -> Select:
        stmt = select(SysLoginLog)
        conditions = []
        if query_params.ipaddr:
            conditions.append(SysLoginLog.ipaddr.like(f'%{query_params.ipaddr}%'))
        if query_params.user_name:
            conditions.append(SysLoginLog.user_name.like(f'%{query_params.user_name}%'))
        if query_params.status is not None:
            conditions.append(SysLoginLog.status == query_params.status)
        if query_params.begin_time:
            conditions.append(SysLoginLog.login_time >= query_params.begin_time)
        if query_params.end_time:
            conditions.append(SysLoginLog.login_time <= query_params.end_time)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        return stmt.order_by(desc(SysLoginLog.login_time), desc(SysLoginLog.info_id))

    @classmethod
    def get_page(cls, db: Session, query_params: LoginLogPageQueryModel) -> Tuple[List[SysLoginLog], int]:
        return paginate(db, cls.build_query(query_params), query_params.page_num, query_params.page_size)

    @classmethod
    def get_list(cls, db: Session, query_params: LoginLogPageQueryModel) -> List[SysLoginLog]:
        return list(db.execute(cls.build_query(query_params)).scalars().all())

    @classmethod
    def add(cls, db: Session, data: Dict[str, Any]) -> SysLoginLog:
        log = SysLoginLog(**data)
        db.add(log)
        db.flush()
        return log

    @classmethod
    def delete_by_ids(cls, db: Session, info_ids: List[int]) -> int:
        return db.execute(delete(SysLoginLog).where(SysLoginLog.info_id.in_(info_ids))).rowcount

    @classmethod
    def clean(cls, db: Session) -> int:
        return db.execute(delete(SysLoginLog)).rowcount


class OperLogDao:
    """操作日志数据访问对象"""

    @classmethod
    def build_query(cls, query_params: OperLogPageQueryModel) -> Select:
        stmt = select(SysOperLog)
        conditions = []
        if query_params.title:
            conditions.append(SysOperLog.title.like(f'%{query_params.title}%'))
        if query_params.oper_name:
            conditions.append(SysOperLog.oper_name.like(f'%{query_params.oper_name}%'))
        if query_params.business_type is not None:
            conditions.append(SysOperLog.business_type == query_params.business_type)
        if query_params.status is not None:
            conditions.append(SysOperLog.status == query_params.status)
        if query_params.begin_time:
            conditions.append(SysOperLog.oper_time >= query_params.begin_time)
        if query_params.end_time:
            conditions.append(SysOperLog.oper_time <= query_params.end_time)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        return stmt.order_by(desc(SysOperLog.oper_time), desc(SysOperLog.oper_id))

    @classmethod
    def get_page(cls, db: Session, query_params: OperLogPageQueryModel) -> Tuple[List[SysOperLog], int]:
        return paginate(db, cls.build_query(query_params), query_params.page_num, query_params.page_size)

    @classmethod
    def get_list(cls, db: Session, query_params: OperLogPageQueryModel) -> List[SysOperLog]:
        return list(db.execute(cls.build_query(query_params)).scalars().all())

    @classmethod
    def add(cls, db: Session, data: Dict[str, Any]) -> SysOperLog:
        log = SysOperLog(**data)
        db.add(log)
        db.flush()
        return log

    @classmethod
    def delete_by_ids(cls, db: Session, oper_ids: List[int]) -> int:
        return db.execute(delete(SysOperLog).where(SysOperLog.oper_id.in_(oper_ids))).rowcount

    @classmethod
    def clean(cls, db: Session) -> int:
        return db.execute(delete(SysOperLog)).rowcount
