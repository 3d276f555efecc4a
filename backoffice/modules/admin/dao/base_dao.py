"""
数据访问公共方法

带 del_flag 字段的实体一律经由 active_select / active_filter 构造查询，
逻辑删除过滤只在这里实现一次。
"""
from typing import Any, List, Tuple
from sqlalchemy import select, func, Select
from sqlalchemy.orm import Session

from backoffice.db.base import DEL_FLAG_EXIST, DEL_FLAG_DELETED


def is_soft_deletable(model) -> bool:
    return hasattr(model, "del_flag")


def active_filter(model):
    """未删除条件"""
    return model.del_flag == DEL_FLAG_EXIST


def active_select(model, *entities) -> Select:
    """
    构造只包含未删除数据的查询

    Args:
        model: 实体类
        entities: 需要查询的列，缺省为整个实体

    Returns:
        select语句
    """
    stmt = select(*entities) if entities else select(model)
    if is_soft_deletable(model):
        stmt = stmt.where(active_filter(model))
    return stmt


def active_count(model, *conditions) -> Select:
    """构造未删除数据的计数查询"""
    stmt = select(func.count()).select_from(model)
    if is_soft_deletable(model):
        stmt = stmt.where(active_filter(model))
    if conditions:
        stmt = stmt.where(*conditions)
    return stmt


def paginate(db: Session, stmt: Select, page_num: int, page_size: int) -> Tuple[List[Any], int]:
    """
    分页执行查询

    Args:
        db: 数据库会话
        stmt: 已包含过滤与排序的查询
        page_num: 页码（从1开始）
        page_size: 每页条数

    Returns:
        (当前页数据, 总条数)
    """
    total = db.execute(
        select(func.count()).select_from(stmt.order_by(None).subquery())
    ).scalar() or 0
    rows = db.execute(
        stmt.offset((page_num - 1) * page_size).limit(page_size)
    ).scalars().all()
    return list(rows), total


def soft_delete_values() -> dict:
    return {"del_flag": DEL_FLAG_DELETED}
