"""
部门管理数据访问对象
"""
from typing import Optional, List, Dict, Any
from sqlalchemy import and_, asc, update
from sqlalchemy.orm import Session

from backoffice.modules.admin.dao.base_dao import active_select, active_count, soft_delete_values
from backoffice.modules.admin.models.system import SysDept, SysUser
from backoffice.modules.admin.schemas.dept import DeptQueryModel


class DeptDao:
    """部门数据访问对象"""

    @classmethod
    def get_dept_by_id(cls, db: Session, dept_id: int) -> Optional[SysDept]:
        """
        根据部门ID获取部门信息

        Args:
            db: 数据库会话
            dept_id: 部门ID

        Returns:
            部门信息对象
        """
        result = db.execute(
            active_select(SysDept).where(SysDept.dept_id == dept_id)
        )
        return result.scalar_one_or_none()

    @classmethod
    def get_depts_by_ids(cls, db: Session, dept_ids: List[int]) -> List[SysDept]:
        if not dept_ids:
            return []
        result = db.execute(
            active_select(SysDept)
            .where(SysDept.dept_id.in_(dept_ids))
            .order_by(asc(SysDept.parent_id), asc(SysDept.order_num))
        )
        return list(result.scalars().all())

    @classmethod
    def check_dept_name_exists(cls, db: Session, dept_name: str, parent_id: int, exclude_dept_id: Optional[int] = None) -> bool:
        """
        检查同级部门名称是否已存在

        Args:
            db: 数据库会话
            dept_name: 部门名称
            parent_id: 父部门ID
            exclude_dept_id: 排除的部门ID（用于编辑时检查重名）

        Returns:
            是否存在
        """
        conditions = [
            SysDept.dept_name == dept_name,
            SysDept.parent_id == parent_id,
        ]
        if exclude_dept_id:
            conditions.append(SysDept.dept_id != exclude_dept_id)

        count = db.execute(active_count(SysDept, and_(*conditions))).scalar()
        return count > 0

    @classmethod
    def get_dept_list(cls, db: Session, query_params: Optional[DeptQueryModel] = None) -> List[SysDept]:
        """
        获取部门列表

        Args:
            db: 数据库会话
            query_params: 查询参数

        Returns:
            部门列表
        """
        stmt = active_select(SysDept)

        if query_params:
            conditions = []
            if query_params.dept_name:
                conditions.append(SysDept.dept_name.like(f'%{query_params.dept_name}%'))
            if query_params.dept_category:
                conditions.append(SysDept.dept_category == query_params.dept_category)
            if query_params.status is not None:
                conditions.append(SysDept.status == query_params.status)
            if conditions:
                stmt = stmt.where(and_(*conditions))

        stmt = stmt.order_by(asc(SysDept.parent_id), asc(SysDept.order_num), asc(SysDept.dept_id))
        return list(db.execute(stmt).scalars().all())

    @classmethod
    def count_children(cls, db: Session, dept_id: int) -> int:
        """统计直接子部门数量"""
        return db.execute(active_count(SysDept, SysDept.parent_id == dept_id)).scalar()

    @classmethod
    def check_dept_has_users(cls, db: Session, dept_id: int) -> bool:
        """
        检查部门是否有用户

        Args:
            db: 数据库会话
            dept_id: 部门ID

        Returns:
            是否有用户
        """
        count = db.execute(active_count(SysUser, SysUser.dept_id == dept_id)).scalar()
        return count > 0

    @classmethod
    def add_dept(cls, db: Session, dept_data: Dict[str, Any]) -> SysDept:
        """新增部门，不提交事务"""
        new_dept = SysDept(**dept_data)
        db.add(new_dept)
        db.flush()
        return new_dept

    @classmethod
    def get_depts_for_update(cls, db: Session, dept_ids: List[int]) -> List[SysDept]:
        """
        查询部门并加行锁，重设祖级期间阻止并发修改同一子树

        Args:
            db: 数据库会话
            dept_ids: 部门ID列表

        Returns:
            部门列表
        """
        if not dept_ids:
            return []
        stmt = (
            active_select(SysDept)
            .where(SysDept.dept_id.in_(dept_ids))
            .with_for_update()
        )
        return list(db.execute(stmt).scalars().all())

    @classmethod
    def soft_delete_depts(cls, db: Session, dept_ids: List[int], update_by: Optional[str] = None) -> int:
        """批量逻辑删除，不提交事务"""
        values = soft_delete_values()
        if update_by:
            values['update_by'] = update_by
        result = db.execute(
            update(SysDept).where(SysDept.dept_id.in_(dept_ids)).values(**values)
        )
        return result.rowcount
