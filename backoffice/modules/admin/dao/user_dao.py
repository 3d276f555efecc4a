"""
用户数据访问对象
"""
from datetime import datetime
from typing import Optional, List, Dict, Any, Tuple
from sqlalchemy import select, and_, desc, delete, update, Select
from sqlalchemy.orm import Session

from backoffice.modules.admin.dao.base_dao import active_select, active_count, paginate, soft_delete_values
from backoffice.modules.admin.models.system import SysUser, SysRole, SysUserRole, SysUserPost, SysDept
from backoffice.modules.admin.schemas.user import UserPageQueryModel


class UserDao:
    """用户数据访问对象"""

    @classmethod
    def get_user_by_name(cls, db: Session, user_name: str, tenant_id: Optional[str] = None) -> Optional[SysUser]:
        """
        根据用户名获取用户（含停用用户，由调用方判断状态）

        Args:
            db: 数据库会话
            user_name: 用户名
            tenant_id: 租户编号，None 表示不限定

        Returns:
            用户信息或None
        """
        stmt = active_select(SysUser).where(SysUser.user_name == user_name)
        if tenant_id:
            stmt = stmt.where(SysUser.tenant_id == tenant_id)
        return db.execute(stmt.order_by(SysUser.user_id)).scalars().first()

    @classmethod
    def get_user_by_id(cls, db: Session, user_id: int) -> Optional[SysUser]:
        """
        根据用户ID获取用户

        Args:
            db: 数据库会话
            user_id: 用户ID

        Returns:
            用户信息或None
        """
        return db.execute(
            active_select(SysUser).where(SysUser.user_id == user_id)
        ).scalar_one_or_none()

    @classmethod
    def check_user_name_exists(cls, db: Session, user_name: str, tenant_id: str,
                               exclude_user_id: Optional[int] = None) -> bool:
        """
        检查用户名在租户内是否已存在

        Args:
            db: 数据库会话
            user_name: 用户名
            tenant_id: 租户编号
            exclude_user_id: 排除的用户ID（用于更新时检查）

        Returns:
            是否存在
        """
        conditions = [SysUser.user_name == user_name, SysUser.tenant_id == tenant_id]
        if exclude_user_id:
            conditions.append(SysUser.user_id != exclude_user_id)
        return db.execute(active_count(SysUser, *conditions)).scalar() > 0

    @classmethod
    def build_user_query(cls, query_params: UserPageQueryModel, dept_ids: Optional[List[int]] = None) -> Select:
        """
        构造用户列表查询

        Args:
            query_params: 查询参数
            dept_ids: 部门及其子部门ID，由服务层根据 dept_id 展开

        Returns:
            select语句
        """
        stmt = active_select(SysUser)
        conditions = []

        if query_params.user_name:
            conditions.append(SysUser.user_name.like(f'%{query_params.user_name}%'))
        if query_params.nick_name:
            conditions.append(SysUser.nick_name.like(f'%{query_params.nick_name}%'))
        if query_params.phonenumber:
            conditions.append(SysUser.phonenumber.like(f'%{query_params.phonenumber}%'))
        if query_params.status is not None:
            conditions.append(SysUser.status == query_params.status)
        if dept_ids is not None:
            conditions.append(SysUser.dept_id.in_(dept_ids))
        if query_params.role_id:
            conditions.append(SysUser.user_id.in_(
                select(SysUserRole.user_id).where(SysUserRole.role_id == query_params.role_id)
            ))
        if query_params.begin_time:
            conditions.append(SysUser.create_time >= query_params.begin_time)
        if query_params.end_time:
            conditions.append(SysUser.create_time <= query_params.end_time)

        if conditions:
            stmt = stmt.where(and_(*conditions))
        return stmt.order_by(desc(SysUser.create_time), desc(SysUser.user_id))

    @classmethod
    def get_user_page(cls, db: Session, query_params: UserPageQueryModel,
                      dept_ids: Optional[List[int]] = None) -> Tuple[List[SysUser], int]:
        return paginate(db, cls.build_user_query(query_params, dept_ids), query_params.page_num, query_params.page_size)

    @classmethod
    def get_user_list(cls, db: Session, query_params: UserPageQueryModel,
                      dept_ids: Optional[List[int]] = None) -> List[SysUser]:
        """不分页的用户列表，用于导出"""
        return list(db.execute(cls.build_user_query(query_params, dept_ids)).scalars().all())

    @classmethod
    def get_dept_names(cls, db: Session, dept_ids: List[int]) -> Dict[int, str]:
        """部门ID -> 部门名称"""
        if not dept_ids:
            return {}
        result = db.execute(
            active_select(SysDept, SysDept.dept_id, SysDept.dept_name).where(SysDept.dept_id.in_(dept_ids))
        )
        return {dept_id: dept_name for dept_id, dept_name in result.all()}

    @classmethod
    def add_user(cls, db: Session, user_data: Dict[str, Any]) -> SysUser:
        """新增用户，不提交事务"""
        user = SysUser(**user_data)
        db.add(user)
        db.flush()
        return user

    @classmethod
    def update_login_info(cls, db: Session, user_id: int, login_ip: str, login_date: datetime) -> None:
        db.execute(
            update(SysUser).where(SysUser.user_id == user_id).values(login_ip=login_ip, login_date=login_date)
        )

    @classmethod
    def soft_delete_users(cls, db: Session, user_ids: List[int], update_by: Optional[str] = None) -> int:
        """
        批量逻辑删除用户，并删除其角色、岗位关联，不提交事务

        Args:
            db: 数据库会话
            user_ids: 用户ID列表
            update_by: 更新者

        Returns:
            删除条数
        """
        values = soft_delete_values()
        if update_by:
            values['update_by'] = update_by
        result = db.execute(update(SysUser).where(SysUser.user_id.in_(user_ids)).values(**values))
        db.execute(delete(SysUserRole).where(SysUserRole.user_id.in_(user_ids)))
        db.execute(delete(SysUserPost).where(SysUserPost.user_id.in_(user_ids)))
        return result.rowcount

    # ---------------- 用户-角色关联 ----------------

    @classmethod
    def get_role_ids_by_user(cls, db: Session, user_id: int) -> List[int]:
        """用户关联的角色ID（不过滤角色状态）"""
        result = db.execute(
            select(SysUserRole.role_id).where(SysUserRole.user_id == user_id).order_by(SysUserRole.role_id)
        )
        return list(result.scalars().all())

    @classmethod
    def get_user_roles(cls, db: Session, user_id: int) -> List[SysRole]:
        """
        获取用户的正常状态角色

        Args:
            db: 数据库会话
            user_id: 用户ID

        Returns:
            角色列表
        """
        stmt = (
            active_select(SysRole)
            .join(SysUserRole, SysRole.role_id == SysUserRole.role_id)
            .where(and_(SysUserRole.user_id == user_id, SysRole.status == '0'))
            .order_by(SysRole.role_sort, SysRole.role_id)
        )
        return list(db.execute(stmt).scalars().all())

    @classmethod
    def replace_user_roles(cls, db: Session, user_id: int, role_ids: List[int]) -> None:
        """覆盖用户的角色关联，不提交事务"""
        db.execute(delete(SysUserRole).where(SysUserRole.user_id == user_id))
        for role_id in sorted(set(role_ids)):
            db.add(SysUserRole(user_id=user_id, role_id=role_id))
        db.flush()

    @classmethod
    def delete_user_role(cls, db: Session, user_id: int, role_id: int) -> int:
        result = db.execute(
            delete(SysUserRole).where(and_(SysUserRole.user_id == user_id, SysUserRole.role_id == role_id))
        )
        return result.rowcount

    # ---------------- 用户-岗位关联 ----------------

    @classmethod
    def get_post_ids_by_user(cls, db: Session, user_id: int) -> List[int]:
        result = db.execute(
            select(SysUserPost.post_id).where(SysUserPost.user_id == user_id).order_by(SysUserPost.post_id)
        )
        return list(result.scalars().all())

    @classmethod
    def replace_user_posts(cls, db: Session, user_id: int, post_ids: List[int]) -> None:
        """覆盖用户的岗位关联，不提交事务"""
        db.execute(delete(SysUserPost).where(SysUserPost.user_id == user_id))
        for post_id in sorted(set(post_ids)):
            db.add(SysUserPost(user_id=user_id, post_id=post_id))
        db.flush()

    @classmethod
    def delete_user_post(cls, db: Session, user_id: int, post_id: int) -> int:
        result = db.execute(
            delete(SysUserPost).where(and_(SysUserPost.user_id == user_id, SysUserPost.post_id == post_id))
        )
        return result.rowcount
