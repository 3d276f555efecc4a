"""
角色管理数据访问对象
"""
from typing import Optional, List, Dict, Any, Tuple
from sqlalchemy import select, and_, asc, desc, delete, update, Select
from sqlalchemy.orm import Session

from backoffice.modules.admin.dao.base_dao import active_select, active_count, paginate, soft_delete_values
from backoffice.modules.admin.models.system import SysRole, SysRoleMenu, SysUserRole, SysUser
from backoffice.modules.admin.schemas.role import RolePageQueryModel


class RoleDao:
    """角色数据访问对象"""

    @classmethod
    def get_role_by_id(cls, db: Session, role_id: int) -> Optional[SysRole]:
        """
        根据角色ID获取角色信息

        Args:
            db: 数据库会话
            role_id: 角色ID

        Returns:
            角色信息对象
        """
        return db.execute(
            active_select(SysRole).where(SysRole.role_id == role_id)
        ).scalar_one_or_none()

    @classmethod
    def get_roles_by_ids(cls, db: Session, role_ids: List[int], normal_only: bool = True) -> List[SysRole]:
        """
        批量获取角色

        Args:
            db: 数据库会话
            role_ids: 角色ID列表
            normal_only: 是否只取正常状态

        Returns:
            角色列表，按 role_sort 排序
        """
        if not role_ids:
            return []
        stmt = active_select(SysRole).where(SysRole.role_id.in_(role_ids))
        if normal_only:
            stmt = stmt.where(SysRole.status == '0')
        stmt = stmt.order_by(asc(SysRole.role_sort), asc(SysRole.role_id))
        return list(db.execute(stmt).scalars().all())

    @classmethod
    def get_all_normal_roles(cls, db: Session) -> List[SysRole]:
        stmt = active_select(SysRole).where(SysRole.status == '0').order_by(asc(SysRole.role_sort), asc(SysRole.role_id))
        return list(db.execute(stmt).scalars().all())

    @classmethod
    def check_role_name_exists(cls, db: Session, role_name: str, exclude_role_id: Optional[int] = None) -> bool:
        conditions = [SysRole.role_name == role_name]
        if exclude_role_id:
            conditions.append(SysRole.role_id != exclude_role_id)
        return db.execute(active_count(SysRole, *conditions)).scalar() > 0

    @classmethod
    def check_role_key_exists(cls, db: Session, role_key: str, exclude_role_id: Optional[int] = None) -> bool:
        conditions = [SysRole.role_key == role_key]
        if exclude_role_id:
            conditions.append(SysRole.role_id != exclude_role_id)
        return db.execute(active_count(SysRole, *conditions)).scalar() > 0

    @classmethod
    def build_role_query(cls, query_params: Optional[RolePageQueryModel] = None) -> Select:
        """
        构造角色列表查询

        Args:
            query_params: 查询参数

        Returns:
            select语句，按 role_sort 升序、创建时间降序
        """
        stmt = active_select(SysRole)
        if query_params:
            conditions = []
            if query_params.role_name:
                conditions.append(SysRole.role_name.like(f'%{query_params.role_name}%'))
            if query_params.role_key:
                conditions.append(SysRole.role_key.like(f'%{query_params.role_key}%'))
            if query_params.status:
                conditions.append(SysRole.status == query_params.status)
            if query_params.begin_time:
                conditions.append(SysRole.create_time >= query_params.begin_time)
            if query_params.end_time:
                conditions.append(SysRole.create_time <= query_params.end_time)
            if conditions:
                stmt = stmt.where(and_(*conditions))
        return stmt.order_by(asc(SysRole.role_sort), desc(SysRole.create_time))

    @classmethod
    def get_role_page(cls, db: Session, query_params: RolePageQueryModel) -> Tuple[List[SysRole], int]:
        return paginate(db, cls.build_role_query(query_params), query_params.page_num, query_params.page_size)

    @classmethod
    def add_role(cls, db: Session, role_data: Dict[str, Any]) -> SysRole:
        """新增角色，不提交事务"""
        new_role = SysRole(**role_data)
        db.add(new_role)
        db.flush()
        return new_role

    @classmethod
    def soft_delete_roles(cls, db: Session, role_ids: List[int], update_by: Optional[str] = None) -> int:
        values = soft_delete_values()
        if update_by:
            values['update_by'] = update_by
        result = db.execute(update(SysRole).where(SysRole.role_id.in_(role_ids)).values(**values))
        return result.rowcount

    @classmethod
    def count_role_users(cls, db: Session, role_id: int) -> int:
        """
        统计角色下未删除的用户数量

        Args:
            db: 数据库会话
            role_id: 角色ID

        Returns:
            用户数量
        """
        stmt = (
            active_count(SysUser, SysUser.user_id == SysUserRole.user_id, SysUserRole.role_id == role_id)
        )
        return db.execute(stmt).scalar()

    # ---------------- 角色-菜单关联 ----------------

    @classmethod
    def get_role_menu_ids(cls, db: Session, role_id: int) -> List[int]:
        """
        获取角色已分配的菜单ID

        Args:
            db: 数据库会话
            role_id: 角色ID

        Returns:
            菜单ID列表
        """
        result = db.execute(
            select(SysRoleMenu.menu_id).where(SysRoleMenu.role_id == role_id).order_by(asc(SysRoleMenu.menu_id))
        )
        return list(result.scalars().all())

    @classmethod
    def get_menu_ids_by_role_ids(cls, db: Session, role_ids: List[int]) -> List[int]:
        """多个角色的菜单ID并集"""
        if not role_ids:
            return []
        result = db.execute(
            select(SysRoleMenu.menu_id).where(SysRoleMenu.role_id.in_(role_ids)).distinct()
        )
        return sorted(result.scalars().all())

    @classmethod
    def get_role_ids_by_menu(cls, db: Session, menu_id: int) -> List[int]:
        result = db.execute(
            select(SysRoleMenu.role_id).where(SysRoleMenu.menu_id == menu_id).order_by(asc(SysRoleMenu.role_id))
        )
        return list(result.scalars().all())

    @classmethod
    def replace_role_menus(cls, db: Session, role_id: int, menu_ids: List[int]) -> None:
        """
        覆盖角色的菜单关联，不提交事务

        Args:
            db: 数据库会话
            role_id: 角色ID
            menu_ids: 新的菜单ID集合
        """
        db.execute(delete(SysRoleMenu).where(SysRoleMenu.role_id == role_id))
        for menu_id in sorted(set(menu_ids)):
            db.add(SysRoleMenu(role_id=role_id, menu_id=menu_id))
        db.flush()

    @classmethod
    def add_menu_roles(cls, db: Session, menu_id: int, role_ids: List[int]) -> int:
        """为菜单追加角色关联（已存在的跳过），不提交事务"""
        existing = set(cls.get_role_ids_by_menu(db, menu_id))
        added = 0
        for role_id in sorted(set(role_ids) - existing):
            db.add(SysRoleMenu(role_id=role_id, menu_id=menu_id))
            added += 1
        db.flush()
        return added

    @classmethod
    def delete_role_menu(cls, db: Session, role_id: int, menu_id: int) -> int:
        result = db.execute(
            delete(SysRoleMenu).where(and_(SysRoleMenu.role_id == role_id, SysRoleMenu.menu_id == menu_id))
        )
        return result.rowcount

    @classmethod
    def delete_role_menus(cls, db: Session, role_ids: List[int], menu_ids: Optional[List[int]] = None) -> int:
        """
        删除角色的菜单关联，不提交事务

        Args:
            db: 数据库会话
            role_ids: 角色ID列表
            menu_ids: 仅删除这些菜单的关联，None 表示全部

        Returns:
            删除条数
        """
        stmt = delete(SysRoleMenu).where(SysRoleMenu.role_id.in_(role_ids))
        if menu_ids is not None:
            stmt = stmt.where(SysRoleMenu.menu_id.in_(menu_ids))
        return db.execute(stmt).rowcount
