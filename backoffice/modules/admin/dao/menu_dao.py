"""
菜单管理数据访问对象
"""
from typing import Optional, List, Dict, Any
from sqlalchemy import select, and_, asc, delete, func
from sqlalchemy.orm import Session

from backoffice.modules.admin.models.menu import SysMenu
from backoffice.modules.admin.models.system import SysRoleMenu
from backoffice.modules.admin.schemas.menu import MenuQueryModel


class MenuDao:
    """菜单数据访问对象"""

    @classmethod
    def get_menu_by_id(cls, db: Session, menu_id: int) -> Optional[SysMenu]:
        """
        根据菜单ID获取菜单信息

        Args:
            db: 数据库会话
            menu_id: 菜单ID

        Returns:
            菜单信息对象
        """
        return db.execute(
            select(SysMenu).where(SysMenu.menu_id == menu_id)
        ).scalar_one_or_none()

    @classmethod
    def check_menu_name_exists(cls, db: Session, menu_name: str, parent_id: int, exclude_menu_id: Optional[int] = None) -> bool:
        """
        检查同级菜单名称是否已存在

        Args:
            db: 数据库会话
            menu_name: 菜单名称
            parent_id: 父菜单ID
            exclude_menu_id: 排除的菜单ID（用于编辑时检查重名）

        Returns:
            是否存在
        """
        conditions = [
            SysMenu.menu_name == menu_name,
            SysMenu.parent_id == parent_id
        ]
        if exclude_menu_id:
            conditions.append(SysMenu.menu_id != exclude_menu_id)

        count = db.execute(
            select(func.count(SysMenu.menu_id)).where(and_(*conditions))
        ).scalar()
        return count > 0

    @classmethod
    def get_menu_list(cls, db: Session, query_params: Optional[MenuQueryModel] = None) -> List[SysMenu]:
        """
        获取菜单列表

        Args:
            db: 数据库会话
            query_params: 查询参数

        Returns:
            菜单列表，按 parent_id、order_num 排序
        """
        stmt = select(SysMenu)

        if query_params:
            conditions = []
            if query_params.menu_name:
                conditions.append(SysMenu.menu_name.like(f'%{query_params.menu_name}%'))
            if query_params.visible is not None:
                conditions.append(SysMenu.visible == query_params.visible)
            if query_params.status is not None:
                conditions.append(SysMenu.status == query_params.status)
            if conditions:
                stmt = stmt.where(and_(*conditions))

        stmt = stmt.order_by(asc(SysMenu.parent_id), asc(SysMenu.order_num), asc(SysMenu.menu_id))
        return list(db.execute(stmt).scalars().all())

    @classmethod
    def get_normal_menus(cls, db: Session, menu_ids: Optional[List[int]] = None, visible_only: bool = False) -> List[SysMenu]:
        """
        获取正常状态的菜单

        Args:
            db: 数据库会话
            menu_ids: 限定的菜单ID，None 表示不限定
            visible_only: 是否只取显示状态的菜单

        Returns:
            菜单列表
        """
        stmt = select(SysMenu).where(SysMenu.status == '0')
        if menu_ids is not None:
            if not menu_ids:
                return []
            stmt = stmt.where(SysMenu.menu_id.in_(menu_ids))
        if visible_only:
            stmt = stmt.where(SysMenu.visible == '0')
        stmt = stmt.order_by(asc(SysMenu.parent_id), asc(SysMenu.order_num), asc(SysMenu.menu_id))
        return list(db.execute(stmt).scalars().all())

    @classmethod
    def check_menu_has_children(cls, db: Session, menu_id: int) -> bool:
        count = db.execute(
            select(func.count(SysMenu.menu_id)).where(SysMenu.parent_id == menu_id)
        ).scalar()
        return count > 0

    @classmethod
    def add_menu(cls, db: Session, menu_data: Dict[str, Any]) -> SysMenu:
        """新增菜单，不提交事务"""
        new_menu = SysMenu(**menu_data)
        db.add(new_menu)
        db.flush()
        return new_menu

    @classmethod
    def delete_menus(cls, db: Session, menu_ids: List[int]) -> int:
        """
        删除菜单及其角色关联，不提交事务

        Args:
            db: 数据库会话
            menu_ids: 菜单ID列表

        Returns:
            删除的菜单条数
        """
        if not menu_ids:
            return 0
        db.execute(delete(SysRoleMenu).where(SysRoleMenu.menu_id.in_(menu_ids)))
        result = db.execute(delete(SysMenu).where(SysMenu.menu_id.in_(menu_ids)))
        return result.rowcount
