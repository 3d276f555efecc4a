"""
角色菜单关联服务层
"""
import logging
from typing import List
from sqlalchemy.orm import Session

from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.modules.admin.dao.menu_dao import MenuDao
from backoffice.modules.admin.dao.role_dao import RoleDao
from backoffice.modules.admin.schemas.menu import RoleMenuTreeModel
from backoffice.modules.admin.services.menu_service import MenuService

logger = logging.getLogger(__name__)


class RoleMenuService:
    """
    角色菜单关联服务
    """

    @classmethod
    def _get_role(cls, db: Session, role_id: int):
        role = RoleDao.get_role_by_id(db, role_id)
        if not role:
            raise ResourceNotFound("角色不存在")
        return role

    @classmethod
    def expand_with_ancestors(cls, db: Session, menu_ids: List[int]) -> List[int]:
        """
        补齐菜单的全部上级菜单

        只授权按钮或子菜单时，其目录也必须在角色菜单中，否则路由树无法挂载。

        Args:
            db: 数据库会话
            menu_ids: 选中的菜单ID

        Returns:
            排序后的菜单ID（含上级）

        Raises:
            BadRequest: 菜单ID不存在
        """
        arena = MenuService.arena(MenuDao.get_menu_list(db))
        missing = [menu_id for menu_id in menu_ids if menu_id not in arena]
        if missing:
            raise BadRequest(f"菜单不存在: {missing}")

        result = set(menu_ids)
        for menu_id in menu_ids:
            result.update(arena.ancestor_ids(menu_id))
        return sorted(result)

    @classmethod
    def assign_menus(cls, db: Session, role_id: int, menu_ids: List[int]) -> List[int]:
        """
        覆盖角色的菜单集合（含上级菜单），不提交事务

        Returns:
            实际保存的菜单ID
        """
        full_ids = cls.expand_with_ancestors(db, menu_ids)
        RoleDao.replace_role_menus(db, role_id, full_ids)
        return full_ids

    @classmethod
    def get_role_menu_ids_services(cls, db: Session, role_id: int) -> List[int]:
        cls._get_role(db, role_id)
        return RoleDao.get_role_menu_ids(db, role_id)

    @classmethod
    def get_role_menu_tree_services(cls, db: Session, role_id: int) -> RoleMenuTreeModel:
        return MenuService.get_role_menu_tree_services(db, role_id)

    @classmethod
    def save_role_menus_services(cls, db: Session, role_id: int, menu_ids: List[int]) -> List[int]:
        """
        保存角色菜单

        Args:
            db: 数据库会话
            role_id: 角色ID
            menu_ids: 选中的菜单ID

        Returns:
            实际保存的菜单ID（含上级菜单）
        """
        cls._get_role(db, role_id)
        try:
            saved = cls.assign_menus(db, role_id, menu_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"角色 {role_id} 分配菜单 {len(saved)} 个")
        return saved

    @classmethod
    def get_menu_role_ids_services(cls, db: Session, menu_id: int) -> List[int]:
        if not MenuDao.get_menu_by_id(db, menu_id):
            raise ResourceNotFound("菜单不存在")
        return RoleDao.get_role_ids_by_menu(db, menu_id)

    @classmethod
    def assign_menu_roles_services(cls, db: Session, menu_id: int, role_ids: List[int]) -> int:
        """
        把菜单（连同上级菜单）追加授权给多个角色，已有关联保持不变

        Args:
            db: 数据库会话
            menu_id: 菜单ID
            role_ids: 角色ID列表

        Returns:
            新增的关联条数
        """
        menu_ids = cls.expand_with_ancestors(db, [menu_id])
        for role_id in role_ids:
            cls._get_role(db, role_id)
        try:
            added = sum(RoleDao.add_menu_roles(db, item, role_ids) for item in menu_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return added

    @classmethod
    def remove_role_menu_services(cls, db: Session, role_id: int, menu_id: int) -> int:
        cls._get_role(db, role_id)
        try:
            count = RoleDao.delete_role_menu(db, role_id, menu_id)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return count

    @classmethod
    def clear_role_menus_services(cls, db: Session, role_id: int) -> int:
        """清空角色的全部菜单"""
        cls._get_role(db, role_id)
        try:
            count = RoleDao.delete_role_menus(db, [role_id])
            db.commit()
        except Exception:
            db.rollback()
            raise
        return count
