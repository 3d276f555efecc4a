"""
菜单管理服务层
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.modules.admin.dao.menu_dao import MenuDao
from backoffice.modules.admin.dao.role_dao import RoleDao
from backoffice.modules.admin.models.menu import SysMenu
from backoffice.modules.admin.schemas.common import TreeOptionModel
from backoffice.modules.admin.schemas.menu import (
    MenuModel, MenuQueryModel, AddMenuModel, EditMenuModel, RoleMenuTreeModel
)
from backoffice.modules.admin.utils.auth_util import AuthContext
from backoffice.modules.admin.utils.tree_util import TreeArena

logger = logging.getLogger(__name__)


class MenuService:
    """
    菜单管理模块服务层
    """

    @classmethod
    def arena(cls, menus: List[SysMenu]) -> TreeArena:
        """菜单父子索引，同级按 order_num 升序"""
        return TreeArena(
            menus,
            key=lambda m: m.menu_id,
            parent_key=lambda m: m.parent_id,
            order_key=lambda m: (m.order_num or 0, m.menu_id)
        )

    @classmethod
    def get_menu_list_services(cls, db: Session, query_params: Optional[MenuQueryModel] = None) -> List[MenuModel]:
        """
        获取菜单扁平列表

        Args:
            db: 数据库会话
            query_params: 查询参数

        Returns:
            菜单列表
        """
        return [MenuModel.model_validate(menu) for menu in MenuDao.get_menu_list(db, query_params)]

    @classmethod
    def get_menu_tree_services(cls, db: Session, query_params: Optional[MenuQueryModel] = None) -> List[MenuModel]:
        """
        获取菜单树，带过滤条件时父菜单被过滤掉的节点提升为根
        """
        menus = MenuDao.get_menu_list(db, query_params)

        def convert(menu: SysMenu, children: List[MenuModel]) -> MenuModel:
            node = MenuModel.model_validate(menu)
            node.children = children
            return node

        return cls.arena(menus).build(convert, root_id=0, orphans_as_roots=True)

    @classmethod
    def build_tree_options(cls, menus: List[SysMenu]) -> List[TreeOptionModel]:
        """
        菜单树选择项 {id, label, parentId, weight, children}

        Args:
            menus: 菜单扁平列表

        Returns:
            树选择项
        """
        def convert(menu: SysMenu, children: List[TreeOptionModel]) -> TreeOptionModel:
            return TreeOptionModel(
                id=menu.menu_id,
                label=menu.menu_name,
                parent_id=menu.parent_id,
                weight=menu.order_num or 0,
                children=children or None
            )

        return cls.arena(menus).build(convert, root_id=0, orphans_as_roots=True)

    @classmethod
    def get_menu_tree_options_services(cls, db: Session) -> List[TreeOptionModel]:
        return cls.build_tree_options(MenuDao.get_menu_list(db))

    @classmethod
    def get_role_menu_tree_services(cls, db: Session, role_id: int) -> RoleMenuTreeModel:
        """
        角色菜单树：全部菜单树与该角色已关联的菜单ID

        Args:
            db: 数据库会话
            role_id: 角色ID

        Returns:
            {menus, checkedKeys}

        Raises:
            ResourceNotFound: 角色不存在
        """
        if not RoleDao.get_role_by_id(db, role_id):
            raise ResourceNotFound("角色不存在")
        return RoleMenuTreeModel(
            menus=cls.get_menu_tree_options_services(db),
            checked_keys=RoleDao.get_role_menu_ids(db, role_id)
        )

    @classmethod
    def get_menu_detail_services(cls, db: Session, menu_id: int) -> MenuModel:
        menu = MenuDao.get_menu_by_id(db, menu_id)
        if not menu:
            raise ResourceNotFound("菜单不存在")
        return MenuModel.model_validate(menu)

    @classmethod
    def find_child_menu_ids(cls, db: Session, menu_id: int) -> List[int]:
        """全部子孙菜单ID（不含自身）"""
        return cls.arena(MenuDao.get_menu_list(db)).descendant_ids(menu_id)

    @classmethod
    def _check_parent(cls, db: Session, parent_id: int) -> None:
        if parent_id and not MenuDao.get_menu_by_id(db, parent_id):
            raise ResourceNotFound("父菜单不存在")

    @classmethod
    def add_menu_services(cls, db: Session, menu_data: AddMenuModel, auth: AuthContext) -> MenuModel:
        """
        新增菜单

        Args:
            db: 数据库会话
            menu_data: 菜单数据（布尔类字段已由模型归一化）
            auth: 当前用户

        Returns:
            新菜单

        Raises:
            BadRequest: 同级菜单重名
            ResourceNotFound: 父菜单不存在
        """
        if MenuDao.check_menu_name_exists(db, menu_data.menu_name, menu_data.parent_id):
            raise BadRequest(f"新增菜单'{menu_data.menu_name}'失败，菜单名称已存在")
        cls._check_parent(db, menu_data.parent_id)

        menu_dict = menu_data.model_dump()
        menu_dict['create_by'] = auth.user_name
        menu_dict['update_by'] = auth.user_name

        try:
            new_menu = MenuDao.add_menu(db, menu_dict)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(new_menu)
        logger.info(f"新增菜单: {new_menu.menu_name}({new_menu.menu_id})")
        return MenuModel.model_validate(new_menu)

    @classmethod
    def edit_menu_services(cls, db: Session, menu_data: EditMenuModel, auth: AuthContext) -> MenuModel:
        """
        修改菜单

        上级菜单变化时不能挂到自身或自身子孙下。

        Raises:
            ResourceNotFound: 菜单或父菜单不存在
            BadRequest: 重名或上级菜单非法
        """
        menu = MenuDao.get_menu_by_id(db, menu_data.menu_id)
        if not menu:
            raise ResourceNotFound("菜单不存在")

        if menu_data.parent_id != menu.parent_id:
            if menu_data.parent_id == menu.menu_id:
                raise BadRequest(f"修改菜单'{menu_data.menu_name}'失败，上级菜单不能选择自己")
            if menu_data.parent_id in set(cls.find_child_menu_ids(db, menu.menu_id)):
                raise BadRequest(f"修改菜单'{menu_data.menu_name}'失败，上级菜单不能是自己的子菜单")
            cls._check_parent(db, menu_data.parent_id)

        if MenuDao.check_menu_name_exists(db, menu_data.menu_name, menu_data.parent_id, menu.menu_id):
            raise BadRequest(f"修改菜单'{menu_data.menu_name}'失败，菜单名称已存在")

        try:
            for key, value in menu_data.model_dump(exclude={'menu_id'}).items():
                setattr(menu, key, value)
            menu.update_by = auth.user_name
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(menu)
        return MenuModel.model_validate(menu)

    @classmethod
    def delete_menu_services(cls, db: Session, menu_id: int) -> int:
        """
        删除菜单，存在子菜单时失败

        Args:
            db: 数据库会话
            menu_id: 菜单ID

        Returns:
            删除条数
        """
        menu = MenuDao.get_menu_by_id(db, menu_id)
        if not menu:
            raise ResourceNotFound("菜单不存在")
        if MenuDao.check_menu_has_children(db, menu_id):
            raise BadRequest("存在子菜单，不允许删除")

        try:
            count = MenuDao.delete_menus(db, [menu_id])
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"删除菜单: {menu.menu_name}({menu_id})")
        return count

    @classmethod
    def cascade_delete_menu_services(cls, db: Session, menu_ids: List[int]) -> int:
        """
        级联删除菜单：每个菜单的整棵子树自底向上删除，再删除自身

        Args:
            db: 数据库会话
            menu_ids: 菜单ID列表

        Returns:
            删除条数（含子孙菜单）
        """
        arena = cls.arena(MenuDao.get_menu_list(db))
        ordered: List[int] = []
        seen = set()
        for menu_id in menu_ids:
            if menu_id not in arena:
                raise ResourceNotFound(f"菜单ID {menu_id} 不存在")
            for node_id in list(reversed(arena.descendant_ids(menu_id))) + [menu_id]:
                if node_id not in seen:
                    seen.add(node_id)
                    ordered.append(node_id)

        try:
            count = MenuDao.delete_menus(db, ordered)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"级联删除菜单: {menu_ids}，共 {count} 条")
        return count
