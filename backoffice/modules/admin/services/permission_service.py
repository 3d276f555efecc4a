"""
权限解析服务

回答两个问题：当前用户能看到哪些路由菜单，以及能调用哪些权限字符串。
用户 -> 角色 -> 角色菜单 -> 菜单树 的解析全部基于一次查出的扁平快照，
在内存中通过 TreeArena 组装，不做逐节点查询。
"""
import logging
from typing import Any, Dict, List, Optional, Set, Tuple
from sqlalchemy.orm import Session

from backoffice.core.exceptions import AuthException
from backoffice.modules.admin.dao.menu_dao import MenuDao
from backoffice.modules.admin.dao.role_dao import RoleDao
from backoffice.modules.admin.dao.user_dao import UserDao
from backoffice.modules.admin.models.menu import SysMenu, MENU_TYPE_DIR, MENU_TYPE_MENU, MENU_TYPE_BUTTON
from backoffice.modules.admin.models.system import SysRole
from backoffice.modules.admin.schemas.menu import RouterModel, RouterMetaModel
from backoffice.modules.admin.schemas.role import RoleModel
from backoffice.modules.admin.schemas.user import UserModel
from backoffice.modules.admin.services.menu_service import MenuService
from backoffice.modules.admin.utils.auth_util import AuthContext
from backoffice.modules.admin.utils.tree_util import TreeArena

logger = logging.getLogger(__name__)

ALL_PERMISSION = "*:*:*"

# 操作的固定排序，未列出的操作排在其后并按字典序
ACTION_ORDER = ["add", "edit", "remove", "list", "query", "export"]
_ACTION_RANK = {action: index for index, action in enumerate(ACTION_ORDER)}


def permission_sort_key(permission: str) -> Tuple[str, str, int, str]:
    """
    权限字符串排序键 (模块, 资源, 操作序号, 操作)

    不足三段的以空串补齐，多出的段并入操作部分。
    """
    parts = permission.split(":", 2)
    parts += [""] * (3 - len(parts))
    module, resource, action = parts
    return module, resource, _ACTION_RANK.get(action, len(ACTION_ORDER)), action


def sort_permissions(permissions) -> List[str]:
    """去重并排序权限字符串"""
    return sorted(set(permissions), key=permission_sort_key)


def split_perms(perms: Optional[str]) -> List[str]:
    """拆分菜单的 perms 字段，去掉空白与空项"""
    if not perms:
        return []
    return [token.strip() for token in perms.split(",") if token.strip()]


def collect_permissions(granted: List[SysMenu], arena: TreeArena) -> Set[str]:
    """
    收集授权菜单的权限字符串

    目录类型的菜单继续向下收集子菜单的权限，按钮常挂在目录下而非被授权的菜单下。

    Args:
        granted: 角色直接关联的菜单
        arena: 全部正常菜单的父子索引

    Returns:
        权限字符串集合
    """
    permissions: Set[str] = set()
    visited: Set[int] = set()

    stack = list(granted)
    while stack:
        menu = stack.pop()
        if menu.menu_id in visited:
            continue
        visited.add(menu.menu_id)
        permissions.update(split_perms(menu.perms))
        if menu.menu_type == MENU_TYPE_DIR:
            stack.extend(arena.children(menu.menu_id))
    return permissions


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _route_path(menu: SysMenu) -> str:
    path = menu.path or ""
    if menu.parent_id == 0 and path and not path.startswith(("/", "http://", "https://")):
        return "/" + path
    return path


def _route_component(menu: SysMenu) -> str:
    if menu.menu_type == MENU_TYPE_DIR:
        return "Layout"
    if menu.menu_type == MENU_TYPE_MENU:
        return menu.component or "ParentView"
    return menu.component or "Layout"


def menu_to_router(menu: SysMenu, children: List[RouterModel]) -> RouterModel:
    """
    单个菜单映射为前端路由描述

    Args:
        menu: 菜单
        children: 已映射的子路由（不含按钮）

    Returns:
        路由描述
    """
    router = RouterModel(
        name=_capitalize(f"{menu.path or ''}{menu.menu_id}"),
        path=_route_path(menu),
        hidden=menu.visible == "1",
        component=_route_component(menu),
        query=menu.query_param or None,
        meta=RouterMetaModel(
            title=menu.menu_name,
            icon=menu.icon,
            no_cache=menu.is_cache == 1,
            link=menu.path if menu.is_frame == 0 else None,
        ),
        children=children or None,
    )
    if menu.parent_id == 0 and menu.menu_type == MENU_TYPE_DIR:
        router.redirect = "noRedirect"
        router.always_show = True
    return router


def build_routes(menus: List[SysMenu]) -> List[Dict[str, Any]]:
    """
    扁平菜单组装为路由树，根为 parent_id = 0，按钮不参与路由

    Args:
        menus: 菜单扁平列表

    Returns:
        路由字典列表
    """
    arena = MenuService.arena(menus)
    routers = arena.build(
        menu_to_router,
        root_id=0,
        child_filter=lambda m: m.menu_type != MENU_TYPE_BUTTON,
    )
    roots = arena.children(0)
    return [
        router.to_route()
        for menu, router in zip(roots, routers)
        if menu.menu_type != MENU_TYPE_BUTTON
    ]


class PermissionService:
    """
    权限解析服务
    """

    @classmethod
    def get_user_roles(cls, db: Session, user_id: int) -> List[SysRole]:
        """用户的正常且未删除的角色"""
        role_ids = UserDao.get_role_ids_by_user(db, user_id)
        if not role_ids:
            return []
        return RoleDao.get_roles_by_ids(db, role_ids, normal_only=True)

    @classmethod
    def is_super_admin(cls, roles: List[SysRole]) -> bool:
        return any(role.super_admin for role in roles)

    @classmethod
    def get_role_permissions(cls, db: Session, roles: List[SysRole]) -> List[str]:
        """
        角色集合的权限字符串

        Args:
            db: 数据库会话
            roles: 已解析的角色

        Returns:
            排序后的权限列表，超级管理员为 ["*:*:*"]
        """
        if not roles:
            return []
        if cls.is_super_admin(roles):
            return [ALL_PERMISSION]

        menu_ids = RoleDao.get_menu_ids_by_role_ids(db, [role.role_id for role in roles])
        if not menu_ids:
            return []

        arena = MenuService.arena(MenuDao.get_normal_menus(db))
        granted = [arena.get(menu_id) for menu_id in menu_ids if menu_id in arena]
        return sort_permissions(collect_permissions(granted, arena))

    @classmethod
    def get_user_permissions(cls, db: Session, user_id: int) -> List[str]:
        return cls.get_role_permissions(db, cls.get_user_roles(db, user_id))

    @classmethod
    def get_route_menus(cls, db: Session, user_name: str, tenant_id: Optional[str] = None) -> List[SysMenu]:
        """
        按用户角色解析可见的菜单（扁平）

        用户、角色、角色菜单任一环节为空时返回空列表；
        超级管理员不做菜单ID过滤，直接取全部正常菜单。

        Args:
            db: 数据库会话
            user_name: 用户名
            tenant_id: 租户编号

        Returns:
            菜单扁平列表
        """
        user = UserDao.get_user_by_name(db, user_name, tenant_id)
        if not user:
            return []

        roles = cls.get_user_roles(db, user.user_id)
        if not roles:
            return []

        if cls.is_super_admin(roles):
            return MenuDao.get_normal_menus(db)

        menu_ids = RoleDao.get_menu_ids_by_role_ids(db, [role.role_id for role in roles])
        if not menu_ids:
            return []
        return MenuDao.get_normal_menus(db, menu_ids=menu_ids)

    @classmethod
    def get_routers_services(cls, db: Session, auth: AuthContext) -> List[Dict[str, Any]]:
        """
        获取当前用户的前端路由

        Args:
            db: 数据库会话
            auth: 当前用户

        Returns:
            路由列表，无可用角色或菜单时为空列表
        """
        menus = cls.get_route_menus(db, auth.user_name, auth.tenant_id)
        routes = build_routes(menus)
        logger.debug(f"用户 {auth.user_name} 路由数量: {len(routes)}")
        return routes

    @classmethod
    def get_visible_routers_services(cls, db: Session) -> List[Dict[str, Any]]:
        """不区分角色，全部正常且显示的菜单生成的路由"""
        return build_routes(MenuDao.get_normal_menus(db, visible_only=True))

    @classmethod
    def get_user_info_services(cls, db: Session, auth: AuthContext) -> Dict[str, Any]:
        """
        获取当前用户信息、权限字符串与角色键

        Args:
            db: 数据库会话
            auth: 当前用户

        Returns:
            {user, permissions, roles}

        Raises:
            AuthException: 令牌对应的用户已不存在
        """
        user = UserDao.get_user_by_id(db, auth.user_id)
        if not user:
            raise AuthException("用户不存在或已被删除")

        roles = cls.get_user_roles(db, user.user_id)
        permissions = cls.get_role_permissions(db, roles)

        user_model = UserModel.model_validate(user)
        user_model.roles = [
            RoleModel.model_validate(role).model_copy(update={"flag": False}) for role in roles
        ]
        user_model.role_ids = [role.role_id for role in roles]
        user_model.role_id = user_model.role_ids[0] if user_model.role_ids else None
        user_model.post_ids = UserDao.get_post_ids_by_user(db, user.user_id)
        if user.dept_id:
            user_model.dept_name = UserDao.get_dept_names(db, [user.dept_id]).get(user.dept_id)

        return {
            "user": user_model,
            "permissions": permissions,
            "roles": [role.role_key for role in roles],
        }

    @classmethod
    def has_permission(cls, permissions: List[str], code: str) -> bool:
        return ALL_PERMISSION in permissions or code in permissions
