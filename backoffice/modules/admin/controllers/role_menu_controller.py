"""
角色菜单关联控制器
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backoffice.core.permission_dependencies import require_permission
from backoffice.db.session import get_db
from backoffice.modules.admin.schemas.role import RoleMenuAssignModel, MenuRoleAssignModel
from backoffice.modules.admin.services.role_menu_service import RoleMenuService
from backoffice.modules.admin.utils.auth_util import AuthContext
from backoffice.modules.admin.utils.response_util import ResponseUtil


router = APIRouter(prefix="/system/role-menu", tags=["角色菜单关联"])


@router.get("/role/{role_id}/menus", summary="获取角色菜单ID")
def get_role_menu_ids(
    role_id: int,
    auth: AuthContext = Depends(require_permission("system:role:query")),
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=RoleMenuService.get_role_menu_ids_services(db, role_id))


@router.get("/role/{role_id}/menuTree", summary="获取角色菜单树")
def get_role_menu_tree(
    role_id: int,
    auth: AuthContext = Depends(require_permission("system:role:query")),
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=RoleMenuService.get_role_menu_tree_services(db, role_id))


@router.post("/role/{role_id}/menus", summary="保存角色菜单")
def save_role_menus(
    role_id: int,
    assign_data: RoleMenuAssignModel,
    auth: AuthContext = Depends(require_permission("system:role:edit")),
    db: Session = Depends(get_db)
):
    """
    覆盖角色的菜单集合，选中菜单的全部上级菜单一并保存

    Returns:
        实际保存的菜单ID
    """
    saved = RoleMenuService.save_role_menus_services(db, role_id, assign_data.menu_ids)
    return ResponseUtil.success(data=saved, message="分配成功")


@router.get("/menu/{menu_id}/roles", summary="获取菜单关联的角色ID")
def get_menu_role_ids(
    menu_id: int,
    auth: AuthContext = Depends(require_permission("system:role:query")),
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=RoleMenuService.get_menu_role_ids_services(db, menu_id))


@router.post("/menu/{menu_id}/roles", summary="把菜单授权给角色")
def assign_menu_roles(
    menu_id: int,
    assign_data: MenuRoleAssignModel,
    auth: AuthContext = Depends(require_permission("system:role:edit")),
    db: Session = Depends(get_db)
):
    added = RoleMenuService.assign_menu_roles_services(db, menu_id, assign_data.role_ids)
    return ResponseUtil.success(data=added, message="分配成功")


@router.delete("/role/{role_id}/menu/{menu_id}", summary="移除角色的单个菜单")
def remove_role_menu(
    role_id: int,
    menu_id: int,
    auth: AuthContext = Depends(require_permission("system:role:edit")),
    db: Session = Depends(get_db)
):
    count = RoleMenuService.remove_role_menu_services(db, role_id, menu_id)
    return ResponseUtil.success(data=count, message="删除成功")


@router.delete("/role/{role_id}/menus", summary="清空角色菜单")
def clear_role_menus(
    role_id: int,
    auth: AuthContext = Depends(require_permission("system:role:edit")),
    db: Session = Depends(get_db)
):
    count = RoleMenuService.clear_role_menus_services(db, role_id)
    return ResponseUtil.success(data=count, message="删除成功")
