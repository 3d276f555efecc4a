"""
菜单管理控制器
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backoffice.core.permission_dependencies import get_auth_context, require_permission
from backoffice.db.session import get_db
from backoffice.modules.admin.schemas.menu import MenuQueryModel, AddMenuModel, EditMenuModel, MergeRoutersModel
from backoffice.modules.admin.services.menu_service import MenuService
from backoffice.modules.admin.services.permission_service import PermissionService
from backoffice.modules.admin.utils.auth_util import AuthContext
from backoffice.modules.admin.utils.common_util import parse_ids
from backoffice.modules.admin.utils.response_util import ResponseUtil
from backoffice.modules.admin.utils.route_util import merge_routes


router = APIRouter(prefix="/system/menu", tags=["菜单管理"])


@router.get("/getRouters", summary="获取当前用户路由")
def get_routers(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """
    按当前用户的角色生成前端路由，无可用角色或菜单时返回空数组
    """
    return ResponseUtil.success(data=PermissionService.get_routers_services(db, auth))


@router.get("/getVisibleRouters", summary="获取全部可见路由", dependencies=[Depends(require_permission("system:menu:list"))])
def get_visible_routers(db: Session = Depends(get_db)):
    """
    不区分角色，返回全部正常且显示的菜单路由，用于菜单预览
    """
    return ResponseUtil.success(data=PermissionService.get_visible_routers_services(db))


@router.post("/mergeRouters", summary="合并静态与动态菜单")
def merge_routers(
    merge_data: MergeRoutersModel,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """
    静态路由表在前，当前用户的动态路由在后，返回导航菜单
    """
    dynamic_menus = PermissionService.get_routers_services(db, auth)
    return ResponseUtil.success(data=merge_routes(merge_data.static_routes, dynamic_menus))


@router.get("/list", summary="获取菜单列表", dependencies=[Depends(require_permission("system:menu:list"))])
def get_menu_list(
    menu_name: Optional[str] = Query(None, alias="menuName", description="菜单名称"),
    visible: Optional[str] = Query(None, description="显示状态"),
    status: Optional[str] = Query(None, description="菜单状态"),
    db: Session = Depends(get_db)
):
    query_params = MenuQueryModel(menu_name=menu_name, visible=visible, status=status)
    return ResponseUtil.success(data=MenuService.get_menu_list_services(db, query_params))


@router.get("/treeselect", summary="获取菜单树选择项")
def get_menu_tree_select(db: Session = Depends(get_db)):
    return ResponseUtil.success(data=MenuService.get_menu_tree_options_services(db))


@router.get("/roleMenuTreeselect/{role_id}", summary="获取角色菜单树")
def get_role_menu_tree_select(
    role_id: int,
    db: Session = Depends(get_db)
):
    """
    全部菜单树与角色已选中的菜单ID {menus, checkedKeys}
    """
    return ResponseUtil.success(data=MenuService.get_role_menu_tree_services(db, role_id))


@router.delete("/cascade/{menu_ids}", summary="级联删除菜单")
def cascade_delete_menu(
    menu_ids: str,
    auth: AuthContext = Depends(require_permission("system:menu:remove")),
    db: Session = Depends(get_db)
):
    """
    删除菜单及其全部子孙菜单
    """
    count = MenuService.cascade_delete_menu_services(db, parse_ids(menu_ids))
    return ResponseUtil.success(data=count, message="删除成功")


@router.get("/{menu_id}", summary="获取菜单详情", dependencies=[Depends(require_permission("system:menu:query"))])
def get_menu_detail(
    menu_id: int,
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=MenuService.get_menu_detail_services(db, menu_id))


@router.post("", summary="新增菜单")
def add_menu(
    menu_data: AddMenuModel,
    auth: AuthContext = Depends(require_permission("system:menu:add")),
    db: Session = Depends(get_db)
):
    result = MenuService.add_menu_services(db, menu_data, auth)
    return ResponseUtil.success(data=result, message="新增成功")


@router.put("", summary="修改菜单")
def edit_menu(
    menu_data: EditMenuModel,
    auth: AuthContext = Depends(require_permission("system:menu:edit")),
    db: Session = Depends(get_db)
):
    result = MenuService.edit_menu_services(db, menu_data, auth)
    return ResponseUtil.success(data=result, message="修改成功")


@router.delete("/{menu_id}", summary="删除菜单")
def delete_menu(
    menu_id: int,
    auth: AuthContext = Depends(require_permission("system:menu:remove")),
    db: Session = Depends(get_db)
):
    """
    删除菜单，存在子菜单时失败
    """
    count = MenuService.delete_menu_services(db, menu_id)
    return ResponseUtil.success(data=count, message="删除成功")
