"""
角色管理控制器
"""
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backoffice.core.permission_dependencies import require_permission
from backoffice.db.session import get_db
from backoffice.modules.admin.schemas.role import (
    RolePageQueryModel, AddRoleModel, EditRoleModel, ChangeRoleStatusModel, RoleDataScopeModel
)
from backoffice.modules.admin.services.role_service import RoleService
from backoffice.modules.admin.utils.auth_util import AuthContext
from backoffice.modules.admin.utils.common_util import parse_ids
from backoffice.modules.admin.utils.excel_util import ExcelUtil
from backoffice.modules.admin.utils.response_util import ResponseUtil


router = APIRouter(prefix="/system/role", tags=["角色管理"])

ROLE_EXPORT_COLUMNS = {
    'role_id': '角色编号',
    'role_name': '角色名称',
    'role_key': '权限字符',
    'role_sort': '显示顺序',
    'data_scope': '数据范围',
    'status': '状态',
    'create_time': '创建时间',
    'remark': '备注',
}


@router.get("/list", summary="获取角色分页列表", dependencies=[Depends(require_permission("system:role:list"))])
def get_role_list(
    page_num: int = Query(1, alias="pageNum", ge=1, description="页码"),
    page_size: int = Query(10, alias="pageSize", ge=1, le=1000, description="每页大小"),
    role_name: Optional[str] = Query(None, alias="roleName", description="角色名称"),
    role_key: Optional[str] = Query(None, alias="roleKey", description="权限字符"),
    status: Optional[str] = Query(None, description="角色状态"),
    begin_time: Optional[datetime] = Query(None, alias="beginTime", description="开始时间"),
    end_time: Optional[datetime] = Query(None, alias="endTime", description="结束时间"),
    db: Session = Depends(get_db)
):
    """
    获取角色分页列表
    """
    query_params = RolePageQueryModel(
        page_num=page_num,
        page_size=page_size,
        role_name=role_name,
        role_key=role_key,
        status=status,
        begin_time=begin_time,
        end_time=end_time
    )
    rows, total = RoleService.get_role_list_services(db, query_params)
    return ResponseUtil.page(rows, total)


@router.get("", summary="获取全部正常角色")
def get_all_roles(db: Session = Depends(get_db)):
    return ResponseUtil.success(data=RoleService.get_all_roles_services(db))


@router.post("/export", summary="导出角色")
def export_roles(
    query_params: Optional[RolePageQueryModel] = None,
    auth: AuthContext = Depends(require_permission("system:role:export")),
    db: Session = Depends(get_db)
):
    roles = RoleService.get_role_export_list_services(db, query_params or RolePageQueryModel())
    rows = [role.model_dump() for role in roles]
    return ExcelUtil.export_response(rows, ROLE_EXPORT_COLUMNS, "role", sheet_name="角色数据")


@router.put("/changeStatus", summary="修改角色状态")
def change_role_status(
    status_data: ChangeRoleStatusModel,
    auth: AuthContext = Depends(require_permission("system:role:edit")),
    db: Session = Depends(get_db)
):
    RoleService.change_role_status_services(db, status_data, auth)
    return ResponseUtil.success(message="修改成功")


@router.put("/dataScope", summary="修改角色数据权限")
def update_data_scope(
    scope_data: RoleDataScopeModel,
    auth: AuthContext = Depends(require_permission("system:role:edit")),
    db: Session = Depends(get_db)
):
    result = RoleService.update_role_data_scope_services(db, scope_data, auth)
    return ResponseUtil.success(data=result, message="修改成功")


@router.get("/{role_id}", summary="获取角色详情", dependencies=[Depends(require_permission("system:role:query"))])
def get_role_detail(
    role_id: int,
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=RoleService.get_role_detail_services(db, role_id))


@router.post("", summary="新增角色")
def add_role(
    role_data: AddRoleModel,
    auth: AuthContext = Depends(require_permission("system:role:add")),
    db: Session = Depends(get_db)
):
    """
    新增角色，可同时分配菜单（自动补齐上级菜单）
    """
    result = RoleService.add_role_services(db, role_data, auth)
    return ResponseUtil.success(data=result, message="新增成功")


@router.put("", summary="修改角色")
def edit_role(
    role_data: EditRoleModel,
    auth: AuthContext = Depends(require_permission("system:role:edit")),
    db: Session = Depends(get_db)
):
    result = RoleService.edit_role_services(db, role_data, auth)
    return ResponseUtil.success(data=result, message="修改成功")


@router.delete("/{role_ids}", summary="删除角色")
def delete_role(
    role_ids: str,
    auth: AuthContext = Depends(require_permission("system:role:remove")),
    db: Session = Depends(get_db)
):
    """
    删除角色，已分配给用户的角色不能删除
    """
    count = RoleService.delete_role_services(db, parse_ids(role_ids), auth)
    return ResponseUtil.success(data=count, message="删除成功")
