"""
部门管理控制器
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backoffice.core.permission_dependencies import require_permission
from backoffice.db.session import get_db
from backoffice.modules.admin.schemas.dept import DeptQueryModel, AddDeptModel, EditDeptModel
from backoffice.modules.admin.services.dept_service import DeptService
from backoffice.modules.admin.utils.auth_util import AuthContext
from backoffice.modules.admin.utils.common_util import parse_ids
from backoffice.modules.admin.utils.response_util import ResponseUtil


router = APIRouter(prefix="/system/dept", tags=["部门管理"])


@router.get("/list", summary="获取部门列表", dependencies=[Depends(require_permission("system:dept:list"))])
def get_dept_list(
    dept_name: Optional[str] = Query(None, alias="deptName", description="部门名称"),
    dept_category: Optional[str] = Query(None, alias="deptCategory", description="部门类别编码"),
    status: Optional[str] = Query(None, description="部门状态"),
    db: Session = Depends(get_db)
):
    """
    获取部门扁平列表
    """
    query_params = DeptQueryModel(dept_name=dept_name, dept_category=dept_category, status=status)
    return ResponseUtil.success(data=DeptService.get_dept_list_services(db, query_params))


@router.get("/deptTree", summary="获取部门树选择项")
def get_dept_tree(
    dept_name: Optional[str] = Query(None, alias="deptName", description="部门名称"),
    status: Optional[str] = Query(None, description="部门状态"),
    db: Session = Depends(get_db)
):
    query_params = DeptQueryModel(dept_name=dept_name, status=status)
    return ResponseUtil.success(data=DeptService.get_dept_tree_options_services(db, query_params))


@router.get("/optionselect", summary="按ID获取部门选项")
def get_dept_options(
    dept_ids: Optional[str] = Query(None, alias="deptIds", description="部门ID，逗号分隔"),
    db: Session = Depends(get_db)
):
    """
    按ID批量获取部门，未传ID时返回全部部门
    """
    if not dept_ids:
        return ResponseUtil.success(data=DeptService.get_dept_list_services(db))
    return ResponseUtil.success(data=DeptService.find_options_by_ids(db, parse_ids(dept_ids)))


@router.get("/list/exclude/{dept_id}", summary="获取部门列表（排除节点）",
            dependencies=[Depends(require_permission("system:dept:list"))])
def get_dept_list_exclude(
    dept_id: int,
    db: Session = Depends(get_db)
):
    """
    获取部门列表，排除指定部门及其子孙部门，用于选择上级部门
    """
    return ResponseUtil.success(data=DeptService.find_list_exclude_child(db, dept_id))


@router.get("/{dept_id}", summary="获取部门详情", dependencies=[Depends(require_permission("system:dept:query"))])
def get_dept_detail(
    dept_id: int,
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=DeptService.get_dept_detail_services(db, dept_id))


@router.post("", summary="新增部门")
def add_dept(
    dept_data: AddDeptModel,
    auth: AuthContext = Depends(require_permission("system:dept:add")),
    db: Session = Depends(get_db)
):
    result = DeptService.add_dept_services(db, dept_data, auth)
    return ResponseUtil.success(data=result, message="新增成功")


@router.put("", summary="修改部门")
def edit_dept(
    dept_data: EditDeptModel,
    auth: AuthContext = Depends(require_permission("system:dept:edit")),
    db: Session = Depends(get_db)
):
    """
    修改部门，上级部门变化时同步更新子孙部门的祖级列表
    """
    result = DeptService.edit_dept_services(db, dept_data, auth)
    return ResponseUtil.success(data=result, message="修改成功")


@router.delete("/{dept_ids}", summary="删除部门")
def delete_dept(
    dept_ids: str,
    auth: AuthContext = Depends(require_permission("system:dept:remove")),
    db: Session = Depends(get_db)
):
    count = DeptService.delete_dept_services(db, parse_ids(dept_ids), auth)
    return ResponseUtil.success(data=count, message="删除成功")
