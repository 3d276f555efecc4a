"""
用户管理控制器
"""
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backoffice.core.permission_dependencies import get_auth_context, require_permission
from backoffice.db.session import get_db
from backoffice.modules.admin.schemas.dept import DeptQueryModel
from backoffice.modules.admin.schemas.user import (
    UserPageQueryModel, AddUserModel, EditUserModel, ResetPasswordModel, ChangeUserStatusModel,
    UserProfileModel, UpdatePasswordModel, UserAuthRoleModel
)
from backoffice.modules.admin.services.dept_service import DeptService
from backoffice.modules.admin.services.user_service import UserService
from backoffice.modules.admin.utils.auth_util import AuthContext
from backoffice.modules.admin.utils.common_util import parse_ids
from backoffice.modules.admin.utils.excel_util import ExcelUtil
from backoffice.modules.admin.utils.response_util import ResponseUtil


router = APIRouter(prefix="/system/user", tags=["用户管理"])

USER_EXPORT_COLUMNS = {
    'user_id': '用户编号',
    'user_name': '登录名称',
    'nick_name': '用户昵称',
    'dept_name': '部门名称',
    'email': '用户邮箱',
    'phonenumber': '手机号码',
    'sex': '用户性别',
    'status': '帐号状态',
    'login_ip': '最后登录IP',
    'login_date': '最后登录时间',
    'create_time': '创建时间',
}


@router.get("/list", summary="获取用户分页列表", dependencies=[Depends(require_permission("system:user:list"))])
def get_user_list(
    page_num: int = Query(1, alias="pageNum", ge=1, description="页码"),
    page_size: int = Query(10, alias="pageSize", ge=1, le=1000, description="每页大小"),
    user_name: Optional[str] = Query(None, alias="userName", description="用户账号"),
    nick_name: Optional[str] = Query(None, alias="nickName", description="用户昵称"),
    phonenumber: Optional[str] = Query(None, description="手机号码"),
    status: Optional[str] = Query(None, description="帐号状态"),
    dept_id: Optional[int] = Query(None, alias="deptId", description="部门ID"),
    role_id: Optional[int] = Query(None, alias="roleId", description="角色ID"),
    begin_time: Optional[datetime] = Query(None, alias="beginTime", description="开始时间"),
    end_time: Optional[datetime] = Query(None, alias="endTime", description="结束时间"),
    db: Session = Depends(get_db)
):
    """
    获取用户列表，按部门筛选时包含子部门的用户
    """
    query_params = UserPageQueryModel(
        page_num=page_num,
        page_size=page_size,
        user_name=user_name,
        nick_name=nick_name,
        phonenumber=phonenumber,
        status=status,
        dept_id=dept_id,
        role_id=role_id,
        begin_time=begin_time,
        end_time=end_time
    )
    rows, total = UserService.get_user_list_services(db, query_params)
    return ResponseUtil.page(rows, total)


@router.get("/deptTree", summary="获取部门树")
def get_dept_tree(
    auth: AuthContext = Depends(require_permission("system:user:list")),
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=DeptService.get_dept_tree_options_services(db, DeptQueryModel()))


@router.post("/export", summary="导出用户")
def export_users(
    query_params: Optional[UserPageQueryModel] = None,
    auth: AuthContext = Depends(require_permission("system:user:export")),
    db: Session = Depends(get_db)
):
    users = UserService.get_user_export_list_services(db, query_params or UserPageQueryModel())
    rows = [user.model_dump() for user in users]
    return ExcelUtil.export_response(rows, USER_EXPORT_COLUMNS, "user", sheet_name="用户数据")


@router.get("/profile", summary="获取个人信息")
def get_profile(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=UserService.get_profile_services(db, auth))


@router.put("/profile", summary="修改个人信息")
def update_profile(
    profile: UserProfileModel,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    result = UserService.update_profile_services(db, profile, auth)
    return ResponseUtil.success(data=result, message="修改成功")


@router.put("/updatePwd", summary="修改个人密码")
def update_password(
    pwd_data: UpdatePasswordModel,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    UserService.update_password_services(db, pwd_data, auth)
    return ResponseUtil.success(message="修改成功")


@router.put("/resetPwd", summary="重置用户密码")
def reset_password(
    reset_data: ResetPasswordModel,
    auth: AuthContext = Depends(require_permission("system:user:resetPwd")),
    db: Session = Depends(get_db)
):
    UserService.reset_password_services(db, reset_data, auth)
    return ResponseUtil.success(message="重置成功")


@router.put("/changeStatus", summary="修改用户状态")
def change_status(
    status_data: ChangeUserStatusModel,
    auth: AuthContext = Depends(require_permission("system:user:edit")),
    db: Session = Depends(get_db)
):
    UserService.change_status_services(db, status_data, auth)
    return ResponseUtil.success(message="修改成功")


@router.get("/authRole/{user_id}", summary="获取用户授权角色")
def get_auth_role(
    user_id: int,
    auth: AuthContext = Depends(require_permission("system:user:query")),
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=UserService.get_auth_role_services(db, user_id))


@router.put("/authRole", summary="保存用户授权角色")
def save_auth_role(
    auth_role: UserAuthRoleModel,
    auth: AuthContext = Depends(require_permission("system:user:edit")),
    db: Session = Depends(get_db)
):
    UserService.assign_roles_services(db, auth_role.user_id, auth_role.role_ids)
    return ResponseUtil.success(message="授权成功")


@router.get("", summary="获取新增用户表单选项", dependencies=[Depends(require_permission("system:user:query"))])
def get_user_form_options(db: Session = Depends(get_db)):
    """
    不带用户ID的详情：可选的角色与岗位
    """
    return ResponseUtil.success(data=UserService.get_user_detail_services(db))


@router.get("/{user_id}", summary="获取用户详情", dependencies=[Depends(require_permission("system:user:query"))])
def get_user_detail(
    user_id: int,
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=UserService.get_user_detail_services(db, user_id))


@router.post("", summary="新增用户")
def add_user(
    user_data: AddUserModel,
    auth: AuthContext = Depends(require_permission("system:user:add")),
    db: Session = Depends(get_db)
):
    result = UserService.add_user_services(db, user_data, auth)
    return ResponseUtil.success(data=result, message="新增成功")


@router.put("", summary="修改用户")
def edit_user(
    user_data: EditUserModel,
    auth: AuthContext = Depends(require_permission("system:user:edit")),
    db: Session = Depends(get_db)
):
    result = UserService.edit_user_services(db, user_data, auth)
    return ResponseUtil.success(data=result, message="修改成功")


@router.delete("/{user_ids}", summary="删除用户")
def delete_user(
    user_ids: str,
    auth: AuthContext = Depends(require_permission("system:user:remove")),
    db: Session = Depends(get_db)
):
    """
    删除用户（逻辑删除），当前用户与内置管理员不能删除
    """
    count = UserService.delete_user_services(db, parse_ids(user_ids), auth)
    return ResponseUtil.success(data=count, message="删除成功")
