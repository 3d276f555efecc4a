"""
用户角色、用户岗位关联控制器
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backoffice.core.permission_dependencies import require_permission
from backoffice.db.session import get_db
from backoffice.modules.admin.schemas.user import UserRoleAssignModel, UserPostAssignModel
from backoffice.modules.admin.services.user_service import UserService
from backoffice.modules.admin.utils.auth_util import AuthContext
from backoffice.modules.admin.utils.response_util import ResponseUtil


user_role_router = APIRouter(prefix="/system/user-role", tags=["用户角色关联"])
user_post_router = APIRouter(prefix="/system/user-post", tags=["用户岗位关联"])


# ===========================================
# 用户角色
# ===========================================

@user_role_router.get("/user/{user_id}/roles", summary="获取用户角色ID")
def get_user_role_ids(
    user_id: int,
    auth: AuthContext = Depends(require_permission("system:user:query")),
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=UserService.get_user_role_ids_services(db, user_id))


@user_role_router.post("/user/{user_id}/roles", summary="覆盖用户角色")
def assign_user_roles(
    user_id: int,
    assign_data: UserRoleAssignModel,
    auth: AuthContext = Depends(require_permission("system:user:edit")),
    db: Session = Depends(get_db)
):
    UserService.assign_roles_services(db, user_id, assign_data.role_ids)
    return ResponseUtil.success(message="分配成功")


@user_role_router.delete("/user/{user_id}/role/{role_id}", summary="移除用户的单个角色")
def remove_user_role(
    user_id: int,
    role_id: int,
    auth: AuthContext = Depends(require_permission("system:user:edit")),
    db: Session = Depends(get_db)
):
    count = UserService.remove_role_services(db, user_id, role_id)
    return ResponseUtil.success(data=count, message="删除成功")


@user_role_router.delete("/user/{user_id}/roles", summary="清空用户角色")
def clear_user_roles(
    user_id: int,
    auth: AuthContext = Depends(require_permission("system:user:edit")),
    db: Session = Depends(get_db)
):
    UserService.assign_roles_services(db, user_id, [])
    return ResponseUtil.success(message="删除成功")


# ===========================================
# 用户岗位
# ===========================================

@user_post_router.get("/user/{user_id}/post-ids", summary="获取用户岗位ID")
def get_user_post_ids(
    user_id: int,
    auth: AuthContext = Depends(require_permission("system:user:query")),
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=UserService.get_user_post_ids_services(db, user_id))


@user_post_router.post("/user/{user_id}/posts", summary="覆盖用户岗位")
def assign_user_posts(
    user_id: int,
    assign_data: UserPostAssignModel,
    auth: AuthContext = Depends(require_permission("system:user:edit")),
    db: Session = Depends(get_db)
):
    UserService.assign_posts_services(db, user_id, assign_data.post_ids)
    return ResponseUtil.success(message="分配成功")


@user_post_router.delete("/user/{user_id}/post/{post_id}", summary="移除用户的单个岗位")
def remove_user_post(
    user_id: int,
    post_id: int,
    auth: AuthContext = Depends(require_permission("system:user:edit")),
    db: Session = Depends(get_db)
):
    count = UserService.remove_post_services(db, user_id, post_id)
    return ResponseUtil.success(data=count, message="删除成功")
