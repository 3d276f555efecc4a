"""
用户管理服务层
"""
import logging
from typing import List, Optional, Tuple, Dict, Any
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.modules.admin.dao.post_dao import PostDao
from backoffice.modules.admin.dao.role_dao import RoleDao
from backoffice.modules.admin.dao.user_dao import UserDao
from backoffice.modules.admin.models.system import SysUser
from backoffice.modules.admin.schemas.post import PostModel
from backoffice.modules.admin.schemas.role import RoleModel
from backoffice.modules.admin.schemas.user import (
    UserModel, UserPageQueryModel, AddUserModel, EditUserModel, UserDetailModel,
    ResetPasswordModel, ChangeUserStatusModel, UserProfileModel, UpdatePasswordModel
)
from backoffice.modules.admin.services.dept_service import DeptService
from backoffice.modules.admin.utils.auth_util import AuthContext, PasswordUtil

logger = logging.getLogger(__name__)


class UserService:
    """
    用户管理模块服务层
    """

    @classmethod
    def _dept_scope(cls, db: Session, dept_id: Optional[int]) -> Optional[List[int]]:
        """部门及其全部子孙部门ID，未指定部门时不限定"""
        if not dept_id:
            return None
        return [dept_id] + DeptService.find_child_dept_ids(db, dept_id)

    @classmethod
    def _to_models(cls, db: Session, users: List[SysUser]) -> List[UserModel]:
        dept_names = UserDao.get_dept_names(db, list({u.dept_id for u in users if u.dept_id}))
        result = []
        for user in users:
            model = UserModel.model_validate(user)
            model.dept_name = dept_names.get(user.dept_id)
            result.append(model)
        return result

    @classmethod
    def get_user_list_services(cls, db: Session, query_params: UserPageQueryModel) -> Tuple[List[UserModel], int]:
        """
        获取用户分页列表，按部门筛选时包含子部门用户

        Args:
            db: 数据库会话
            query_params: 查询参数

        Returns:
            (用户列表, 总数)
        """
        users, total = UserDao.get_user_page(db, query_params, cls._dept_scope(db, query_params.dept_id))
        return cls._to_models(db, users), total

    @classmethod
    def get_user_export_list_services(cls, db: Session, query_params: UserPageQueryModel) -> List[UserModel]:
        users = UserDao.get_user_list(db, query_params, cls._dept_scope(db, query_params.dept_id))
        return cls._to_models(db, users)

    @classmethod
    def _get_user(cls, db: Session, user_id: int) -> SysUser:
        user = UserDao.get_user_by_id(db, user_id)
        if not user:
            raise ResourceNotFound("用户不存在")
        return user

    @classmethod
    def _flag_roles(cls, db: Session, checked_ids: List[int]) -> List[RoleModel]:
        """全部正常角色，已分配的 flag 为 True"""
        checked = set(checked_ids)
        return [
            RoleModel.model_validate(role).model_copy(update={'flag': role.role_id in checked})
            for role in RoleDao.get_all_normal_roles(db)
        ]

    @classmethod
    def get_user_detail_services(cls, db: Session, user_id: Optional[int] = None) -> UserDetailModel:
        """
        获取用户详情

        未指定用户时只返回可选的角色与岗位（新增用户表单使用）。

        Args:
            db: 数据库会话
            user_id: 用户ID

        Returns:
            用户详情
        """
        detail = UserDetailModel(
            posts=[PostModel.model_validate(post).model_dump(by_alias=True) for post in PostDao.get_normal_posts(db)]
        )
        role_ids: List[int] = []
        if user_id:
            user = cls._get_user(db, user_id)
            role_ids = UserDao.get_role_ids_by_user(db, user_id)
            post_ids = UserDao.get_post_ids_by_user(db, user_id)
            model = cls._to_models(db, [user])[0]
            model.role_ids = role_ids
            model.post_ids = post_ids
            model.role_id = role_ids[0] if role_ids else None
            model.roles = [RoleModel.model_validate(r) for r in RoleDao.get_roles_by_ids(db, role_ids, normal_only=False)]
            detail.user = model
            detail.role_ids = role_ids
            detail.post_ids = post_ids
        detail.roles = cls._flag_roles(db, role_ids)
        return detail

    @classmethod
    def _check_role_ids(cls, db: Session, role_ids: Optional[List[int]]) -> None:
        if role_ids:
            found = {r.role_id for r in RoleDao.get_roles_by_ids(db, role_ids, normal_only=False)}
            missing = sorted(set(role_ids) - found)
            if missing:
                raise BadRequest(f"角色不存在: {missing}")

    @classmethod
    def _check_post_ids(cls, db: Session, post_ids: Optional[List[int]]) -> None:
        if post_ids:
            found = {p.post_id for p in PostDao.get_posts_by_ids(db, post_ids)}
            missing = sorted(set(post_ids) - found)
            if missing:
                raise BadRequest(f"岗位不存在: {missing}")

    @classmethod
    def add_user_services(cls, db: Session, user_data: AddUserModel, auth: AuthContext) -> UserModel:
        """
        新增用户

        Args:
            db: 数据库会话
            user_data: 用户数据
            auth: 当前用户

        Returns:
            新用户（不含密码）

        Raises:
            BadRequest: 用户名已存在或关联的角色、岗位不存在
        """
        tenant_id = auth.tenant_id or settings.DEFAULT_TENANT_ID
        if UserDao.check_user_name_exists(db, user_data.user_name, tenant_id):
            raise BadRequest(f"新增用户'{user_data.user_name}'失败，登录账号已存在")
        cls._check_role_ids(db, user_data.role_ids)
        cls._check_post_ids(db, user_data.post_ids)

        user_dict = user_data.model_dump(exclude={'role_ids', 'post_ids', 'password'})
        user_dict['password'] = PasswordUtil.get_password_hash(user_data.password)
        user_dict['tenant_id'] = tenant_id
        user_dict['create_by'] = auth.user_name
        user_dict['update_by'] = auth.user_name

        try:
            user = UserDao.add_user(db, user_dict)
            if user_data.role_ids:
                UserDao.replace_user_roles(db, user.user_id, user_data.role_ids)
            if user_data.post_ids:
                UserDao.replace_user_posts(db, user.user_id, user_data.post_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(user)
        logger.info(f"新增用户: {user.user_name}({user.user_id})")
        return UserModel.model_validate(user)

    @classmethod
    def edit_user_services(cls, db: Session, user_data: EditUserModel, auth: AuthContext) -> UserModel:
        """
        修改用户，password 为空时不修改密码，role_ids/post_ids 为 None 时不修改关联
        """
        user = cls._get_user(db, user_data.user_id)
        if user.user_name == settings.ADMIN_USER_NAME and user_data.status == '1':
            raise BadRequest("不允许停用超级管理员用户")
        if UserDao.check_user_name_exists(db, user_data.user_name, user.tenant_id, user.user_id):
            raise BadRequest(f"修改用户'{user_data.user_name}'失败，登录账号已存在")
        cls._check_role_ids(db, user_data.role_ids)
        cls._check_post_ids(db, user_data.post_ids)

        try:
            for key, value in user_data.model_dump(exclude={'user_id', 'role_ids', 'post_ids', 'password'}).items():
                setattr(user, key, value)
            if user_data.password:
                user.password = PasswordUtil.get_password_hash(user_data.password)
            user.update_by = auth.user_name
            if user_data.role_ids is not None:
                UserDao.replace_user_roles(db, user.user_id, user_data.role_ids)
            if user_data.post_ids is not None:
                UserDao.replace_user_posts(db, user.user_id, user_data.post_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(user)
        return UserModel.model_validate(user)

    @classmethod
    def delete_user_services(cls, db: Session, user_ids: List[int], auth: AuthContext) -> int:
        """
        删除用户（逻辑删除），同时删除用户角色、用户岗位关联

        Args:
            db: 数据库会话
            user_ids: 用户ID列表
            auth: 当前用户

        Returns:
            删除条数
        """
        if auth.user_id in user_ids:
            raise BadRequest("当前用户不能删除")
        for user_id in user_ids:
            user = cls._get_user(db, user_id)
            if user.user_name == settings.ADMIN_USER_NAME:
                raise BadRequest("不允许删除超级管理员用户")

        try:
            count = UserDao.soft_delete_users(db, user_ids, auth.user_name)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"删除用户: {user_ids}")
        return count

    @classmethod
    def reset_password_services(cls, db: Session, reset_data: ResetPasswordModel, auth: AuthContext) -> None:
        user = cls._get_user(db, reset_data.user_id)
        user.password = PasswordUtil.get_password_hash(reset_data.password)
        user.update_by = auth.user_name
        db.commit()
        logger.info(f"用户 {auth.user_name} 重置了用户 {user.user_name} 的密码")

    @classmethod
    def change_status_services(cls, db: Session, status_data: ChangeUserStatusModel, auth: AuthContext) -> None:
        user = cls._get_user(db, status_data.user_id)
        if user.user_name == settings.ADMIN_USER_NAME and status_data.status == '1':
            raise BadRequest("不允许停用超级管理员用户")
        user.status = status_data.status
        user.update_by = auth.user_name
        db.commit()

    @classmethod
    def get_profile_services(cls, db: Session, auth: AuthContext) -> Dict[str, Any]:
        """
        个人中心信息：用户、角色组、岗位组

        Returns:
            {user, roleGroup, postGroup}
        """
        user = cls._get_user(db, auth.user_id)
        roles = UserDao.get_user_roles(db, user.user_id)
        posts = PostDao.get_posts_by_ids(db, UserDao.get_post_ids_by_user(db, user.user_id))
        return {
            'user': cls._to_models(db, [user])[0],
            'roleGroup': ','.join(role.role_name for role in roles),
            'postGroup': ','.join(post.post_name for post in posts),
        }

    @classmethod
    def update_profile_services(cls, db: Session, profile: UserProfileModel, auth: AuthContext) -> UserModel:
        user = cls._get_user(db, auth.user_id)
        for key, value in profile.model_dump().items():
            setattr(user, key, value)
        user.update_by = auth.user_name
        db.commit()
        db.refresh(user)
        return UserModel.model_validate(user)

    @classmethod
    def update_password_services(cls, db: Session, pwd_data: UpdatePasswordModel, auth: AuthContext) -> None:
        """
        修改本人密码

        Raises:
            BadRequest: 旧密码错误或新旧密码相同
        """
        user = cls._get_user(db, auth.user_id)
        if not PasswordUtil.verify_password(pwd_data.old_password, user.password):
            raise BadRequest("修改密码失败，旧密码错误")
        if pwd_data.old_password == pwd_data.new_password:
            raise BadRequest("新密码不能与旧密码相同")
        user.password = PasswordUtil.get_password_hash(pwd_data.new_password)
        user.update_by = auth.user_name
        db.commit()

    @classmethod
    def get_auth_role_services(cls, db: Session, user_id: int) -> Dict[str, Any]:
        """用户授权角色页：用户与全部角色（已分配的 flag 为 True）"""
        user = cls._get_user(db, user_id)
        return {
            'user': UserModel.model_validate(user),
            'roles': cls._flag_roles(db, UserDao.get_role_ids_by_user(db, user_id)),
        }

    # ---------------- 用户-角色 / 用户-岗位关联 ----------------

    @classmethod
    def get_user_role_ids_services(cls, db: Session, user_id: int) -> List[int]:
        cls._get_user(db, user_id)
        return UserDao.get_role_ids_by_user(db, user_id)

    @classmethod
    def assign_roles_services(cls, db: Session, user_id: int, role_ids: List[int]) -> None:
        """
        覆盖用户的角色

        Args:
            db: 数据库会话
            user_id: 用户ID
            role_ids: 角色ID列表
        """
        cls._get_user(db, user_id)
        cls._check_role_ids(db, role_ids)
        try:
            UserDao.replace_user_roles(db, user_id, role_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise

    @classmethod
    def remove_role_services(cls, db: Session, user_id: int, role_id: int) -> int:
        cls._get_user(db, user_id)
        count = UserDao.delete_user_role(db, user_id, role_id)
        db.commit()
        return count

    @classmethod
    def get_user_post_ids_services(cls, db: Session, user_id: int) -> List[int]:
        cls._get_user(db, user_id)
        return UserDao.get_post_ids_by_user(db, user_id)

    @classmethod
    def assign_posts_services(cls, db: Session, user_id: int, post_ids: List[int]) -> None:
        cls._get_user(db, user_id)
        cls._check_post_ids(db, post_ids)
        try:
            UserDao.replace_user_posts(db, user_id, post_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise

    @classmethod
    def remove_post_services(cls, db: Session, user_id: int, post_id: int) -> int:
        cls._get_user(db, user_id)
        count = UserDao.delete_user_post(db, user_id, post_id)
        db.commit()
        return count
