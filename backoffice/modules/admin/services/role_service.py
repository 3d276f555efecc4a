"""
角色管理服务层
"""
import logging
from typing import List, Tuple
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.modules.admin.dao.role_dao import RoleDao
from backoffice.modules.admin.schemas.role import (
    RoleModel, RolePageQueryModel, AddRoleModel, EditRoleModel,
    ChangeRoleStatusModel, RoleDataScopeModel
)
from backoffice.modules.admin.services.role_menu_service import RoleMenuService
from backoffice.modules.admin.utils.auth_util import AuthContext

logger = logging.getLogger(__name__)


class RoleService:
    """
    角色管理模块服务层
    """

    @classmethod
    def get_role_list_services(cls, db: Session, query_params: RolePageQueryModel) -> Tuple[List[RoleModel], int]:
        """
        获取角色分页列表

        Args:
            db: 数据库会话
            query_params: 查询参数对象

        Returns:
            (角色列表, 总数)
        """
        roles, total = RoleDao.get_role_page(db, query_params)
        return [RoleModel.model_validate(role) for role in roles], total

    @classmethod
    def get_role_export_list_services(cls, db: Session, query_params: RolePageQueryModel) -> List[RoleModel]:
        roles = db.execute(RoleDao.build_role_query(query_params)).scalars().all()
        return [RoleModel.model_validate(role) for role in roles]

    @classmethod
    def get_all_roles_services(cls, db: Session) -> List[RoleModel]:
        return [RoleModel.model_validate(role) for role in RoleDao.get_all_normal_roles(db)]

    @classmethod
    def get_role_detail_services(cls, db: Session, role_id: int) -> RoleModel:
        role = RoleDao.get_role_by_id(db, role_id)
        if not role:
            raise ResourceNotFound("角色不存在")
        return RoleModel.model_validate(role)

    @classmethod
    def _check_unique(cls, db: Session, role_name: str, role_key: str, exclude_role_id: int = None) -> None:
        if RoleDao.check_role_name_exists(db, role_name, exclude_role_id):
            raise BadRequest(f"角色名称'{role_name}'已存在")
        if RoleDao.check_role_key_exists(db, role_key, exclude_role_id):
            raise BadRequest(f"角色权限'{role_key}'已存在")

    @classmethod
    def add_role_services(cls, db: Session, role_data: AddRoleModel, auth: AuthContext) -> RoleModel:
        """
        新增角色

        role_key 等于超级管理员键时同时设置 super_admin 标志；
        提供 menu_ids 时在同一事务中分配菜单（含上级菜单）。

        Args:
            db: 数据库会话
            role_data: 角色数据
            auth: 当前用户

        Returns:
            新角色
        """
        cls._check_unique(db, role_data.role_name, role_data.role_key)

        role_dict = role_data.model_dump(exclude={'menu_ids'})
        role_dict['super_admin'] = role_data.role_key == settings.SUPER_ADMIN_ROLE_KEY
        role_dict['tenant_id'] = auth.tenant_id or settings.DEFAULT_TENANT_ID
        role_dict['create_by'] = auth.user_name
        role_dict['update_by'] = auth.user_name

        try:
            role = RoleDao.add_role(db, role_dict)
            if role_data.menu_ids:
                RoleMenuService.assign_menus(db, role.role_id, role_data.menu_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(role)
        logger.info(f"新增角色: {role.role_name}({role.role_key})")
        return RoleModel.model_validate(role)

    @classmethod
    def edit_role_services(cls, db: Session, role_data: EditRoleModel, auth: AuthContext) -> RoleModel:
        """
        修改角色，menu_ids 为 None 时保留原有菜单
        """
        role = RoleDao.get_role_by_id(db, role_data.role_id)
        if not role:
            raise ResourceNotFound("角色不存在")
        cls._check_unique(db, role_data.role_name, role_data.role_key, role.role_id)

        try:
            for key, value in role_data.model_dump(exclude={'role_id', 'menu_ids'}).items():
                setattr(role, key, value)
            role.super_admin = role_data.role_key == settings.SUPER_ADMIN_ROLE_KEY
            role.update_by = auth.user_name
            if role_data.menu_ids is not None:
                RoleMenuService.assign_menus(db, role.role_id, role_data.menu_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(role)
        return RoleModel.model_validate(role)

    @classmethod
    def change_role_status_services(cls, db: Session, status_data: ChangeRoleStatusModel, auth: AuthContext) -> RoleModel:
        role = RoleDao.get_role_by_id(db, status_data.role_id)
        if not role:
            raise ResourceNotFound("角色不存在")
        if role.super_admin and status_data.status == '1':
            raise BadRequest("不允许停用超级管理员角色")
        role.status = status_data.status
        role.update_by = auth.user_name
        db.commit()
        db.refresh(role)
        return RoleModel.model_validate(role)

    @classmethod
    def update_role_data_scope_services(cls, db: Session, scope_data: RoleDataScopeModel, auth: AuthContext) -> RoleModel:
        """
        修改角色数据范围
        """
        role = RoleDao.get_role_by_id(db, scope_data.role_id)
        if not role:
            raise ResourceNotFound("角色不存在")
        role.data_scope = scope_data.data_scope
        if scope_data.dept_check_strictly is not None:
            role.dept_check_strictly = scope_data.dept_check_strictly
        role.update_by = auth.user_name
        db.commit()
        db.refresh(role)
        return RoleModel.model_validate(role)

    @classmethod
    def delete_role_services(cls, db: Session, role_ids: List[int], auth: AuthContext) -> int:
        """
        删除角色（逻辑删除），同时删除角色菜单关联

        任一角色仍分配给用户时整体失败。

        Args:
            db: 数据库会话
            role_ids: 角色ID列表
            auth: 当前用户

        Returns:
            删除条数
        """
        for role_id in role_ids:
            role = RoleDao.get_role_by_id(db, role_id)
            if not role:
                raise ResourceNotFound(f"角色ID {role_id} 不存在")
            if role.super_admin:
                raise BadRequest("不允许删除超级管理员角色")
            if RoleDao.count_role_users(db, role_id) > 0:
                raise BadRequest(f"角色 {role.role_name} 已分配给用户，不能删除")

        try:
            count = RoleDao.soft_delete_roles(db, role_ids, auth.user_name)
            RoleDao.delete_role_menus(db, role_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"删除角色: {role_ids}")
        return count
