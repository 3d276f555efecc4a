"""
部门管理服务层
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.modules.admin.dao.dept_dao import DeptDao
from backoffice.modules.admin.models.system import SysDept
from backoffice.modules.admin.schemas.common import TreeOptionModel
from backoffice.modules.admin.schemas.dept import (
    DeptModel, DeptQueryModel, AddDeptModel, EditDeptModel
)
from backoffice.modules.admin.utils.auth_util import AuthContext
from backoffice.modules.admin.utils.tree_util import TreeArena

logger = logging.getLogger(__name__)


def child_ancestors(parent: Optional[SysDept]) -> str:
    """
    计算挂在 parent 下的部门的祖级列表

    根部门（parent 为 None）为空串；父部门祖级为空时只有父部门ID。
    """
    if parent is None:
        return ''
    if parent.ancestors:
        return f"{parent.ancestors},{parent.dept_id}"
    return str(parent.dept_id)


class DeptService:
    """
    部门管理模块服务层
    """

    @classmethod
    def _arena(cls, depts: List[SysDept]) -> TreeArena:
        return TreeArena(
            depts,
            key=lambda d: d.dept_id,
            parent_key=lambda d: d.parent_id,
            order_key=lambda d: (d.order_num or 0, d.dept_id)
        )

    @classmethod
    def get_dept_tree_services(cls, db: Session, query_params: Optional[DeptQueryModel] = None) -> List[DeptModel]:
        """
        获取部门树

        未删除的部门按 parent_id 组装，根为 parent_id = 0，同级按 order_num 升序。
        带过滤条件时，父部门被过滤掉的部门提升为根节点。

        Args:
            db: 数据库会话
            query_params: 查询参数对象

        Returns:
            部门树
        """
        depts = DeptDao.get_dept_list(db, query_params)
        filtered = query_params is not None and any(
            [query_params.dept_name, query_params.dept_category, query_params.status]
        )

        def convert(dept: SysDept, children: List[DeptModel]) -> DeptModel:
            node = DeptModel.model_validate(dept)
            node.children = children
            return node

        return cls._arena(depts).build(convert, root_id=0, orphans_as_roots=filtered)

    @classmethod
    def get_dept_list_services(cls, db: Session, query_params: Optional[DeptQueryModel] = None) -> List[DeptModel]:
        """
        获取部门扁平列表
        """
        return [DeptModel.model_validate(dept) for dept in DeptDao.get_dept_list(db, query_params)]

    @classmethod
    def find_child_depts(cls, db: Session, dept_id: int) -> List[SysDept]:
        """
        获取部门的全部子孙部门（不含自身）

        Args:
            db: 数据库会话
            dept_id: 部门ID

        Returns:
            子孙部门列表，深度优先
        """
        return cls._arena(DeptDao.get_dept_list(db)).descendants(dept_id)

    @classmethod
    def find_child_dept_ids(cls, db: Session, dept_id: int) -> List[int]:
        return [dept.dept_id for dept in cls.find_child_depts(db, dept_id)]

    @classmethod
    def find_options_by_ids(cls, db: Session, dept_ids: List[int]) -> List[DeptModel]:
        """按ID批量获取部门"""
        return [DeptModel.model_validate(dept) for dept in DeptDao.get_depts_by_ids(db, dept_ids)]

    @classmethod
    def find_list_exclude_child(cls, db: Session, dept_id: int) -> List[DeptModel]:
        """
        获取部门列表（排除指定部门及其子孙部门），用于选择上级部门

        Args:
            db: 数据库会话
            dept_id: 要排除的部门ID

        Returns:
            部门列表
        """
        depts = DeptDao.get_dept_list(db)
        arena = cls._arena(depts)
        exclude_ids = set(arena.descendant_ids(dept_id))
        exclude_ids.add(dept_id)
        return [DeptModel.model_validate(dept) for dept in depts if dept.dept_id not in exclude_ids]

    @classmethod
    def build_dept_tree_options(cls, depts: List[SysDept]) -> List[TreeOptionModel]:
        """
        部门树选择项，停用部门标记为 disabled
        """
        def convert(dept: SysDept, children: List[TreeOptionModel]) -> TreeOptionModel:
            return TreeOptionModel(
                id=dept.dept_id,
                label=dept.dept_name,
                parent_id=dept.parent_id,
                weight=dept.order_num or 0,
                disabled=dept.status == '1',
                children=children or None
            )

        return cls._arena(depts).build(convert, root_id=0, orphans_as_roots=True)

    @classmethod
    def get_dept_tree_options_services(cls, db: Session, query_params: Optional[DeptQueryModel] = None) -> List[TreeOptionModel]:
        return cls.build_dept_tree_options(DeptDao.get_dept_list(db, query_params))

    @classmethod
    def get_dept_detail_services(cls, db: Session, dept_id: int) -> DeptModel:
        """
        获取部门详细信息

        Raises:
            ResourceNotFound: 部门不存在
        """
        dept = DeptDao.get_dept_by_id(db, dept_id)
        if not dept:
            raise ResourceNotFound("部门不存在")
        return DeptModel.model_validate(dept)

    @classmethod
    def _resolve_parent(cls, db: Session, parent_id: int) -> Optional[SysDept]:
        if not parent_id:
            return None
        parent = DeptDao.get_dept_by_id(db, parent_id)
        if not parent:
            raise ResourceNotFound("父部门不存在")
        return parent

    @classmethod
    def add_dept_services(cls, db: Session, dept_data: AddDeptModel, auth: AuthContext) -> DeptModel:
        """
        新增部门

        Args:
            db: 数据库会话
            dept_data: 部门数据
            auth: 当前用户

        Returns:
            新部门

        Raises:
            BadRequest: 同级部门重名
            ResourceNotFound: 父部门不存在
        """
        if DeptDao.check_dept_name_exists(db, dept_data.dept_name, dept_data.parent_id):
            raise BadRequest("同级部门下已存在相同名称的部门")

        parent = cls._resolve_parent(db, dept_data.parent_id)

        dept_dict = dept_data.model_dump()
        dept_dict['ancestors'] = child_ancestors(parent)
        dept_dict['tenant_id'] = auth.tenant_id or settings.DEFAULT_TENANT_ID
        dept_dict['create_by'] = auth.user_name
        dept_dict['update_by'] = auth.user_name

        try:
            new_dept = DeptDao.add_dept(db, dept_dict)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(new_dept)
        logger.info(f"新增部门: {new_dept.dept_name}({new_dept.dept_id}) ancestors={new_dept.ancestors}")
        return DeptModel.model_validate(new_dept)

    @classmethod
    def edit_dept_services(cls, db: Session, dept_data: EditDeptModel, auth: AuthContext) -> DeptModel:
        """
        修改部门

        上级部门变化时先校验不能挂到自身或自身子孙下，再在同一事务中重算本部门
        与全部子孙部门的祖级列表：子孙部门的祖级以旧前缀开头的部分替换为新前缀。

        Args:
            db: 数据库会话
            dept_data: 部门数据
            auth: 当前用户

        Returns:
            修改后的部门

        Raises:
            ResourceNotFound: 部门或父部门不存在
            BadRequest: 重名或上级部门非法
        """
        dept = DeptDao.get_dept_by_id(db, dept_data.dept_id)
        if not dept:
            raise ResourceNotFound("部门不存在")

        parent_changed = dept_data.parent_id != dept.parent_id
        if parent_changed:
            if dept_data.parent_id == dept.dept_id:
                raise BadRequest("上级部门不能是自己")
            if dept_data.parent_id in set(cls.find_child_dept_ids(db, dept.dept_id)):
                raise BadRequest("上级部门不能是自己的子部门")

        if (dept_data.dept_name != dept.dept_name or parent_changed) and DeptDao.check_dept_name_exists(
            db, dept_data.dept_name, dept_data.parent_id, dept.dept_id
        ):
            raise BadRequest("同级部门下已存在相同名称的部门")

        try:
            if parent_changed:
                parent = cls._resolve_parent(db, dept_data.parent_id)
                new_ancestors = child_ancestors(parent)
                cls._rewrite_descendant_ancestors(db, dept, new_ancestors, auth.user_name)
                dept.ancestors = new_ancestors

            for key, value in dept_data.model_dump(exclude={'dept_id'}).items():
                setattr(dept, key, value)
            dept.update_by = auth.user_name
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(dept)
        return DeptModel.model_validate(dept)

    @classmethod
    def _rewrite_descendant_ancestors(cls, db: Session, dept: SysDept, new_ancestors: str, update_by: str) -> None:
        """
        重写子孙部门的祖级列表，不提交事务

        Args:
            db: 数据库会话
            dept: 被移动的部门（ancestors 仍为旧值）
            new_ancestors: 被移动部门的新祖级列表
            update_by: 更新者
        """
        old_prefix = f"{dept.ancestors},{dept.dept_id}" if dept.ancestors else str(dept.dept_id)
        new_prefix = f"{new_ancestors},{dept.dept_id}" if new_ancestors else str(dept.dept_id)

        descendant_ids = cls.find_child_dept_ids(db, dept.dept_id)
        for child in DeptDao.get_depts_for_update(db, descendant_ids):
            current = child.ancestors or ''
            if current == old_prefix or current.startswith(old_prefix + ','):
                child.ancestors = new_prefix + current[len(old_prefix):]
                child.update_by = update_by
            else:
                logger.warning(f"部门 {child.dept_id} 祖级列表 '{current}' 与父级前缀 '{old_prefix}' 不一致，跳过")
        db.flush()

    @classmethod
    def delete_dept_services(cls, db: Session, dept_ids: List[int], auth: AuthContext) -> int:
        """
        删除部门（逻辑删除）

        任一部门存在未删除的直接子部门或用户时整体失败，不级联删除。

        Args:
            db: 数据库会话
            dept_ids: 部门ID列表
            auth: 当前用户

        Returns:
            删除条数
        """
        for dept_id in dept_ids:
            dept = DeptDao.get_dept_by_id(db, dept_id)
            if not dept:
                raise ResourceNotFound(f"部门ID {dept_id} 不存在")
            if DeptDao.count_children(db, dept_id) > 0:
                raise BadRequest(f"部门 {dept.dept_name} 存在下级部门，不允许删除")
            if DeptDao.check_dept_has_users(db, dept_id):
                raise BadRequest(f"部门 {dept.dept_name} 存在用户，不允许删除")

        try:
            count = DeptDao.soft_delete_depts(db, dept_ids, auth.user_name)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"删除部门: {dept_ids}")
        return count
