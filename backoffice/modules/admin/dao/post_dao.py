"""
岗位管理数据访问对象
"""
from typing import List, Optional, Dict, Any, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import select, and_, func, delete, Select

from backoffice.modules.admin.dao.base_dao import paginate
from backoffice.modules.admin.models.system import SysPost, SysUserPost
from backoffice.modules.admin.schemas.post import PostPageQueryModel


class PostDao:
    """岗位数据访问对象"""

    @classmethod
    def build_post_query(cls, query_params: Optional[PostPageQueryModel] = None) -> Select:
        """
        构造岗位列表查询

        Args:
            query_params: 查询参数

        Returns:
            select语句，按 post_sort 排序
        """
        query = select(SysPost)

        if query_params:
            conditions = []
            if query_params.post_code:
                conditions.append(SysPost.post_code.like(f'%{query_params.post_code}%'))
            if query_params.post_name:
                conditions.append(SysPost.post_name.like(f'%{query_params.post_name}%'))
            if query_params.post_category:
                conditions.append(SysPost.post_category == query_params.post_category)
            if query_params.dept_id:
                conditions.append(SysPost.dept_id == query_params.dept_id)
            if query_params.status is not None:
                conditions.append(SysPost.status == query_params.status)
            if query_params.begin_time:
                conditions.append(SysPost.create_time >= query_params.begin_time)
            if query_params.end_time:
                conditions.append(SysPost.create_time <= query_params.end_time)
            if conditions:
                query = query.where(and_(*conditions))

        return query.order_by(SysPost.post_sort, SysPost.post_id)

    @classmethod
    def get_post_page(cls, db: Session, query_params: PostPageQueryModel) -> Tuple[List[SysPost], int]:
        return paginate(db, cls.build_post_query(query_params), query_params.page_num, query_params.page_size)

    @classmethod
    def get_post_by_id(cls, db: Session, post_id: int) -> Optional[SysPost]:
        """
        根据岗位ID获取岗位信息

        Args:
            db: 数据库会话
            post_id: 岗位ID

        Returns:
            岗位信息
        """
        return db.execute(select(SysPost).where(SysPost.post_id == post_id)).scalar_one_or_none()

    @classmethod
    def get_normal_posts(cls, db: Session) -> List[SysPost]:
        """正常状态的全部岗位"""
        return list(db.execute(
            select(SysPost).where(SysPost.status == '0').order_by(SysPost.post_sort, SysPost.post_id)
        ).scalars().all())

    @classmethod
    def get_posts_by_ids(cls, db: Session, post_ids: List[int]) -> List[SysPost]:
        if not post_ids:
            return []
        return list(db.execute(
            select(SysPost).where(SysPost.post_id.in_(post_ids)).order_by(SysPost.post_sort)
        ).scalars().all())

    @classmethod
    def check_post_code_exists(cls, db: Session, post_code: str, exclude_post_id: Optional[int] = None) -> bool:
        conditions = [SysPost.post_code == post_code]
        if exclude_post_id:
            conditions.append(SysPost.post_id != exclude_post_id)
        return db.execute(select(func.count(SysPost.post_id)).where(and_(*conditions))).scalar() > 0

    @classmethod
    def check_post_name_exists(cls, db: Session, post_name: str, exclude_post_id: Optional[int] = None) -> bool:
        conditions = [SysPost.post_name == post_name]
        if exclude_post_id:
            conditions.append(SysPost.post_id != exclude_post_id)
        return db.execute(select(func.count(SysPost.post_id)).where(and_(*conditions))).scalar() > 0

    @classmethod
    def add_post(cls, db: Session, post_data: Dict[str, Any]) -> SysPost:
        """新增岗位，不提交事务"""
        post = SysPost(**post_data)
        db.add(post)
        db.flush()
        return post

    @classmethod
    def delete_posts(cls, db: Session, post_ids: List[int]) -> int:
        result = db.execute(delete(SysPost).where(SysPost.post_id.in_(post_ids)))
        return result.rowcount

    @classmethod
    def has_users_in_post(cls, db: Session, post_id: int) -> bool:
        """
        检查岗位下是否有用户

        Args:
            db: 数据库会话
            post_id: 岗位ID

        Returns:
            是否有用户
        """
        count = db.execute(
            select(func.count()).select_from(SysUserPost).where(SysUserPost.post_id == post_id)
        ).scalar()
        return count > 0
