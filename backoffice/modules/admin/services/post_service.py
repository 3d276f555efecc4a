"""
岗位管理服务层
"""
import logging
from typing import List, Tuple
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.modules.admin.dao.post_dao import PostDao
from backoffice.modules.admin.schemas.post import PostModel, PostPageQueryModel, AddPostModel, EditPostModel
from backoffice.modules.admin.utils.auth_util import AuthContext

logger = logging.getLogger(__name__)


class PostService:
    """
    岗位管理模块服务层
    """

    @classmethod
    def get_post_list_services(cls, db: Session, query_params: PostPageQueryModel) -> Tuple[List[PostModel], int]:
        posts, total = PostDao.get_post_page(db, query_params)
        return [PostModel.model_validate(post) for post in posts], total

    @classmethod
    def get_post_options_services(cls, db: Session) -> List[PostModel]:
        return [PostModel.model_validate(post) for post in PostDao.get_normal_posts(db)]

    @classmethod
    def get_post_detail_services(cls, db: Session, post_id: int) -> PostModel:
        post = PostDao.get_post_by_id(db, post_id)
        if not post:
            raise ResourceNotFound("岗位不存在")
        return PostModel.model_validate(post)

    @classmethod
    def _check_unique(cls, db: Session, post_code: str, post_name: str, exclude_post_id: int = None) -> None:
        if PostDao.check_post_code_exists(db, post_code, exclude_post_id):
            raise BadRequest(f"岗位编码'{post_code}'已存在")
        if PostDao.check_post_name_exists(db, post_name, exclude_post_id):
            raise BadRequest(f"岗位名称'{post_name}'已存在")

    @classmethod
    def add_post_services(cls, db: Session, post_data: AddPostModel, auth: AuthContext) -> PostModel:
        """
        新增岗位

        Args:
            db: 数据库会话
            post_data: 岗位数据
            auth: 当前用户

        Returns:
            新岗位
        """
        cls._check_unique(db, post_data.post_code, post_data.post_name)
        post_dict = post_data.model_dump()
        post_dict['tenant_id'] = auth.tenant_id or settings.DEFAULT_TENANT_ID
        post_dict['create_by'] = auth.user_name
        post_dict['update_by'] = auth.user_name
        try:
            post = PostDao.add_post(db, post_dict)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(post)
        return PostModel.model_validate(post)

    @classmethod
    def edit_post_services(cls, db: Session, post_data: EditPostModel, auth: AuthContext) -> PostModel:
        post = PostDao.get_post_by_id(db, post_data.post_id)
        if not post:
            raise ResourceNotFound("岗位不存在")
        cls._check_unique(db, post_data.post_code, post_data.post_name, post.post_id)
        for key, value in post_data.model_dump(exclude={'post_id'}).items():
            setattr(post, key, value)
        post.update_by = auth.user_name
        db.commit()
        db.refresh(post)
        return PostModel.model_validate(post)

    @classmethod
    def delete_post_services(cls, db: Session, post_ids: List[int]) -> int:
        """
        删除岗位，已分配给用户的岗位不能删除
        """
        for post_id in post_ids:
            post = PostDao.get_post_by_id(db, post_id)
            if not post:
                raise ResourceNotFound(f"岗位ID {post_id} 不存在")
            if PostDao.has_users_in_post(db, post_id):
                raise BadRequest(f"岗位 {post.post_name} 已分配给用户，不能删除")
        try:
            count = PostDao.delete_posts(db, post_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"删除岗位: {post_ids}")
        return count
