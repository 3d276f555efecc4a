"""
岗位管理控制器
"""
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backoffice.core.permission_dependencies import require_permission
from backoffice.db.session import get_db
from backoffice.modules.admin.schemas.post import PostPageQueryModel, AddPostModel, EditPostModel
from backoffice.modules.admin.services.post_service import PostService
from backoffice.modules.admin.utils.auth_util import AuthContext
from backoffice.modules.admin.utils.common_util import parse_ids
from backoffice.modules.admin.utils.response_util import ResponseUtil


router = APIRouter(prefix="/system/post", tags=["岗位管理"])


@router.get("/list", summary="获取岗位分页列表", dependencies=[Depends(require_permission("system:post:list"))])
def get_post_list(
    page_num: int = Query(1, alias="pageNum", ge=1, description="页码"),
    page_size: int = Query(10, alias="pageSize", ge=1, le=1000, description="每页大小"),
    post_code: Optional[str] = Query(None, alias="postCode", description="岗位编码"),
    post_name: Optional[str] = Query(None, alias="postName", description="岗位名称"),
    post_category: Optional[str] = Query(None, alias="postCategory", description="岗位类别编码"),
    dept_id: Optional[int] = Query(None, alias="deptId", description="部门ID"),
    status: Optional[str] = Query(None, description="状态"),
    begin_time: Optional[datetime] = Query(None, alias="beginTime", description="开始时间"),
    end_time: Optional[datetime] = Query(None, alias="endTime", description="结束时间"),
    db: Session = Depends(get_db)
):
    query_params = PostPageQueryModel(
        page_num=page_num,
        page_size=page_size,
        post_code=post_code,
        post_name=post_name,
        post_category=post_category,
        dept_id=dept_id,
        status=status,
        begin_time=begin_time,
        end_time=end_time
    )
    rows, total = PostService.get_post_list_services(db, query_params)
    return ResponseUtil.page(rows, total)


@router.get("/optionselect", summary="获取岗位选项")
def get_post_options(db: Session = Depends(get_db)):
    return ResponseUtil.success(data=PostService.get_post_options_services(db))


@router.get("/{post_id}", summary="获取岗位详情", dependencies=[Depends(require_permission("system:post:query"))])
def get_post_detail(
    post_id: int,
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=PostService.get_post_detail_services(db, post_id))


@router.post("", summary="新增岗位")
def add_post(
    post_data: AddPostModel,
    auth: AuthContext = Depends(require_permission("system:post:add")),
    db: Session = Depends(get_db)
):
    result = PostService.add_post_services(db, post_data, auth)
    return ResponseUtil.success(data=result, message="新增成功")


@router.put("", summary="修改岗位")
def edit_post(
    post_data: EditPostModel,
    auth: AuthContext = Depends(require_permission("system:post:edit")),
    db: Session = Depends(get_db)
):
    result = PostService.edit_post_services(db, post_data, auth)
    return ResponseUtil.success(data=result, message="修改成功")


@router.delete("/{post_ids}", summary="删除岗位")
def delete_post(
    post_ids: str,
    auth: AuthContext = Depends(require_permission("system:post:remove")),
    db: Session = Depends(get_db)
):
    count = PostService.delete_post_services(db, parse_ids(post_ids))
    return ResponseUtil.success(data=count, message="删除成功")
