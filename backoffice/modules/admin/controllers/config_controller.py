"""
参数配置、字典、通知公告控制器
"""
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backoffice.core.permission_dependencies import get_auth_context, require_permission
from backoffice.db.session import get_db
from backoffice.modules.admin.schemas.config import (
    ConfigPageQueryModel, AddConfigModel, EditConfigModel,
    DictTypePageQueryModel, AddDictTypeModel, EditDictTypeModel,
    DictDataPageQueryModel, AddDictDataModel, EditDictDataModel,
    NoticePageQueryModel, AddNoticeModel, EditNoticeModel
)
from backoffice.modules.admin.services.config_service import ConfigService, DictService, NoticeService
from backoffice.modules.admin.utils.auth_util import AuthContext
from backoffice.modules.admin.utils.common_util import parse_ids
from backoffice.modules.admin.utils.excel_util import ExcelUtil
from backoffice.modules.admin.utils.response_util import ResponseUtil


config_router = APIRouter(prefix="/system/config", tags=["参数配置"])
dict_router = APIRouter(prefix="/system/dict", tags=["字典管理"])
notice_router = APIRouter(prefix="/system/notice", tags=["通知公告"])

CONFIG_EXPORT_COLUMNS = {
    'config_id': '参数主键',
    'config_name': '参数名称',
    'config_key': '参数键名',
    'config_value': '参数键值',
    'config_type': '系统内置',
    'remark': '备注',
    'create_time': '创建时间',
}


# ===========================================
# 参数配置
# ===========================================

@config_router.get("/list", summary="获取参数配置分页列表",
                   dependencies=[Depends(require_permission("system:config:list"))])
def get_config_list(
    page_num: int = Query(1, alias="pageNum", ge=1, description="页码"),
    page_size: int = Query(10, alias="pageSize", ge=1, le=1000, description="每页大小"),
    config_name: Optional[str] = Query(None, alias="configName", description="参数名称"),
    config_key: Optional[str] = Query(None, alias="configKey", description="参数键名"),
    config_type: Optional[str] = Query(None, alias="configType", description="系统内置"),
    begin_time: Optional[datetime] = Query(None, alias="beginTime", description="开始时间"),
    end_time: Optional[datetime] = Query(None, alias="endTime", description="结束时间"),
    db: Session = Depends(get_db)
):
    query_params = ConfigPageQueryModel(
        page_num=page_num,
        page_size=page_size,
        config_name=config_name,
        config_key=config_key,
        config_type=config_type,
        begin_time=begin_time,
        end_time=end_time
    )
    rows, total = ConfigService.get_config_list_services(db, query_params)
    return ResponseUtil.page(rows, total)


@config_router.get("/configKey/{config_key}", summary="按键名获取参数值")
def get_config_value(
    config_key: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=ConfigService.get_config_value_services(db, config_key, auth))


@config_router.post("/export", summary="导出参数配置")
def export_configs(
    query_params: Optional[ConfigPageQueryModel] = None,
    auth: AuthContext = Depends(require_permission("system:config:export")),
    db: Session = Depends(get_db)
):
    configs = ConfigService.get_config_export_services(db, query_params or ConfigPageQueryModel())
    rows = [config.model_dump() for config in configs]
    return ExcelUtil.export_response(rows, CONFIG_EXPORT_COLUMNS, "config", sheet_name="参数数据")


@config_router.get("/{config_id}", summary="获取参数配置详情",
                   dependencies=[Depends(require_permission("system:config:query"))])
def get_config_detail(
    config_id: int,
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=ConfigService.get_config_detail_services(db, config_id))


@config_router.post("", summary="新增参数配置")
def add_config(
    config_data: AddConfigModel,
    auth: AuthContext = Depends(require_permission("system:config:add")),
    db: Session = Depends(get_db)
):
    result = ConfigService.add_config_services(db, config_data, auth)
    return ResponseUtil.success(data=result, message="新增成功")


@config_router.put("", summary="修改参数配置")
def edit_config(
    config_data: EditConfigModel,
    auth: AuthContext = Depends(require_permission("system:config:edit")),
    db: Session = Depends(get_db)
):
    result = ConfigService.edit_config_services(db, config_data, auth)
    return ResponseUtil.success(data=result, message="修改成功")


@config_router.delete("/{config_ids}", summary="删除参数配置")
def delete_config(
    config_ids: str,
    auth: AuthContext = Depends(require_permission("system:config:remove")),
    db: Session = Depends(get_db)
):
    """
    删除参数配置，系统内置参数不能删除
    """
    count = ConfigService.delete_config_services(db, parse_ids(config_ids))
    return ResponseUtil.success(data=count, message="删除成功")


# ===========================================
# 字典类型
# ===========================================

@dict_router.get("/dictType/{dict_type}", summary="按类型获取字典数据")
def get_dict_data_by_type(
    dict_type: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """
    获取字典类型下的数据，按 dictSort 升序
    """
    return ResponseUtil.success(data=DictService.get_dict_data_by_type_services(db, dict_type, auth))


@dict_router.get("/type/list", summary="获取字典类型分页列表",
                 dependencies=[Depends(require_permission("system:dict:list"))])
def get_dict_type_list(
    page_num: int = Query(1, alias="pageNum", ge=1, description="页码"),
    page_size: int = Query(10, alias="pageSize", ge=1, le=1000, description="每页大小"),
    dict_name: Optional[str] = Query(None, alias="dictName", description="字典名称"),
    dict_type: Optional[str] = Query(None, alias="dictType", description="字典类型"),
    begin_time: Optional[datetime] = Query(None, alias="beginTime", description="开始时间"),
    end_time: Optional[datetime] = Query(None, alias="endTime", description="结束时间"),
    db: Session = Depends(get_db)
):
    query_params = DictTypePageQueryModel(
        page_num=page_num,
        page_size=page_size,
        dict_name=dict_name,
        dict_type=dict_type,
        begin_time=begin_time,
        end_time=end_time
    )
    rows, total = DictService.get_dict_type_list_services(db, query_params)
    return ResponseUtil.page(rows, total)


@dict_router.get("/type/optionselect", summary="获取字典类型选项")
def get_dict_type_options(db: Session = Depends(get_db)):
    return ResponseUtil.success(data=DictService.get_dict_type_options_services(db))


@dict_router.get("/type/{dict_id}", summary="获取字典类型详情",
                 dependencies=[Depends(require_permission("system:dict:query"))])
def get_dict_type_detail(
    dict_id: int,
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=DictService.get_dict_type_detail_services(db, dict_id))


@dict_router.post("/type", summary="新增字典类型")
def add_dict_type(
    data: AddDictTypeModel,
    auth: AuthContext = Depends(require_permission("system:dict:add")),
    db: Session = Depends(get_db)
):
    result = DictService.add_dict_type_services(db, data, auth)
    return ResponseUtil.success(data=result, message="新增成功")


@dict_router.put("/type", summary="修改字典类型")
def edit_dict_type(
    data: EditDictTypeModel,
    auth: AuthContext = Depends(require_permission("system:dict:edit")),
    db: Session = Depends(get_db)
):
    """
    修改字典类型，类型标识变化时同步其字典数据
    """
    result = DictService.edit_dict_type_services(db, data, auth)
    return ResponseUtil.success(data=result, message="修改成功")


@dict_router.delete("/type/{dict_ids}", summary="删除字典类型")
def delete_dict_type(
    dict_ids: str,
    auth: AuthContext = Depends(require_permission("system:dict:remove")),
    db: Session = Depends(get_db)
):
    count = DictService.delete_dict_type_services(db, parse_ids(dict_ids))
    return ResponseUtil.success(data=count, message="删除成功")


# ===========================================
# 字典数据
# ===========================================

@dict_router.get("/data/list", summary="获取字典数据分页列表",
                 dependencies=[Depends(require_permission("system:dict:list"))])
def get_dict_data_list(
    page_num: int = Query(1, alias="pageNum", ge=1, description="页码"),
    page_size: int = Query(10, alias="pageSize", ge=1, le=1000, description="每页大小"),
    dict_type: Optional[str] = Query(None, alias="dictType", description="字典类型"),
    dict_label: Optional[str] = Query(None, alias="dictLabel", description="字典标签"),
    db: Session = Depends(get_db)
):
    query_params = DictDataPageQueryModel(
        page_num=page_num,
        page_size=page_size,
        dict_type=dict_type,
        dict_label=dict_label
    )
    rows, total = DictService.get_dict_data_list_services(db, query_params)
    return ResponseUtil.page(rows, total)


@dict_router.get("/data/{dict_code}", summary="获取字典数据详情",
                 dependencies=[Depends(require_permission("system:dict:query"))])
def get_dict_data_detail(
    dict_code: int,
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=DictService.get_dict_data_detail_services(db, dict_code))


@dict_router.post("/data", summary="新增字典数据")
def add_dict_data(
    data: AddDictDataModel,
    auth: AuthContext = Depends(require_permission("system:dict:add")),
    db: Session = Depends(get_db)
):
    result = DictService.add_dict_data_services(db, data, auth)
    return ResponseUtil.success(data=result, message="新增成功")


@dict_router.put("/data", summary="修改字典数据")
def edit_dict_data(
    data: EditDictDataModel,
    auth: AuthContext = Depends(require_permission("system:dict:edit")),
    db: Session = Depends(get_db)
):
    result = DictService.edit_dict_data_services(db, data, auth)
    return ResponseUtil.success(data=result, message="修改成功")


@dict_router.delete("/data/{dict_codes}", summary="删除字典数据")
def delete_dict_data(
    dict_codes: str,
    auth: AuthContext = Depends(require_permission("system:dict:remove")),
    db: Session = Depends(get_db)
):
    count = DictService.delete_dict_data_services(db, parse_ids(dict_codes))
    return ResponseUtil.success(data=count, message="删除成功")


# ===========================================
# 通知公告
# ===========================================

@notice_router.get("/list", summary="获取通知公告分页列表",
                   dependencies=[Depends(require_permission("system:notice:list"))])
def get_notice_list(
    page_num: int = Query(1, alias="pageNum", ge=1, description="页码"),
    page_size: int = Query(10, alias="pageSize", ge=1, le=1000, description="每页大小"),
    notice_title: Optional[str] = Query(None, alias="noticeTitle", description="公告标题"),
    notice_type: Optional[str] = Query(None, alias="noticeType", description="公告类型"),
    create_by: Optional[str] = Query(None, alias="createBy", description="创建者"),
    db: Session = Depends(get_db)
):
    query_params = NoticePageQueryModel(
        page_num=page_num,
        page_size=page_size,
        notice_title=notice_title,
        notice_type=notice_type,
        create_by=create_by
    )
    rows, total = NoticeService.get_notice_list_services(db, query_params)
    return ResponseUtil.page(rows, total)


@notice_router.get("/{notice_id}", summary="获取通知公告详情",
                   dependencies=[Depends(require_permission("system:notice:query"))])
def get_notice_detail(
    notice_id: int,
    db: Session = Depends(get_db)
):
    return ResponseUtil.success(data=NoticeService.get_notice_detail_services(db, notice_id))


@notice_router.post("", summary="新增通知公告")
def add_notice(
    data: AddNoticeModel,
    auth: AuthContext = Depends(require_permission("system:notice:add")),
    db: Session = Depends(get_db)
):
    result = NoticeService.add_notice_services(db, data, auth)
    return ResponseUtil.success(data=result, message="新增成功")


@notice_router.put("", summary="修改通知公告")
def edit_notice(
    data: EditNoticeModel,
    auth: AuthContext = Depends(require_permission("system:notice:edit")),
    db: Session = Depends(get_db)
):
    result = NoticeService.edit_notice_services(db, data, auth)
    return ResponseUtil.success(data=result, message="修改成功")


@notice_router.delete("/{notice_ids}", summary="删除通知公告")
def delete_notice(
    notice_ids: str,
    auth: AuthContext = Depends(require_permission("system:notice:remove")),
    db: Session = Depends(get_db)
):
    count = NoticeService.delete_notice_services(db, parse_ids(notice_ids))
    return ResponseUtil.success(data=count, message="删除成功")
