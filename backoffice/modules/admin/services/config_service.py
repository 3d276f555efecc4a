"""
参数配置、字典、通知公告服务层
"""
import logging
from typing import List, Tuple
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.modules.admin.dao.config_dao import ConfigDao, DictDao, NoticeDao
from backoffice.modules.admin.schemas.config import (
    ConfigModel, ConfigPageQueryModel, AddConfigModel, EditConfigModel,
    DictTypeModel, DictTypePageQueryModel, AddDictTypeModel, EditDictTypeModel,
    DictDataModel, DictDataPageQueryModel, AddDictDataModel, EditDictDataModel,
    NoticeModel, NoticePageQueryModel, AddNoticeModel, EditNoticeModel
)
from backoffice.modules.admin.utils.auth_util import AuthContext

logger = logging.getLogger(__name__)

BUILTIN_CONFIG_TYPE = 'Y'


def _tenant(auth: AuthContext) -> str:
    return auth.tenant_id or settings.DEFAULT_TENANT_ID


def _commit(db: Session) -> None:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


class ConfigService:
    """
    参数配置服务
    """

    @classmethod
    def get_config_list_services(cls, db: Session, query_params: ConfigPageQueryModel) -> Tuple[List[ConfigModel], int]:
        rows, total = ConfigDao.get_config_page(db, query_params)
        return [ConfigModel.model_validate(row) for row in rows], total

    @classmethod
    def get_config_detail_services(cls, db: Session, config_id: int) -> ConfigModel:
        config = ConfigDao.get_config_by_id(db, config_id)
        if not config:
            raise ResourceNotFound("参数配置不存在")
        return ConfigModel.model_validate(config)

    @classmethod
    def get_config_value_services(cls, db: Session, config_key: str, auth: AuthContext) -> str:
        """
        按键名查询参数值，不存在时返回空串
        """
        config = ConfigDao.get_config_by_key(db, config_key, _tenant(auth))
        return config.config_value if config else ""

    @classmethod
    def add_config_services(cls, db: Session, config_data: AddConfigModel, auth: AuthContext) -> ConfigModel:
        if ConfigDao.check_config_key_exists(db, config_data.config_key, _tenant(auth)):
            raise BadRequest(f"新增参数'{config_data.config_name}'失败，参数键名已存在")
        data = config_data.model_dump()
        data.update(tenant_id=_tenant(auth), create_by=auth.user_name, update_by=auth.user_name)
        config = ConfigDao.add_config(db, data)
        _commit(db)
        db.refresh(config)
        return ConfigModel.model_validate(config)

    @classmethod
    def edit_config_services(cls, db: Session, config_data: EditConfigModel, auth: AuthContext) -> ConfigModel:
        config = ConfigDao.get_config_by_id(db, config_data.config_id)
        if not config:
            raise ResourceNotFound("参数配置不存在")
        if ConfigDao.check_config_key_exists(db, config_data.config_key, config.tenant_id, config.config_id):
            raise BadRequest(f"修改参数'{config_data.config_name}'失败，参数键名已存在")
        for key, value in config_data.model_dump(exclude={'config_id'}).items():
            setattr(config, key, value)
        config.update_by = auth.user_name
        _commit(db)
        db.refresh(config)
        return ConfigModel.model_validate(config)

    @classmethod
    def delete_config_services(cls, db: Session, config_ids: List[int]) -> int:
        """
        删除参数配置，系统内置参数不能删除
        """
        configs = ConfigDao.get_configs_by_ids(db, config_ids)
        if len(configs) != len(set(config_ids)):
            raise ResourceNotFound("参数配置不存在")
        for config in configs:
            if config.config_type == BUILTIN_CONFIG_TYPE:
                raise BadRequest(f"内置参数'{config.config_key}'不能删除")
        count = ConfigDao.delete_configs(db, config_ids)
        _commit(db)
        return count

    @classmethod
    def get_config_export_services(cls, db: Session, query_params: ConfigPageQueryModel) -> List[ConfigModel]:
        return [ConfigModel.model_validate(row) for row in ConfigDao.get_config_list(db, query_params)]


class DictService:
    """
    字典类型与字典数据服务
    """

    @classmethod
    def get_dict_type_list_services(cls, db: Session, query_params: DictTypePageQueryModel) -> Tuple[List[DictTypeModel], int]:
        rows, total = DictDao.get_dict_type_page(db, query_params)
        return [DictTypeModel.model_validate(row) for row in rows], total

    @classmethod
    def get_dict_type_options_services(cls, db: Session) -> List[DictTypeModel]:
        return [DictTypeModel.model_validate(row) for row in DictDao.get_all_dict_types(db)]

    @classmethod
    def get_dict_type_detail_services(cls, db: Session, dict_id: int) -> DictTypeModel:
        dict_type = DictDao.get_dict_type_by_id(db, dict_id)
        if not dict_type:
            raise ResourceNotFound("字典类型不存在")
        return DictTypeModel.model_validate(dict_type)

    @classmethod
    def add_dict_type_services(cls, db: Session, data: AddDictTypeModel, auth: AuthContext) -> DictTypeModel:
        if DictDao.check_dict_type_exists(db, data.dict_type, _tenant(auth)):
            raise BadRequest(f"新增字典'{data.dict_name}'失败，字典类型已存在")
        values = data.model_dump()
        values.update(tenant_id=_tenant(auth), create_by=auth.user_name, update_by=auth.user_name)
        dict_type = DictDao.add_dict_type(db, values)
        _commit(db)
        db.refresh(dict_type)
        return DictTypeModel.model_validate(dict_type)

    @classmethod
    def edit_dict_type_services(cls, db: Session, data: EditDictTypeModel, auth: AuthContext) -> DictTypeModel:
        """
        修改字典类型，类型标识变化时同一事务内同步其字典数据

        Args:
            db: 数据库会话
            data: 字典类型数据
            auth: 当前用户

        Returns:
            修改后的字典类型
        """
        dict_type = DictDao.get_dict_type_by_id(db, data.dict_id)
        if not dict_type:
            raise ResourceNotFound("字典类型不存在")
        if DictDao.check_dict_type_exists(db, data.dict_type, dict_type.tenant_id, dict_type.dict_id):
            raise BadRequest(f"修改字典'{data.dict_name}'失败，字典类型已存在")

        try:
            if data.dict_type != dict_type.dict_type:
                count = DictDao.rename_dict_data_type(db, dict_type.dict_type, data.dict_type, dict_type.tenant_id)
                logger.info(f"字典类型 {dict_type.dict_type} -> {data.dict_type}，同步字典数据 {count} 条")
            for key, value in data.model_dump(exclude={'dict_id'}).items():
                setattr(dict_type, key, value)
            dict_type.update_by = auth.user_name
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(dict_type)
        return DictTypeModel.model_validate(dict_type)

    @classmethod
    def delete_dict_type_services(cls, db: Session, dict_ids: List[int]) -> int:
        for dict_id in dict_ids:
            dict_type = DictDao.get_dict_type_by_id(db, dict_id)
            if not dict_type:
                raise ResourceNotFound(f"字典类型ID {dict_id} 不存在")
            if DictDao.count_dict_data(db, dict_type.dict_type, dict_type.tenant_id) > 0:
                raise BadRequest(f"{dict_type.dict_name}已分配，不能删除")
        count = DictDao.delete_dict_types(db, dict_ids)
        _commit(db)
        return count

    @classmethod
    def get_dict_data_list_services(cls, db: Session, query_params: DictDataPageQueryModel) -> Tuple[List[DictDataModel], int]:
        rows, total = DictDao.get_dict_data_page(db, query_params)
        return [DictDataModel.model_validate(row) for row in rows], total

    @classmethod
    def get_dict_data_by_type_services(cls, db: Session, dict_type: str, auth: AuthContext) -> List[DictDataModel]:
        return [DictDataModel.model_validate(row) for row in DictDao.get_dict_data_by_type(db, dict_type, _tenant(auth))]

    @classmethod
    def get_dict_data_detail_services(cls, db: Session, dict_code: int) -> DictDataModel:
        dict_data = DictDao.get_dict_data_by_code(db, dict_code)
        if not dict_data:
            raise ResourceNotFound("字典数据不存在")
        return DictDataModel.model_validate(dict_data)

    @classmethod
    def add_dict_data_services(cls, db: Session, data: AddDictDataModel, auth: AuthContext) -> DictDataModel:
        if not DictDao.check_dict_type_exists(db, data.dict_type, _tenant(auth)):
            raise BadRequest(f"字典类型'{data.dict_type}'不存在")
        values = data.model_dump()
        values.update(tenant_id=_tenant(auth), create_by=auth.user_name, update_by=auth.user_name)
        dict_data = DictDao.add_dict_data(db, values)
        _commit(db)
        db.refresh(dict_data)
        return DictDataModel.model_validate(dict_data)

    @classmethod
    def edit_dict_data_services(cls, db: Session, data: EditDictDataModel, auth: AuthContext) -> DictDataModel:
        dict_data = DictDao.get_dict_data_by_code(db, data.dict_code)
        if not dict_data:
            raise ResourceNotFound("字典数据不存在")
        for key, value in data.model_dump(exclude={'dict_code'}).items():
            setattr(dict_data, key, value)
        dict_data.update_by = auth.user_name
        _commit(db)
        db.refresh(dict_data)
        return DictDataModel.model_validate(dict_data)

    @classmethod
    def delete_dict_data_services(cls, db: Session, dict_codes: List[int]) -> int:
        count = DictDao.delete_dict_data(db, dict_codes)
        _commit(db)
        return count


class NoticeService:
    """
    通知公告服务
    """

    @classmethod
    def get_notice_list_services(cls, db: Session, query_params: NoticePageQueryModel) -> Tuple[List[NoticeModel], int]:
        rows, total = NoticeDao.get_notice_page(db, query_params)
        return [NoticeModel.model_validate(row) for row in rows], total

    @classmethod
    def get_notice_detail_services(cls, db: Session, notice_id: int) -> NoticeModel:
        notice = NoticeDao.get_notice_by_id(db, notice_id)
        if not notice:
            raise ResourceNotFound("通知公告不存在")
        return NoticeModel.model_validate(notice)

    @classmethod
    def add_notice_services(cls, db: Session, data: AddNoticeModel, auth: AuthContext) -> NoticeModel:
        values = data.model_dump()
        values.update(tenant_id=_tenant(auth), create_by=auth.user_name, update_by=auth.user_name)
        notice = NoticeDao.add_notice(db, values)
        _commit(db)
        db.refresh(notice)
        return NoticeModel.model_validate(notice)

    @classmethod
    def edit_notice_services(cls, db: Session, data: EditNoticeModel, auth: AuthContext) -> NoticeModel:
        notice = NoticeDao.get_notice_by_id(db, data.notice_id)
        if not notice:
            raise ResourceNotFound("通知公告不存在")
        for key, value in data.model_dump(exclude={'notice_id'}).items():
            setattr(notice, key, value)
        notice.update_by = auth.user_name
        _commit(db)
        db.refresh(notice)
        return NoticeModel.model_validate(notice)

    @classmethod
    def delete_notice_services(cls, db: Session, notice_ids: List[int]) -> int:
        count = NoticeDao.delete_notices(db, notice_ids)
        _commit(db)
        return count
