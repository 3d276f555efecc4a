"""
参数配置、字典、通知公告数据访问对象
"""
from typing import List, Optional, Dict, Any, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import select, and_, func, delete, update, desc, Select

from backoffice.modules.admin.dao.base_dao import paginate
from backoffice.modules.admin.models.system import SysConfig, SysDictType, SysDictData, SysNotice
from backoffice.modules.admin.schemas.config import (
    ConfigPageQueryModel, DictTypePageQueryModel, DictDataPageQueryModel, NoticePageQueryModel
)


class ConfigDao:
    """参数配置数据访问对象"""

    @classmethod
    def build_config_query(cls, query_params: ConfigPageQueryModel) -> Select:
        stmt = select(SysConfig)
        conditions = []
        if query_params.config_name:
            conditions.append(SysConfig.config_name.like(f'%{query_params.config_name}%'))
        if query_params.config_key:
            conditions.append(SysConfig.config_key.like(f'%{query_params.config_key}%'))
        if query_params.config_type:
            conditions.append(SysConfig.config_type == query_params.config_type)
        if query_params.begin_time:
            conditions.append(SysConfig.create_time >= query_params.begin_time)
        if query_params.end_time:
            conditions.append(SysConfig.create_time <= query_params.end_time)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        return stmt.order_by(SysConfig.config_id)

    @classmethod
    def get_config_page(cls, db: Session, query_params: ConfigPageQueryModel) -> Tuple[List[SysConfig], int]:
        return paginate(db, cls.build_config_query(query_params), query_params.page_num, query_params.page_size)

    @classmethod
    def get_config_list(cls, db: Session, query_params: ConfigPageQueryModel) -> List[SysConfig]:
        return list(db.execute(cls.build_config_query(query_params)).scalars().all())

    @classmethod
    def get_config_by_id(cls, db: Session, config_id: int) -> Optional[SysConfig]:
        return db.execute(select(SysConfig).where(SysConfig.config_id == config_id)).scalar_one_or_none()

    @classmethod
    def get_config_by_key(cls, db: Session, config_key: str, tenant_id: str) -> Optional[SysConfig]:
        """
        按租户与键名查询参数

        Args:
            db: 数据库会话
            config_key: 参数键名
            tenant_id: 租户编号

        Returns:
            参数配置
        """
        return db.execute(
            select(SysConfig).where(and_(SysConfig.config_key == config_key, SysConfig.tenant_id == tenant_id))
        ).scalar_one_or_none()

    @classmethod
    def check_config_key_exists(cls, db: Session, config_key: str, tenant_id: str,
                                exclude_config_id: Optional[int] = None) -> bool:
        conditions = [SysConfig.config_key == config_key, SysConfig.tenant_id == tenant_id]
        if exclude_config_id:
            conditions.append(SysConfig.config_id != exclude_config_id)
        return db.execute(select(func.count(SysConfig.config_id)).where(and_(*conditions))).scalar() > 0

    @classmethod
    def get_configs_by_ids(cls, db: Session, config_ids: List[int]) -> List[SysConfig]:
        if not config_ids:
            return []
        return list(db.execute(select(SysConfig).where(SysConfig.config_id.in_(config_ids))).scalars().all())

    @classmethod
    def add_config(cls, db: Session, config_data: Dict[str, Any]) -> SysConfig:
        config = SysConfig(**config_data)
        db.add(config)
        db.flush()
        return config

    @classmethod
    def delete_configs(cls, db: Session, config_ids: List[int]) -> int:
        return db.execute(delete(SysConfig).where(SysConfig.config_id.in_(config_ids))).rowcount


class DictDao:
    """字典类型与字典数据访问对象"""

    @classmethod
    def get_dict_type_page(cls, db: Session, query_params: DictTypePageQueryModel) -> Tuple[List[SysDictType], int]:
        stmt = select(SysDictType)
        conditions = []
        if query_params.dict_name:
            conditions.append(SysDictType.dict_name.like(f'%{query_params.dict_name}%'))
        if query_params.dict_type:
            conditions.append(SysDictType.dict_type.like(f'%{query_params.dict_type}%'))
        if query_params.begin_time:
            conditions.append(SysDictType.create_time >= query_params.begin_time)
        if query_params.end_time:
            conditions.append(SysDictType.create_time <= query_params.end_time)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        return paginate(db, stmt.order_by(SysDictType.dict_id), query_params.page_num, query_params.page_size)

    @classmethod
    def get_all_dict_types(cls, db: Session) -> List[SysDictType]:
        return list(db.execute(select(SysDictType).order_by(SysDictType.dict_id)).scalars().all())

    @classmethod
    def get_dict_type_by_id(cls, db: Session, dict_id: int) -> Optional[SysDictType]:
        return db.execute(select(SysDictType).where(SysDictType.dict_id == dict_id)).scalar_one_or_none()

    @classmethod
    def check_dict_type_exists(cls, db: Session, dict_type: str, tenant_id: str,
                               exclude_dict_id: Optional[int] = None) -> bool:
        """
        检查字典类型在租户内是否已存在

        Args:
            db: 数据库会话
            dict_type: 字典类型
            tenant_id: 租户编号
            exclude_dict_id: 排除的字典主键

        Returns:
            是否存在
        """
        conditions = [SysDictType.dict_type == dict_type, SysDictType.tenant_id == tenant_id]
        if exclude_dict_id:
            conditions.append(SysDictType.dict_id != exclude_dict_id)
        return db.execute(select(func.count(SysDictType.dict_id)).where(and_(*conditions))).scalar() > 0

    @classmethod
    def add_dict_type(cls, db: Session, data: Dict[str, Any]) -> SysDictType:
        dict_type = SysDictType(**data)
        db.add(dict_type)
        db.flush()
        return dict_type

    @classmethod
    def rename_dict_data_type(cls, db: Session, old_type: str, new_type: str, tenant_id: str) -> int:
        """字典类型改名时同步字典数据，不提交事务"""
        result = db.execute(
            update(SysDictData)
            .where(and_(SysDictData.dict_type == old_type, SysDictData.tenant_id == tenant_id))
            .values(dict_type=new_type)
        )
        return result.rowcount

    @classmethod
    def delete_dict_types(cls, db: Session, dict_ids: List[int]) -> int:
        return db.execute(delete(SysDictType).where(SysDictType.dict_id.in_(dict_ids))).rowcount

    @classmethod
    def count_dict_data(cls, db: Session, dict_type: str, tenant_id: str) -> int:
        return db.execute(
            select(func.count(SysDictData.dict_code))
            .where(and_(SysDictData.dict_type == dict_type, SysDictData.tenant_id == tenant_id))
        ).scalar()

    @classmethod
    def get_dict_data_page(cls, db: Session, query_params: DictDataPageQueryModel) -> Tuple[List[SysDictData], int]:
        stmt = select(SysDictData)
        conditions = []
        if query_params.dict_type:
            conditions.append(SysDictData.dict_type == query_params.dict_type)
        if query_params.dict_label:
            conditions.append(SysDictData.dict_label.like(f'%{query_params.dict_label}%'))
        if conditions:
            stmt = stmt.where(and_(*conditions))
        stmt = stmt.order_by(SysDictData.dict_sort, SysDictData.dict_code)
        return paginate(db, stmt, query_params.page_num, query_params.page_size)

    @classmethod
    def get_dict_data_by_type(cls, db: Session, dict_type: str, tenant_id: str) -> List[SysDictData]:
        """按 dict_sort 升序返回类型下的字典数据"""
        return list(db.execute(
            select(SysDictData)
            .where(and_(SysDictData.dict_type == dict_type, SysDictData.tenant_id == tenant_id))
            .order_by(SysDictData.dict_sort, SysDictData.dict_code)
        ).scalars().all())

    @classmethod
    def get_dict_data_by_code(cls, db: Session, dict_code: int) -> Optional[SysDictData]:
        return db.execute(select(SysDictData).where(SysDictData.dict_code == dict_code)).scalar_one_or_none()

    @classmethod
    def add_dict_data(cls, db: Session, data: Dict[str, Any]) -> SysDictData:
        dict_data = SysDictData(**data)
        db.add(dict_data)
        db.flush()
        return dict_data

    @classmethod
    def delete_dict_data(cls, db: Session, dict_codes: List[int]) -> int:
        return db.execute(delete(SysDictData).where(SysDictData.dict_code.in_(dict_codes))).rowcount


class NoticeDao:
    """通知公告数据访问对象"""

    @classmethod
    def get_notice_page(cls, db: Session, query_params: NoticePageQueryModel) -> Tuple[List[SysNotice], int]:
        stmt = select(SysNotice)
        conditions = []
        if query_params.notice_title:
            conditions.append(SysNotice.notice_title.like(f'%{query_params.notice_title}%'))
        if query_params.notice_type:
            conditions.append(SysNotice.notice_type == query_params.notice_type)
        if query_params.create_by:
            conditions.append(SysNotice.create_by.like(f'%{query_params.create_by}%'))
        if conditions:
            stmt = stmt.where(and_(*conditions))
        stmt = stmt.order_by(desc(SysNotice.create_time), desc(SysNotice.notice_id))
        return paginate(db, stmt, query_params.page_num, query_params.page_size)

    @classmethod
    def get_notice_by_id(cls, db: Session, notice_id: int) -> Optional[SysNotice]:
        return db.execute(select(SysNotice).where(SysNotice.notice_id == notice_id)).scalar_one_or_none()

    @classmethod
    def add_notice(cls, db: Session, data: Dict[str, Any]) -> SysNotice:
        notice = SysNotice(**data)
        db.add(notice)
        db.flush()
        return notice

    @classmethod
    def delete_notices(cls, db: Session, notice_ids: List[int]) -> int:
        return db.execute(delete(SysNotice).where(SysNotice.notice_id.in_(notice_ids))).rowcount
