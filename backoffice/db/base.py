# SQLAlchemy基类定义
from sqlalchemy import Column, BigInteger, Integer, String, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# 创建基类
Base = declarative_base()

# 主键类型：MySQL使用BIGINT，SQLite需INTEGER才能自增
IdType = BigInteger().with_variant(Integer, "sqlite")

# 删除标志取值
DEL_FLAG_EXIST = '0'
DEL_FLAG_DELETED = '2'


class SoftDeleteMixin:
    """逻辑删除字段，DAO层查询统一通过 base_dao.active_select 过滤"""
    del_flag = Column(String(1), default=DEL_FLAG_EXIST, nullable=False, comment="删除标志（0代表存在 2代表删除）")


class AuditMixin:
    """审计字段"""
    create_by = Column(String(64), comment="创建者")
    create_time = Column(DateTime, default=func.now(), comment="创建时间")
    update_by = Column(String(64), comment="更新者")
    update_time = Column(DateTime, default=func.now(), onupdate=func.now(), comment="更新时间")

# 注意：不在这里导入模型以避免循环导入
# 模型由 backoffice.db.session 统一导入注册
