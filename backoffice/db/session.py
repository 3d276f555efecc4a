from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from backoffice.core.config import settings

# 导入所有模型，确保在创建会话前所有模型类都已加载
from backoffice.db.base import Base
import backoffice.modules.admin.models.system
import backoffice.modules.admin.models.menu
import backoffice.modules.admin.models.log


def _engine_options(uri: str) -> dict:
    """按数据库方言组装引擎参数"""
    if uri.startswith("sqlite"):
        return {
            "echo": settings.DB_ECHO,
            "connect_args": {"check_same_thread": False},
        }
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": settings.DB_POOL_PRE_PING,
        "echo": settings.DB_ECHO,
        "connect_args": {
            "charset": "utf8mb4",
            "autocommit": False,
            "connect_timeout": settings.DB_CONNECT_TIMEOUT,
            "read_timeout": settings.DB_STATEMENT_TIMEOUT,
            "write_timeout": settings.DB_STATEMENT_TIMEOUT,
        },
    }


engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    **_engine_options(settings.SQLALCHEMY_DATABASE_URI)
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 依赖项
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
