from pydantic_settings import BaseSettings
from typing import Optional, List
import os
from dotenv import load_dotenv
from pathlib import Path
from pydantic import Field

load_dotenv()

class Settings(BaseSettings):
    # API配置
    API_V1_STR: str = Field(default="", description="API路由前缀")
    PROJECT_NAME: str = Field(default="Backoffice RBAC", description="项目名称")
    PROJECT_DESCRIPTION: str = Field(default="后台权限管理系统API", description="项目描述")
    PROJECT_VERSION: str = Field(default="1.0.0", description="项目版本")
    REST_PORT: int = Field(default=8000, description="REST API端口")

    # 服务配置
    DEBUG: bool = Field(default=True, description="是否启用调试模式")
    LOG_LEVEL: str = Field(default="INFO", description="日志级别")
    LOG_TO_FILE: bool = Field(default=True, description="是否写入日志文件")

    # 项目路径配置
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOG_DIR: Path = BASE_DIR / "logs"

    # 数据库配置
    MYSQL_SERVER: str = Field(default="127.0.0.1", description="MySQL服务器地址")
    MYSQL_USER: str = Field(default="root", description="MySQL用户名")
    MYSQL_PASSWORD: str = Field(default="123456", description="MySQL密码")
    MYSQL_DB: str = Field(default="backoffice", description="MySQL数据库名")
    MYSQL_PORT: int = Field(default=3306, description="MySQL端口")

    # 数据库URL，未配置时由MySQL参数拼接
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    # 数据库连接池配置
    DB_POOL_SIZE: int = Field(default=20, description="连接池大小")
    DB_MAX_OVERFLOW: int = Field(default=40, description="最大溢出连接数")
    DB_POOL_TIMEOUT: int = Field(default=30, description="获取连接超时（秒）")
    DB_POOL_RECYCLE: int = Field(default=3600, description="连接回收时间（秒）")
    DB_POOL_PRE_PING: bool = Field(default=True, description="连接前预检查")
    DB_ECHO: bool = Field(default=False, description="是否输出SQL")
    DB_CONNECT_TIMEOUT: int = Field(default=10, description="数据库连接超时（秒）")
    DB_STATEMENT_TIMEOUT: int = Field(default=30, description="数据库读写超时（秒）")

    # JWT配置
    JWT_SECRET_KEY: str = Field(default="backoffice-secret-key-change-me", description="JWT签名密钥")
    JWT_ALGORITHM: str = Field(default="HS256", description="JWT签名算法")
    JWT_EXPIRE_MINUTES: int = Field(default=1440, description="令牌有效期（分钟）")

    # 认证与权限配置
    AUTH_ENABLED: bool = Field(default=True, description="是否启用全局认证")
    SUPER_ADMIN_ROLE_KEY: str = Field(default="superadmin", description="超级管理员角色标识")
    ADMIN_USER_NAME: str = Field(default="admin", description="内置管理员账号（不可删除、不可停用）")
    DEFAULT_TENANT_ID: str = Field(default="000000", description="默认租户编号")
    CORS_ORIGINS: List[str] = Field(default=["*"], description="允许的跨域来源")

    # 操作日志配置
    OPER_LOG_ENABLED: bool = Field(default=True, description="是否自动记录操作日志")
    OPER_LOG_RESULT_MAX_LENGTH: int = Field(default=2000, description="返回参数最大记录长度")

    # IP归属地
    GEOIP_DB_PATH: Optional[str] = Field(default=None, description="GeoLite2-City 数据库文件路径，为空时外网IP记为未知地区")

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()

# 构建数据库URL - 使用pymysql作为MySQL驱动
if not settings.SQLALCHEMY_DATABASE_URI:
    settings.SQLALCHEMY_DATABASE_URI = (
        f"mysql+pymysql://{settings.MYSQL_USER}:{settings.MYSQL_PASSWORD}"
        f"@{settings.MYSQL_SERVER}:{settings.MYSQL_PORT}/{settings.MYSQL_DB}"
    )

# 确保日志目录存在
if settings.LOG_TO_FILE:
    os.makedirs(settings.LOG_DIR, exist_ok=True)
