#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging
import sys
import os
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backoffice.core.config import settings
from backoffice.api import api_router

# 导入中间件
from backoffice.core.middleware import RequestLoggingMiddleware
from backoffice.modules.admin.middleware.auth_middleware import AuthMiddleware
from backoffice.modules.admin.middleware.oper_log_middleware import OperLogMiddleware
from backoffice.modules.admin.utils.response_util import ResponseUtil

# 配置日志
log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
log_handlers = [logging.StreamHandler(sys.stdout)]
if settings.LOG_TO_FILE:
    log_handlers.append(logging.FileHandler(os.path.join(settings.LOG_DIR, 'backoffice.log'), encoding='utf-8'))
logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=log_handlers
)

# SQL日志由 DB_ECHO 控制
logging.getLogger('sqlalchemy.engine').setLevel(logging.INFO if settings.DB_ECHO else logging.WARNING)

logger = logging.getLogger(__name__)

# 创建FastAPI应用
app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.PROJECT_DESCRIPTION,
    version=settings.PROJECT_VERSION,
)

# 配置中间件，后添加的在外层：CORS -> 请求日志 -> 认证 -> 操作日志
app.add_middleware(OperLogMiddleware, enabled=settings.OPER_LOG_ENABLED)
app.add_middleware(AuthMiddleware, enable_auth=settings.AUTH_ENABLED)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """业务异常与HTTP异常统一转换为 {code, result, data, message}"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {exc.status_code} - {exc.detail}")
    return ResponseUtil.error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"参数校验失败: {request.method} {request.url.path} - {exc.errors()}")
    return ResponseUtil.error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "参数校验失败",
        data=[{"loc": list(error.get("loc", ())), "msg": error.get("msg")} for error in exc.errors()]
    )


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"数据库操作异常: {request.method} {request.url.path}", exc_info=exc)
    return ResponseUtil.error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "数据库操作异常")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"未处理的异常: {request.method} {request.url.path}", exc_info=exc)
    return ResponseUtil.error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "服务器内部错误")


# 注册API路由
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", tags=["系统"], summary="健康检查")
def health():
    return ResponseUtil.success(data={"status": "ok", "version": settings.PROJECT_VERSION})


def serve():
    """启动REST API服务"""
    try:
        logger.info(f"启动 {settings.PROJECT_NAME} REST API服务，端口 {settings.REST_PORT}...")
        uvicorn.run(
            "backoffice.main:app",
            host="0.0.0.0",
            port=settings.REST_PORT,
            reload=False,
            log_level=settings.LOG_LEVEL.lower()
        )
    except Exception as e:
        logger.error(f"REST API服务器错误: {str(e)}", exc_info=True)
        raise


if __name__ == "__main__":
    serve()
