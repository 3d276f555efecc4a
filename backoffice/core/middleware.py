"""
HTTP中间件模块
"""
import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """获取客户端IP，优先取代理转发头"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """HTTP请求日志中间件，记录方法、路径、状态码与耗时"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception:
            process_time = time.time() - start_time
            logger.error(
                f"{request.method} {request.url.path} - 500 - {process_time:.4f}s - {get_client_ip(request)}",
                exc_info=True
            )
            raise

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        logger.info(f"{request.method} {request.url.path} - {response.status_code} - {process_time:.4f}s")

        return response
