"""
认证中间件
"""
import logging
from typing import List
from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from backoffice.core.config import settings
from backoffice.core.exceptions import AuthException, TOKEN_INVALID_MESSAGE
from backoffice.modules.admin.utils.auth_util import AuthContext, JWTUtil
from backoffice.modules.admin.utils.response_util import ResponseUtil

logger = logging.getLogger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """全局认证中间件"""

    # 白名单路径 - 这些路径不需要认证
    WHITELIST_PATHS = [
        "/docs",
        "/redoc",
        "/openapi.json",
        "/health",
    ]

    # 需要拼接API前缀的白名单路径
    API_WHITELIST_PATHS = [
        "/auth/login",
        "/auth/logout",
    ]

    # 白名单前缀 - 以这些前缀开头的路径不需要认证
    WHITELIST_PREFIXES = [
        "/static/",
        "/docs/",
    ]

    def __init__(self, app, enable_auth: bool = True):
        super().__init__(app)
        self.enable_auth = enable_auth
        self.whitelist: List[str] = self.WHITELIST_PATHS + [
            f"{settings.API_V1_STR}{path}" for path in self.API_WHITELIST_PATHS
        ]

    async def dispatch(self, request: Request, call_next) -> Response:
        if not self.enable_auth or request.method == "OPTIONS":
            return await call_next(request)

        if self._is_whitelisted(request.url.path):
            return await call_next(request)

        try:
            request.state.auth = self._authenticate_request(request)
        except AuthException:
            # 不区分缺失、格式错误、签名错误与过期，统一返回同一响应体
            return ResponseUtil.error_response(
                status.HTTP_401_UNAUTHORIZED,
                TOKEN_INVALID_MESSAGE,
                headers={"WWW-Authenticate": "Bearer"}
            )

        return await call_next(request)

    def _is_whitelisted(self, path: str) -> bool:
        """检查路径是否在白名单中"""
        if path in self.whitelist:
            return True
        return any(path.startswith(prefix) for prefix in self.WHITELIST_PREFIXES)

    def _authenticate_request(self, request: Request) -> AuthContext:
        """
        校验Bearer令牌并构造认证上下文

        Raises:
            AuthException: 令牌缺失或无效
        """
        token = JWTUtil.extract_bearer_token(request.headers.get("Authorization"))
        if not token:
            logger.debug(f"缺少认证令牌: {request.method} {request.url.path}")
            raise AuthException()
        claims = JWTUtil.decode_access_token(token)
        return AuthContext.from_claims(claims)
