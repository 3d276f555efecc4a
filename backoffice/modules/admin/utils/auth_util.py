"""
认证工具类
"""
import jwt
import uuid
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from passlib.context import CryptContext

from backoffice.core.config import settings
from backoffice.core.exceptions import AuthException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """
    当前请求的认证上下文

    由令牌校验生成一次，经控制器显式传入服务层。
    """
    user_id: int
    user_name: str
    nick_name: Optional[str] = None
    tenant_id: Optional[str] = None
    dept_id: Optional[int] = None
    status: Optional[str] = None

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "AuthContext":
        """从令牌载荷构造上下文，缺少用户标识时视为无效令牌"""
        user_id = claims.get("user_id") or claims.get("sub")
        user_name = claims.get("username")
        if user_id is None or not user_name:
            raise AuthException()
        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            raise AuthException()
        return cls(
            user_id=user_id,
            user_name=user_name,
            nick_name=claims.get("nick_name"),
            tenant_id=claims.get("tenant_id"),
            dept_id=claims.get("dept_id"),
            status=claims.get("status"),
        )


class PasswordUtil:
    """密码工具类"""

    pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    @classmethod
    def verify_password(cls, plain_password: str, hashed_password: str) -> bool:
        """
        验证密码

        Args:
            plain_password: 明文密码
            hashed_password: 哈希密码

        Returns:
            是否匹配，哈希格式无法识别时返回False
        """
        if not plain_password or not hashed_password:
            return False
        try:
            return cls.pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            logger.warning("密码哈希格式无法识别")
            return False

    @classmethod
    def get_password_hash(cls, password: str) -> str:
        """
        获取密码哈希

        Args:
            password: 明文密码

        Returns:
            bcrypt哈希
        """
        return cls.pwd_context.hash(password)


class JWTUtil:
    """JWT工具类"""

    @classmethod
    def create_access_token(cls, data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
        """
        创建访问令牌

        Args:
            data: 要编码的数据
            expires_delta: 过期时间增量

        Returns:
            JWT令牌
        """
        to_encode = data.copy()
        now = datetime.now(timezone.utc)

        if expires_delta:
            expire = now + expires_delta
        else:
            expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)

        to_encode.update({"exp": expire, "iat": now, "jti": str(uuid.uuid4())})

        return jwt.encode(
            to_encode,
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM
        )

    @classmethod
    def decode_access_token(cls, token: str) -> Dict[str, Any]:
        """
        解码访问令牌

        不论签名错误、过期还是格式错误，统一抛出同一个401异常。

        Args:
            token: JWT令牌

        Returns:
            解码后的数据

        Raises:
            AuthException: 令牌无效或过期
        """
        try:
            return jwt.decode(
                token,
                settings.JWT_SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM]
            )
        except jwt.ExpiredSignatureError:
            logger.info("令牌已过期")
            raise AuthException()
        except jwt.InvalidTokenError as e:
            logger.info(f"令牌校验失败: {type(e).__name__}")
            raise AuthException()

    @classmethod
    def decode_without_verify(cls, token: str) -> Optional[Dict[str, Any]]:
        """
        不校验签名与有效期地解析令牌，用于注销时识别用户

        Returns:
            载荷，无法解析时返回None
        """
        try:
            return jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
        except jwt.InvalidTokenError:
            return None

    @classmethod
    def get_token_expire_time(cls) -> int:
        """
        获取令牌过期时间（秒）
        """
        return settings.JWT_EXPIRE_MINUTES * 60

    @classmethod
    def extract_bearer_token(cls, authorization: Optional[str]) -> Optional[str]:
        """从Authorization头中提取Bearer令牌"""
        if not authorization:
            return None
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        return token.strip()
