"""
业务异常定义

服务层只抛出这里的异常，由 main.py 中注册的全局处理器统一转换为
{code, result, data, message} 响应结构。
"""
from fastapi import HTTPException, status


TOKEN_INVALID_MESSAGE = "Token无效或已过期，请重新登录"


class ServiceException(HTTPException):
    """业务异常基类"""
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class ResourceNotFound(ServiceException):
    """资源不存在（404）"""
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequest(ServiceException):
    """参数错误/业务规则冲突（400）"""
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class PermissionDenied(ServiceException):
    """权限不足（403）"""
    def __init__(self, detail: str = "没有访问权限，请联系管理员授权"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class AuthException(ServiceException):
    """认证失败（401）"""
    def __init__(self, detail: str = TOKEN_INVALID_MESSAGE):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
