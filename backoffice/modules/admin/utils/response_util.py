"""
统一响应结构工具
"""
from typing import Any, List, Optional
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class ResponseUtil:
    """
    统一响应构造

    成功：{code, result: true, data, message}
    分页：{code, result: true, rows, total, message}
    失败：{code, result: false, data: null, message}
    """

    @classmethod
    def success(cls, data: Any = None, message: str = "操作成功") -> dict:
        return {
            "code": status.HTTP_200_OK,
            "result": True,
            "data": jsonable_encoder(data, by_alias=True),
            "message": message,
        }

    @classmethod
    def page(cls, rows: List[Any], total: int, message: str = "查询成功") -> dict:
        return {
            "code": status.HTTP_200_OK,
            "result": True,
            "rows": jsonable_encoder(rows, by_alias=True),
            "total": total,
            "message": message,
        }

    @classmethod
    def error(cls, code: int, message: str, data: Optional[Any] = None) -> dict:
        return {
            "code": code,
            "result": False,
            "data": jsonable_encoder(data),
            "message": message,
        }

    @classmethod
    def error_response(cls, code: int, message: str, data: Optional[Any] = None, headers: Optional[dict] = None) -> JSONResponse:
        """构造带HTTP状态码的错误响应"""
        return JSONResponse(
            status_code=code,
            content=cls.error(code, message, data),
            headers=headers
        )
