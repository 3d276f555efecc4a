"""
操作日志中间件

对非GET的业务请求自动记录操作日志，日志写入失败不影响响应。
"""
import json
import time
import logging
from typing import Any, Optional
from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from backoffice.core.config import settings
from backoffice.core.middleware import get_client_ip
from backoffice.modules.admin.services.log_service import OperLogService
from backoffice.modules.admin.utils.agent_util import get_ip_location

logger = logging.getLogger(__name__)

# 业务类型
BUSINESS_OTHER = 0
BUSINESS_INSERT = 1
BUSINESS_UPDATE = 2
BUSINESS_DELETE = 3
BUSINESS_EXPORT = 5
BUSINESS_IMPORT = 6
BUSINESS_CLEAN = 9

OPER_STATUS_SUCCESS = 0
OPER_STATUS_FAIL = 1

MASK = "******"
PARAM_MAX_LENGTH = 2000

EXCLUDED_PREFIXES = [
    "/auth/login",
    "/auth/logout",
    "/auth/getInfo",
    "/monitor/operlog",
    "/monitor/logininfor",
    "/system/menu/mergeRouters",
    "/health",
    "/static",
]

MODULE_TITLES = {
    "user": "用户管理",
    "role": "角色管理",
    "menu": "菜单管理",
    "dept": "部门管理",
    "post": "岗位管理",
    "config": "参数管理",
    "dict": "字典管理",
    "notice": "通知公告",
    "role-menu": "角色菜单",
    "user-role": "用户角色",
    "user-post": "用户岗位",
}

_METHOD_BUSINESS_TYPES = {
    "POST": BUSINESS_INSERT,
    "PUT": BUSINESS_UPDATE,
    "DELETE": BUSINESS_DELETE,
}


def _strip_prefix(path: str) -> str:
    prefix = settings.API_V1_STR
    if prefix and path.startswith(prefix):
        return path[len(prefix):] or "/"
    return path


def get_module_title(path: str) -> str:
    """由路径的模块段推导日志标题，如 /system/user/1 -> 用户管理"""
    segments = [segment for segment in _strip_prefix(path).split("/") if segment]
    if not segments:
        return ""
    module = segments[1] if len(segments) > 1 else segments[0]
    return MODULE_TITLES.get(module, module)


def get_business_type(method: str, path: str) -> int:
    """
    推导业务类型：路径关键字优先，其次按请求方式

    Args:
        method: 请求方式
        path: 请求路径

    Returns:
        业务类型编码
    """
    segments = [segment.lower() for segment in path.split("/") if segment]
    if "export" in segments:
        return BUSINESS_EXPORT
    if "import" in segments or "importdata" in segments:
        return BUSINESS_IMPORT
    if "clean" in segments:
        return BUSINESS_CLEAN
    return _METHOD_BUSINESS_TYPES.get(method.upper(), BUSINESS_OTHER)


def mask_sensitive(value: Any) -> Any:
    """递归屏蔽名称包含 password 的字段"""
    if isinstance(value, dict):
        return {
            key: MASK if "password" in str(key).lower() else mask_sensitive(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [mask_sensitive(item) for item in value]
    return value


def format_params(request: Request, body: bytes) -> str:
    """组装请求参数：有请求体用请求体，否则用查询参数"""
    if body:
        try:
            params = mask_sensitive(json.loads(body))
            text = json.dumps(params, ensure_ascii=False)
        except (ValueError, UnicodeDecodeError):
            text = body.decode("utf-8", errors="replace")
    else:
        text = json.dumps(mask_sensitive(dict(request.query_params)), ensure_ascii=False)
    return text[:PARAM_MAX_LENGTH]


def parse_result(status_code: int, body: Optional[bytes]) -> tuple:
    """
    解析响应得到 (状态, 错误消息, 截断后的返回参数)

    响应体中的 code 不为200或HTTP状态码大于等于400时视为失败。
    """
    text = body.decode("utf-8", errors="replace") if body else ""
    oper_status = OPER_STATUS_FAIL if status_code >= 400 else OPER_STATUS_SUCCESS
    error_msg = ""
    try:
        payload = json.loads(text) if text else None
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        code = payload.get("code")
        if code is not None and code != 200:
            oper_status = OPER_STATUS_FAIL
        if oper_status == OPER_STATUS_FAIL:
            error_msg = str(payload.get("message") or "")
    return oper_status, error_msg, text[:settings.OPER_LOG_RESULT_MAX_LENGTH]


class OperLogMiddleware(BaseHTTPMiddleware):
    """操作日志中间件"""

    def __init__(self, app, enabled: bool = True):
        super().__init__(app)
        self.enabled = enabled

    def _should_record(self, request: Request) -> bool:
        if not self.enabled or request.method in ("GET", "HEAD", "OPTIONS"):
            return False
        path = _strip_prefix(request.url.path)
        return not any(path.startswith(prefix) for prefix in EXCLUDED_PREFIXES)

    async def dispatch(self, request: Request, call_next) -> Response:
        if not self._should_record(request):
            return await call_next(request)

        start_time = time.time()
        body = await request.body()
        response = await call_next(request)
        cost_time = int((time.time() - start_time) * 1000)

        result_body = None
        if response.headers.get("content-type", "").startswith("application/json"):
            result_body = b"".join([chunk async for chunk in response.body_iterator])
            buffered = Response(content=result_body, status_code=response.status_code)
            # 原样保留响应头，多个 Set-Cookie 不能合并
            buffered.raw_headers = list(response.headers.raw)
            response = buffered

        oper_status, error_msg, json_result = parse_result(response.status_code, result_body)
        auth = getattr(request.state, "auth", None)
        endpoint = request.scope.get("endpoint")
        ip = get_client_ip(request)

        await run_in_threadpool(OperLogService.record, {
            "tenant_id": auth.tenant_id if auth and auth.tenant_id else settings.DEFAULT_TENANT_ID,
            "title": get_module_title(request.url.path),
            "business_type": get_business_type(request.method, request.url.path),
            "method": f"{endpoint.__module__}.{endpoint.__name__}()" if endpoint else "",
            "request_method": request.method,
            "operator_type": 1,
            "oper_name": auth.user_name if auth else "",
            "oper_url": request.url.path,
            "oper_ip": ip,
            "oper_location": get_ip_location(ip),
            "oper_param": format_params(request, body),
            "json_result": json_result,
            "status": oper_status,
            "error_msg": error_msg[:2000],
            "cost_time": cost_time,
        })
        return response
