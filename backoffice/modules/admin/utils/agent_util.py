"""
User-Agent 与 IP 解析工具
"""
import ipaddress
import logging
import re
from functools import lru_cache
from typing import Optional, Tuple

import geoip2.database
import geoip2.errors

from backoffice.core.config import settings

logger = logging.getLogger(__name__)

INTERNAL_IP_LABEL = "内网IP"
UNKNOWN_LOCATION = "未知地区"

# 按顺序匹配，Edge/Opera 的 UA 同时包含 Chrome，必须排在前面
_BROWSER_PATTERNS = [
    ("Edge", re.compile(r"Edg(?:e|A|iOS)?/([\d.]+)")),
    ("Opera", re.compile(r"(?:OPR|Opera)/([\d.]+)")),
    ("WeChat", re.compile(r"MicroMessenger/([\d.]+)")),
    ("Firefox", re.compile(r"Firefox/([\d.]+)")),
    ("Chrome", re.compile(r"(?:Chrome|CriOS)/([\d.]+)")),
    ("Safari", re.compile(r"Version/([\d.]+).*Safari/")),
    ("IE", re.compile(r"(?:MSIE |Trident/.*rv:)([\d.]+)")),
]

_OS_PATTERNS = [
    ("Windows", re.compile(r"Windows NT ([\d.]+)")),
    ("iOS", re.compile(r"(?:iPhone|iPad|iPod).*?OS ([\d_]+)")),
    ("Android", re.compile(r"Android ([\d.]+)")),
    ("Mac OS X", re.compile(r"Mac OS X ([\d_.]+)")),
    ("Linux", re.compile(r"Linux()")),
]


def parse_browser(user_agent: Optional[str]) -> str:
    """
    解析浏览器名称与主版本号

    Args:
        user_agent: User-Agent 头

    Returns:
        例如 "Chrome 120"，无法识别时为 "Unknown"
    """
    if not user_agent:
        return "Unknown"
    for name, pattern in _BROWSER_PATTERNS:
        match = pattern.search(user_agent)
        if match:
            return f"{name} {match.group(1).split('.')[0]}"
    return "Unknown"


def parse_os(user_agent: Optional[str]) -> str:
    if not user_agent:
        return "Unknown"
    for name, pattern in _OS_PATTERNS:
        match = pattern.search(user_agent)
        if match:
            version = match.group(1).replace("_", ".")
            return f"{name} {version}".strip()
    return "Unknown"


def parse_device_type(user_agent: Optional[str]) -> str:
    """pc / mobile / tablet"""
    if not user_agent:
        return "pc"
    ua = user_agent.lower()
    if "ipad" in ua or ("android" in ua and "mobile" not in ua) or "tablet" in ua:
        return "tablet"
    if "mobile" in ua or "iphone" in ua or "micromessenger" in ua:
        return "mobile"
    return "pc"


def parse_user_agent(user_agent: Optional[str]) -> Tuple[str, str, str]:
    """返回 (浏览器, 操作系统, 设备类型)"""
    return parse_browser(user_agent), parse_os(user_agent), parse_device_type(user_agent)


def is_internal_ip(ip: Optional[str]) -> bool:
    if not ip:
        return True
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return ip in ("localhost", "testclient", "unknown")
    return address.is_private or address.is_loopback or address.is_link_local


@lru_cache(maxsize=1)
def get_geoip_reader(db_path: str) -> geoip2.database.Reader:
    """按路径缓存 GeoLite2 读取器，进程内只打开一次"""
    return geoip2.database.Reader(db_path)


def _localized(record) -> Optional[str]:
    return record.names.get("zh-CN") or record.name


def get_ip_location(ip: Optional[str]) -> str:
    """
    IP 归属地

    内网地址标记为内网IP；外网地址查本地 GeoLite2 库，未配置库或查不到时标记为未知地区。
    """
    if is_internal_ip(ip):
        return INTERNAL_IP_LABEL
    if not settings.GEOIP_DB_PATH:
        return UNKNOWN_LOCATION
    try:
        response = get_geoip_reader(settings.GEOIP_DB_PATH).city(ip)
    except geoip2.errors.AddressNotFoundError:
        return UNKNOWN_LOCATION
    except (OSError, ValueError) as e:
        logger.warning(f"IP归属地查询失败 {ip}: {e}")
        return UNKNOWN_LOCATION
    parts = [
        _localized(response.country),
        _localized(response.subdivisions.most_specific),
        _localized(response.city),
    ]
    # 直辖市省份与城市同名
    location = []
    for part in parts:
        if part and part not in location:
            location.append(part)
    return " ".join(location) or UNKNOWN_LOCATION
