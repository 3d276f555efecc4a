"""
前端菜单合并工具

把前端静态路由表与 getRouters 返回的动态路由合并成导航菜单，静态菜单在前。
"""
from typing import Any, Dict, List, Optional

LOCALE_PREFIX = "menu."


def _is_menu_route(route: Dict[str, Any]) -> bool:
    """登录页、用户页、404、根路径重定向和纯重定向路由不进入菜单"""
    if route.get("layout") is False:
        return False
    path = route.get("path")
    if path in ("/user", "/*"):
        return False
    if path == "/" and route.get("redirect"):
        return False
    if not route.get("name") and not route.get("routes"):
        return False
    if route.get("redirect") and not route.get("routes"):
        return False
    return True


def convert_static_routes(routes: List[Dict[str, Any]], parent_key: str = "") -> List[Dict[str, Any]]:
    """
    把静态路由配置转换为菜单项

    Args:
        routes: 静态路由配置
        parent_key: 上级菜单的国际化键（不含前缀）

    Returns:
        菜单项列表，name 为点号连接的祖先名称，locale 为加前缀后的国际化键
    """
    menus = []
    for route in routes:
        if not _is_menu_route(route):
            continue
        name = route.get("name") or ""
        menu_key = f"{parent_key}.{name}" if parent_key else name
        item = {
            "path": route.get("path"),
            "name": menu_key,
            "locale": LOCALE_PREFIX + menu_key,
            "icon": route.get("icon"),
        }
        children = convert_static_routes(route.get("routes") or [], menu_key)
        if children:
            item["children"] = children
        menus.append(item)
    return menus


def convert_dynamic_routes(routers: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """把 getRouters 的路由描述转换为菜单项"""
    menus = []
    for router in routers:
        meta = router.get("meta") or {}
        item = {
            "path": router.get("path"),
            "name": meta.get("title") or router.get("name"),
            "icon": meta.get("icon"),
            "hideInMenu": bool(router.get("hidden")),
        }
        if router.get("children"):
            item["children"] = convert_dynamic_routes(router["children"])
        menus.append(item)
    return menus


def merge_routes(static_routes: List[Dict[str, Any]],
                 dynamic_menus: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
    """
    合并静态与动态菜单

    Args:
        static_routes: 前端静态路由表
        dynamic_menus: getRouters 返回的路由数组

    Returns:
        静态菜单在前、动态菜单在后的菜单列表
    """
    return convert_static_routes(static_routes) + convert_dynamic_routes(dynamic_menus or [])
