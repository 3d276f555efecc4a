"""
系统管理数据库模型包
"""
from .system import (
    SysDept, SysUser, SysRole, SysPost, SysUserRole, SysUserPost, SysRoleMenu,
    SysConfig, SysDictType, SysDictData, SysNotice
)
from .menu import SysMenu, MENU_TYPE_DIR, MENU_TYPE_MENU, MENU_TYPE_BUTTON
from .log import SysLoginLog, SysOperLog

__all__ = [
    "SysDept", "SysUser", "SysRole", "SysPost", "SysUserRole", "SysUserPost", "SysRoleMenu",
    "SysConfig", "SysDictType", "SysDictData", "SysNotice",
    "SysMenu", "MENU_TYPE_DIR", "MENU_TYPE_MENU", "MENU_TYPE_BUTTON",
    "SysLoginLog", "SysOperLog",
]
