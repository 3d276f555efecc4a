"""
API包，汇总后台管理的全部REST路由
"""
from fastapi import APIRouter

from backoffice.modules.admin.controllers import (
    auth_controller, dept_controller, menu_controller, role_controller, role_menu_controller,
    user_controller, user_relation_controller, post_controller, config_controller, monitor_controller
)

api_router = APIRouter()
api_router.include_router(auth_controller.router)
api_router.include_router(dept_controller.router)
api_router.include_router(menu_controller.router)
api_router.include_router(role_controller.router)
api_router.include_router(role_menu_controller.router)
api_router.include_router(user_controller.router)
api_router.include_router(user_relation_controller.user_role_router)
api_router.include_router(user_relation_controller.user_post_router)
api_router.include_router(post_controller.router)
api_router.include_router(config_controller.config_router)
api_router.include_router(config_controller.dict_router)
api_router.include_router(config_controller.notice_router)
api_router.include_router(monitor_controller.operlog_router)
api_router.include_router(monitor_controller.logininfor_router)

__all__ = ["api_router"]
