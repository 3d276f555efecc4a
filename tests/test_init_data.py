from sqlalchemy import func, select

from backoffice.core.config import settings
from backoffice.modules.admin.models.menu import SysMenu
from backoffice.modules.admin.models.system import SysUser
from backoffice.modules.admin.scripts.init_data import (
    ADMIN_PASSWORD, BUTTON_ID_START, build_menus, init_menus, seed as seed_data
)
from backoffice.modules.admin.services.permission_service import PermissionService
from backoffice.modules.admin.utils.auth_util import PasswordUtil


def test_build_menus_ids_are_unique():
    menus = build_menus()
    ids = [menu.menu_id for menu in menus]
    assert len(ids) == len(set(ids))
    assert min(menu.menu_id for menu in menus if menu.menu_type == "F") == BUTTON_ID_START
    assert "system:user:resetPwd" in {menu.perms for menu in menus}


def test_seed_is_idempotent(db):
    seed_data(db)
    count = db.execute(select(func.count()).select_from(SysMenu)).scalar()
    assert count == len(build_menus())

    seed_data(db)
    assert db.execute(select(func.count()).select_from(SysMenu)).scalar() == count
    assert init_menus(db) == 0


def test_seeded_admin_is_super_admin(db):
    seed_data(db)
    admin = db.execute(select(SysUser).where(SysUser.user_name == settings.ADMIN_USER_NAME)).scalars().one()
    assert PasswordUtil.verify_password(ADMIN_PASSWORD, admin.password)
    assert PermissionService.get_user_permissions(db, admin.user_id) == ["*:*:*"]
