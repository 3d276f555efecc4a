import pytest
from sqlalchemy import select

from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.modules.admin.models.system import SysRoleMenu
from backoffice.modules.admin.services.role_menu_service import RoleMenuService


def role_menu_ids(db, role_id):
    db.expire_all()
    return sorted(db.execute(
        select(SysRoleMenu.menu_id).where(SysRoleMenu.role_id == role_id)
    ).scalars().all())


def test_expand_with_ancestors(seed):
    assert RoleMenuService.expand_with_ancestors(seed, [12]) == [10, 12]
    assert RoleMenuService.expand_with_ancestors(seed, [21, 11]) == [10, 11, 20, 21]


def test_expand_unknown_menu(seed):
    with pytest.raises(BadRequest):
        RoleMenuService.expand_with_ancestors(seed, [12, 404])


def test_save_role_menus_replaces_and_adds_parents(seed):
    saved = RoleMenuService.save_role_menus_services(seed, 2, [21])
    assert saved == [20, 21]
    assert role_menu_ids(seed, 2) == [20, 21]


def test_save_role_menus_unknown_role(seed):
    with pytest.raises(ResourceNotFound):
        RoleMenuService.save_role_menus_services(seed, 99, [10])


def test_assign_menu_roles_keeps_existing(seed):
    added = RoleMenuService.assign_menu_roles_services(seed, 11, [2])
    # 10 已经授权，只新增 11
    assert added == 1
    assert role_menu_ids(seed, 2) == [10, 11]
    assert RoleMenuService.get_menu_role_ids_services(seed, 11) == [2]


def test_remove_and_clear(seed):
    RoleMenuService.save_role_menus_services(seed, 2, [11, 21])
    assert RoleMenuService.remove_role_menu_services(seed, 2, 21) == 1
    assert role_menu_ids(seed, 2) == [10, 11, 20]
    assert RoleMenuService.clear_role_menus_services(seed, 2) == 3
    assert role_menu_ids(seed, 2) == []
