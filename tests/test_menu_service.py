import pytest
from sqlalchemy import select

from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.modules.admin.models.menu import SysMenu
from backoffice.modules.admin.models.system import SysRoleMenu
from backoffice.modules.admin.schemas.menu import AddMenuModel, EditMenuModel, MenuQueryModel, normalize_flag
from backoffice.modules.admin.services.menu_service import MenuService


def menu_ids(db):
    db.expire_all()
    return sorted(db.execute(select(SysMenu.menu_id)).scalars().all())


def test_normalize_flag():
    assert normalize_flag(True, "0") == "1"
    assert normalize_flag(0, "1") == "0"
    assert normalize_flag("false", "1") == "0"
    assert normalize_flag(None, "1") == "1"
    with pytest.raises(ValueError):
        normalize_flag("maybe", "0")


def test_add_menu_normalizes_flags(seed, admin_auth):
    data = AddMenuModel(parentId=10, menuName="日志", menuType="C", path="log",
                        isFrame=False, isCache="true", visible=True, perms=" a:b:c , a:b:d ")
    menu = MenuService.add_menu_services(seed, data, admin_auth)
    assert menu.is_frame == 0
    assert menu.is_cache == 1
    assert menu.visible == "1"
    assert menu.perms == "a:b:c,a:b:d"


def test_add_menu_duplicate_name_under_same_parent(seed, admin_auth):
    with pytest.raises(BadRequest):
        MenuService.add_menu_services(seed, AddMenuModel(parent_id=10, menu_name="用户管理", menu_type="C"), admin_auth)


def test_edit_menu_parent_cannot_be_descendant(seed, admin_auth):
    data = EditMenuModel(menu_id=10, parent_id=11, menu_name="系统管理", menu_type="M", path="system")
    with pytest.raises(BadRequest):
        MenuService.edit_menu_services(seed, data, admin_auth)


def test_delete_menu_with_children_fails(seed):
    with pytest.raises(BadRequest):
        MenuService.delete_menu_services(seed, 10)
    assert menu_ids(seed) == [10, 11, 12, 20, 21]


def test_delete_leaf_menu_removes_role_links(seed):
    seed.add(SysRoleMenu(role_id=2, menu_id=11))
    seed.commit()

    assert MenuService.delete_menu_services(seed, 11) == 1
    assert 11 not in menu_ids(seed)
    links = seed.execute(select(SysRoleMenu.menu_id).where(SysRoleMenu.role_id == 2)).scalars().all()
    assert list(links) == [10]


def test_cascade_delete_removes_subtree(seed):
    assert MenuService.cascade_delete_menu_services(seed, [10]) == 3
    assert menu_ids(seed) == [20, 21]
    assert seed.execute(select(SysRoleMenu)).scalars().all() == []


def test_cascade_delete_unknown_menu(seed):
    with pytest.raises(ResourceNotFound):
        MenuService.cascade_delete_menu_services(seed, [10, 999])
    assert menu_ids(seed) == [10, 11, 12, 20, 21]


def test_tree_options(seed):
    options = MenuService.get_menu_tree_options_services(seed)
    assert [option.id for option in options] == [10, 20]
    assert [child.id for child in options[0].children] == [11, 12]
    assert options[1].children[0].label == "用户"


def test_role_menu_tree(seed):
    tree = MenuService.get_role_menu_tree_services(seed, 2)
    assert tree.checked_keys == [10]
    with pytest.raises(ResourceNotFound):
        MenuService.get_role_menu_tree_services(seed, 99)


def test_menu_tree_with_filter_promotes_matches(seed):
    full = MenuService.get_menu_tree_services(seed)
    assert [menu.menu_id for menu in full] == [10, 20]

    filtered = MenuService.get_menu_tree_services(seed, MenuQueryModel(menu_name="用户"))
    assert {menu.menu_id for menu in filtered} == {11, 12, 21}
