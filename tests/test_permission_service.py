from backoffice.modules.admin.models.menu import SysMenu
from backoffice.modules.admin.models.system import SysRole, SysRoleMenu, SysUserRole
from backoffice.modules.admin.services.permission_service import (
    PermissionService, permission_sort_key, sort_permissions, split_perms, build_routes, ALL_PERMISSION
)
from tests.conftest import auth_context, make_menu


def test_split_perms():
    assert split_perms(None) == []
    assert split_perms(" a:b:c ,, a:b:d,") == ["a:b:c", "a:b:d"]


def test_sort_permissions_known_actions_first():
    perms = [
        "system:user:query", "system:user:zzz", "system:user:add", "system:role:list",
        "system:user:list", "system:user:abc", "system:user:add",
    ]
    assert sort_permissions(perms) == [
        "system:role:list",
        "system:user:add", "system:user:list", "system:user:query",
        "system:user:abc", "system:user:zzz",
    ]


def test_sort_key_pads_short_permissions():
    assert permission_sort_key("system") == ("system", "", 6, "")
    assert permission_sort_key("a:b:c:d")[3] == "c:d"


def test_directory_grant_collects_buttons(seed):
    assert PermissionService.get_user_permissions(seed, 2) == [
        "sys:user:add", "sys:user:edit", "sys:user:list"
    ]


def test_menu_grant_does_not_descend(seed):
    make_menu(seed, 13, 11, "导出", "F", perms="sys:user:export")
    seed.add(SysRole(role_id=3, role_name="只读", role_key="reader", role_sort=3))
    seed.add(SysRoleMenu(role_id=3, menu_id=11))
    seed.add(SysUserRole(user_id=3, role_id=3))
    seed.commit()
    assert PermissionService.get_user_permissions(seed, 3) == ["sys:user:list"]


def test_super_admin_has_all(seed):
    assert PermissionService.get_user_permissions(seed, 1) == [ALL_PERMISSION]
    assert PermissionService.has_permission([ALL_PERMISSION], "anything:at:all")


def test_user_without_roles(seed):
    assert PermissionService.get_user_permissions(seed, 3) == []
    assert PermissionService.get_routers_services(seed, auth_context(3, "bob")) == []


def test_disabled_role_is_ignored(seed):
    seed.get(SysRole, 2).status = "1"
    seed.commit()
    assert PermissionService.get_user_permissions(seed, 2) == []


def test_disabled_menu_is_ignored(seed):
    seed.get(SysMenu, 12).status = "1"
    seed.commit()
    assert PermissionService.get_user_permissions(seed, 2) == ["sys:user:list"]


def test_routes_for_super_admin(seed):
    routes = PermissionService.get_routers_services(seed, auth_context())
    assert [route["path"] for route in routes] == ["/system", "/other"]
    system = routes[0]
    assert system["component"] == "Layout"
    assert system["redirect"] == "noRedirect"
    assert system["alwaysShow"] is True
    # 按钮不出现在路由中
    assert [child["path"] for child in system["children"]] == ["user"]
    assert system["children"][0]["component"] == "system/user/index"
    assert system["children"][0]["meta"]["title"] == "用户管理"


def test_route_names_unique_for_duplicate_paths(seed):
    routes = PermissionService.get_routers_services(seed, auth_context())
    names = [route["children"][0]["name"] for route in routes]
    assert names == ["User11", "User21"]


def test_routes_for_role_contain_only_granted_menus(seed):
    routes = PermissionService.get_routers_services(seed, auth_context(2, "alice"))
    assert [route["path"] for route in routes] == ["/system"]
    assert "children" not in routes[0]


def test_external_link_meta(seed):
    make_menu(seed, 30, 0, "文档", "C", path="https://example.com/docs", is_frame=0, order_num=3, is_cache=1)
    seed.commit()
    routes = build_routes(seed.query(SysMenu).all())
    docs = [route for route in routes if route["meta"]["title"] == "文档"][0]
    assert docs["path"] == "https://example.com/docs"
    assert docs["meta"]["link"] == "https://example.com/docs"
    assert docs["meta"]["noCache"] is True


def test_user_info(seed):
    info = PermissionService.get_user_info_services(seed, auth_context(2, "alice"))
    assert info["roles"] == ["editor"]
    assert info["permissions"] == ["sys:user:add", "sys:user:edit", "sys:user:list"]
    assert info["user"].role_ids == [2]
    assert info["user"].dept_name == "前端组"


def test_visible_routes_skip_hidden_menus(seed):
    make_menu(seed, 13, 10, "隐藏页", "C", path="hidden", order_num=3, visible="1")
    seed.commit()

    legacy = PermissionService.get_visible_routers_services(seed)
    assert [child["path"] for child in legacy[0]["children"]] == ["user"]

    routes = PermissionService.get_routers_services(seed, auth_context())
    hidden = routes[0]["children"][1]
    assert hidden["path"] == "hidden"
    assert hidden["hidden"] is True
