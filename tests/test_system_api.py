from backoffice.modules.admin.models.system import SysRole, SysRoleMenu, SysUserRole
from backoffice.modules.admin.models.log import SysOperLog
from tests.conftest import bearer, make_menu


class TestPermissionGuard:
    def test_forbidden_without_permission(self, client, alice_headers):
        response = client.get("/system/dept/list", headers=alice_headers)
        assert response.status_code == 403
        assert response.json() == {
            "code": 403,
            "result": False,
            "data": None,
            "message": "没有访问权限，请联系管理员授权",
        }

    def test_super_admin_passes(self, client, admin_headers):
        response = client.get("/system/dept/list", headers=admin_headers)
        assert response.status_code == 200
        assert len(response.json()["data"]) == 5

    def test_granted_directory_permission(self, client, seed, bob_headers):
        make_menu(seed, 30, 0, "部门", "C", path="dept", perms="system:dept:list")
        seed.add(SysRole(role_id=3, role_name="部门查看", role_key="dept_viewer", role_sort=3))
        seed.add(SysRoleMenu(role_id=3, menu_id=30))
        seed.add(SysUserRole(user_id=3, role_id=3))
        seed.commit()
        assert client.get("/system/dept/list", headers=bob_headers).status_code == 200
        assert client.get("/system/dept/1", headers=bob_headers).status_code == 403


class TestDeptApi:
    def test_tree_select(self, client, admin_headers):
        data = client.get("/system/dept/deptTree", headers=admin_headers).json()["data"]
        assert data[0]["label"] == "总公司"
        assert [child["id"] for child in data[0]["children"]] == [2, 3]

    def test_delete_with_children_is_bad_request(self, client, admin_headers):
        response = client.delete("/system/dept/2", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["result"] is False

    def test_invalid_ids(self, client, admin_headers):
        response = client.delete("/system/dept/1,x", headers=admin_headers)
        assert response.status_code == 400

    def test_not_found(self, client, admin_headers):
        response = client.get("/system/dept/999", headers=admin_headers)
        assert response.status_code == 404


class TestRoleApi:
    def test_page(self, client, admin_headers):
        body = client.get("/system/role/list", headers=admin_headers, params={"pageSize": 1}).json()
        assert body["total"] == 2
        assert len(body["rows"]) == 1

    def test_super_admin_role_cannot_be_deleted(self, client, admin_headers):
        response = client.delete("/system/role/1", headers=admin_headers)
        assert response.status_code == 400

    def test_add_role_with_menus(self, client, seed, admin_headers):
        response = client.post("/system/role", headers=admin_headers, json={
            "roleName": "审计", "roleKey": "audit", "roleSort": 5, "menuIds": [12]
        })
        assert response.status_code == 200
        role_id = response.json()["data"]["roleId"]

        menus = client.get(f"/system/role-menu/role/{role_id}/menus", headers=admin_headers).json()["data"]
        assert menus == [10, 12]


class TestMenuApi:
    def test_cascade_delete(self, client, admin_headers):
        response = client.delete("/system/menu/cascade/10", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"] == 3

        ids = [menu["menuId"] for menu in client.get("/system/menu/list", headers=admin_headers).json()["data"]]
        assert sorted(ids) == [20, 21]

    def test_plain_delete_refuses_parent(self, client, admin_headers):
        assert client.delete("/system/menu/10", headers=admin_headers).status_code == 400

    def test_visible_routers(self, client, admin_headers, alice_headers):
        data = client.get("/system/menu/getVisibleRouters", headers=admin_headers).json()["data"]
        assert [route["path"] for route in data] == ["/system", "/other"]
        assert client.get("/system/menu/getVisibleRouters", headers=alice_headers).status_code == 403

    def test_merge_routers_puts_static_first(self, client, seed, alice_headers):
        response = client.post("/system/menu/mergeRouters", headers=alice_headers, json={"staticRoutes": [
            {"path": "/user", "layout": False, "routes": [{"name": "login", "path": "/user/login"}]},
            {"path": "/welcome", "name": "welcome", "icon": "smile"},
        ]})
        assert response.status_code == 200
        menus = response.json()["data"]
        assert [menu["path"] for menu in menus] == ["/welcome", "/system"]
        assert menus[0]["locale"] == "menu.welcome"
        assert menus[1]["name"] == "系统管理"
        # 只读接口不记录操作日志
        assert seed.query(SysOperLog).count() == 0


class TestUserApi:
    def test_list_filters_by_dept(self, client, admin_headers):
        body = client.get("/system/user/list", headers=admin_headers, params={"deptId": 4}).json()
        assert body["total"] == 2
        assert {row["userName"] for row in body["rows"]} == {"alice", "bob"}

    def test_deleted_user_name_can_be_reused(self, client, admin_headers):
        assert client.delete("/system/user/2", headers=admin_headers).status_code == 200

        response = client.post("/system/user", headers=admin_headers, json={
            "userName": "alice", "nickName": "Alice 2", "password": "secret1", "deptId": 3
        })
        assert response.status_code == 200
        assert response.json()["data"]["userId"] != 2

        body = client.get("/system/user/list", headers=admin_headers, params={"userName": "alice"}).json()
        assert body["total"] == 1
        assert body["rows"][0]["nickName"] == "Alice 2"

    def test_reset_password_then_login(self, client, seed, admin_headers):
        client.put("/system/user/resetPwd", headers=admin_headers, json={"userId": 3, "password": "newpass"})
        response = client.post("/auth/login", json={"username": "bob", "password": "newpass"})
        assert response.status_code == 200

    def test_auth_role(self, client, admin_headers):
        response = client.put("/system/user/authRole", headers=admin_headers, json={"userId": 3, "roleIds": [2]})
        assert response.status_code == 200
        roles = client.get("/system/user-role/user/3/roles", headers=admin_headers).json()["data"]
        assert roles == [2]

    def test_profile_uses_token_user(self, client, seed):
        data = client.get("/system/user/profile", headers=bearer(seed, 2)).json()["data"]
        assert data["user"]["userName"] == "alice"
        assert data["roleGroup"] == "编辑"


class TestConfigApi:
    def test_config_crud(self, client, admin_headers):
        response = client.post("/system/config", headers=admin_headers, json={
            "configName": "主框架页-默认皮肤", "configKey": "sys.index.skinName", "configValue": "skin-blue"
        })
        assert response.status_code == 200

        value = client.get("/system/config/configKey/sys.index.skinName", headers=admin_headers).json()["data"]
        assert value == "skin-blue"

        duplicate = client.post("/system/config", headers=admin_headers, json={
            "configName": "重复", "configKey": "sys.index.skinName", "configValue": "x"
        })
        assert duplicate.status_code == 400

    def test_dict_data_by_type(self, client, admin_headers):
        client.post("/system/dict/type", headers=admin_headers, json={"dictName": "用户性别", "dictType": "sys_user_sex"})
        client.post("/system/dict/data", headers=admin_headers, json={
            "dictLabel": "男", "dictValue": "0", "dictType": "sys_user_sex", "dictSort": 1
        })
        data = client.get("/system/dict/dictType/sys_user_sex", headers=admin_headers).json()["data"]
        assert [item["dictLabel"] for item in data] == ["男"]
