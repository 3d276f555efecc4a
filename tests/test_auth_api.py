from datetime import timedelta

from sqlalchemy import select

from backoffice.modules.admin.models.log import SysLoginLog
from backoffice.modules.admin.models.system import SysUser
from backoffice.modules.admin.utils.auth_util import JWTUtil
from tests.conftest import TEST_PASSWORD

INVALID_BODY = {
    "code": 401,
    "result": False,
    "data": None,
    "message": "Token无效或已过期，请重新登录",
}


def login_logs(db):
    db.expire_all()
    return db.execute(select(SysLoginLog).order_by(SysLoginLog.info_id)).scalars().all()


def test_login_success(client, seed):
    response = client.post("/auth/login", json={"username": "admin", "password": TEST_PASSWORD})
    assert response.status_code == 200
    body = response.json()
    assert body["code"] == 200
    assert body["result"] is True
    assert body["data"]["token_type"] == "bearer"
    assert body["data"]["user"]["userName"] == "admin"

    claims = JWTUtil.decode_access_token(body["data"]["access_token"])
    assert claims["username"] == "admin"

    logs = login_logs(seed)
    assert [(log.user_name, log.status) for log in logs] == [("admin", 0)]
    seed.expire_all()
    assert seed.get(SysUser, 1).login_date is not None


def test_login_wrong_password(client, seed):
    response = client.post("/auth/login", json={"username": "admin", "password": "bad-password"})
    assert response.status_code == 401
    assert response.json()["message"] == "用户名或密码错误"
    assert [(log.status, log.msg) for log in login_logs(seed)] == [(1, "密码错误")]


def test_login_disabled_user(client, seed):
    seed.get(SysUser, 3).status = "1"
    seed.commit()
    response = client.post("/auth/login", json={"username": "bob", "password": TEST_PASSWORD})
    assert response.status_code == 401
    assert response.json()["result"] is False


def test_login_validation_error(client, seed):
    response = client.post("/auth/login", json={"username": "admin"})
    assert response.status_code == 422
    assert response.json()["message"] == "参数校验失败"


def test_missing_token_is_rejected(client, seed):
    response = client.get("/auth/getInfo")
    assert response.status_code == 401
    assert response.json() == INVALID_BODY
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_garbage_and_expired_tokens_share_body(client, seed):
    expired = JWTUtil.create_access_token({"user_id": 1, "username": "admin"}, timedelta(seconds=-10))
    for token in ["garbage", expired]:
        response = client.get("/system/menu/getRouters", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json() == INVALID_BODY


def test_logout_records_log_for_invalid_tokens(client, seed):
    expired = JWTUtil.create_access_token({"user_id": 2, "username": "alice"}, timedelta(seconds=-10))
    assert client.post("/auth/logout", headers={"Authorization": f"Bearer {expired}"}).json()["result"] is True
    assert client.post("/auth/logout", headers={"Authorization": "Bearer garbage"}).status_code == 200
    assert client.post("/auth/logout").status_code == 200

    logs = login_logs(seed)
    assert [log.user_name for log in logs] == ["alice", "", ""]
    assert {log.msg for log in logs} == {"退出成功"}


def test_get_info(client, alice_headers):
    response = client.get("/auth/getInfo", headers=alice_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["roles"] == ["editor"]
    assert data["permissions"] == ["sys:user:add", "sys:user:edit", "sys:user:list"]
    assert data["user"]["userName"] == "alice"
    assert "password" not in data["user"]


def test_get_info_for_deleted_user(client, seed, alice_headers):
    seed.get(SysUser, 2).del_flag = "2"
    seed.commit()
    response = client.get("/auth/getInfo", headers=alice_headers)
    assert response.status_code == 401


def test_get_routers(client, admin_headers):
    response = client.get("/system/menu/getRouters", headers=admin_headers)
    assert response.status_code == 200
    routes = response.json()["data"]
    assert [route["path"] for route in routes] == ["/system", "/other"]


def test_health_is_public(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "ok"
