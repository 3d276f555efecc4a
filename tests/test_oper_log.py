import json
from unittest.mock import patch

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient
from sqlalchemy import select

from backoffice.modules.admin.middleware.oper_log_middleware import (
    OperLogMiddleware, get_business_type, get_module_title, mask_sensitive, parse_result,
    BUSINESS_INSERT, BUSINESS_UPDATE, BUSINESS_DELETE, BUSINESS_EXPORT, BUSINESS_CLEAN, BUSINESS_OTHER,
    OPER_STATUS_SUCCESS, OPER_STATUS_FAIL, MASK
)
from backoffice.modules.admin.models.log import SysOperLog


def oper_logs(db):
    db.expire_all()
    return db.execute(select(SysOperLog).order_by(SysOperLog.oper_id)).scalars().all()


def test_business_type():
    assert get_business_type("POST", "/system/user") == BUSINESS_INSERT
    assert get_business_type("put", "/system/user") == BUSINESS_UPDATE
    assert get_business_type("DELETE", "/system/user/1,2") == BUSINESS_DELETE
    assert get_business_type("POST", "/system/user/export") == BUSINESS_EXPORT
    assert get_business_type("DELETE", "/monitor/operlog/clean") == BUSINESS_CLEAN
    assert get_business_type("PATCH", "/system/user") == BUSINESS_OTHER


def test_module_title():
    assert get_module_title("/system/user/1") == "用户管理"
    assert get_module_title("/system/role-menu/role/1/menus") == "角色菜单"
    assert get_module_title("/custom/thing") == "thing"
    assert get_module_title("/") == ""


def test_mask_sensitive_is_recursive():
    masked = mask_sensitive({
        "userName": "bob",
        "password": "secret",
        "profile": {"oldPassword": "a", "newPassword": "b"},
        "items": [{"PASSWORD": "c"}],
    })
    assert masked == {
        "userName": "bob",
        "password": MASK,
        "profile": {"oldPassword": MASK, "newPassword": MASK},
        "items": [{"PASSWORD": MASK}],
    }


def test_parse_result():
    ok = json.dumps({"code": 200, "result": True, "message": "操作成功"}).encode()
    assert parse_result(200, ok)[:2] == (OPER_STATUS_SUCCESS, "")

    failed = json.dumps({"code": 400, "result": False, "message": "名称已存在"}, ensure_ascii=False).encode()
    assert parse_result(400, failed)[:2] == (OPER_STATUS_FAIL, "名称已存在")

    assert parse_result(500, None) == (OPER_STATUS_FAIL, "", "")
    assert parse_result(200, b"not json")[0] == OPER_STATUS_SUCCESS


def test_mutation_is_recorded(client, admin_headers, seed):
    response = client.post("/system/dept", headers=admin_headers, json={"parentId": 1, "deptName": "运维部"})
    assert response.status_code == 200

    logs = oper_logs(seed)
    assert len(logs) == 1
    log = logs[0]
    assert log.title == "部门管理"
    assert log.business_type == BUSINESS_INSERT
    assert log.request_method == "POST"
    assert log.oper_name == "admin"
    assert log.status == OPER_STATUS_SUCCESS
    assert "运维部" in log.oper_param


def test_failed_mutation_is_recorded(client, admin_headers, seed):
    response = client.post("/system/dept", headers=admin_headers, json={"parentId": 1, "deptName": "研发部"})
    assert response.status_code == 400

    log = oper_logs(seed)[0]
    assert log.status == OPER_STATUS_FAIL
    assert log.error_msg == "同级部门下已存在相同名称的部门"


def test_password_is_masked(client, admin_headers, seed):
    response = client.put("/system/user/resetPwd", headers=admin_headers,
                          json={"userId": 3, "password": "topsecret"})
    assert response.status_code == 200

    log = oper_logs(seed)[0]
    assert "topsecret" not in log.oper_param
    assert MASK in log.oper_param


def test_reads_and_log_endpoints_are_not_recorded(client, admin_headers, seed):
    client.get("/system/dept/list", headers=admin_headers)
    client.delete("/monitor/operlog/clean", headers=admin_headers)
    assert oper_logs(seed) == []


def test_operlog_list(client, admin_headers, seed):
    client.post("/system/post", headers=admin_headers,
                json={"postCode": "dev", "postName": "开发", "postSort": 2})
    response = client.get("/monitor/operlog/list", headers=admin_headers, params={"title": "岗位"})
    body = response.json()
    assert body["total"] == 1
    assert body["rows"][0]["operName"] == "admin"


def test_repeated_response_headers_are_kept():
    demo = FastAPI()
    demo.add_middleware(OperLogMiddleware)

    @demo.post("/demo/session")
    def create_session():
        response = JSONResponse({"code": 200, "result": True, "message": "操作成功"})
        response.set_cookie("first", "1")
        response.set_cookie("second", "2")
        return response

    with patch("backoffice.modules.admin.middleware.oper_log_middleware.OperLogService.record") as record:
        response = TestClient(demo).post("/demo/session", json={"name": "demo"})

    assert response.status_code == 200
    assert response.json()["result"] is True
    cookies = response.headers.get_list("set-cookie")
    assert len(cookies) == 2
    assert {cookie.split("=")[0] for cookie in cookies} == {"first", "second"}
    assert record.call_args[0][0]["status"] == OPER_STATUS_SUCCESS
