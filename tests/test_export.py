from io import BytesIO

import pandas as pd

from backoffice.modules.admin.utils.excel_util import ExcelUtil, XLSX_MEDIA_TYPE

MAPPING = {"user_name": "用户账号", "nick_name": "用户昵称"}


def test_to_dataframe_keeps_mapping_order():
    frame = ExcelUtil.to_dataframe([{"nick_name": "A", "user_name": "a", "extra": 1}], MAPPING)
    assert list(frame.columns) == ["用户账号", "用户昵称"]
    assert frame.iloc[0].tolist() == ["a", "A"]


def test_to_dataframe_empty_rows_has_headers():
    frame = ExcelUtil.to_dataframe([], MAPPING)
    assert list(frame.columns) == ["用户账号", "用户昵称"]
    assert frame.empty


def test_to_bytes_is_readable():
    content = ExcelUtil.to_bytes([{"user_name": "a", "nick_name": "A"}], MAPPING, sheet_name="用户数据")
    frame = pd.read_excel(BytesIO(content), sheet_name="用户数据", engine="openpyxl")
    assert frame["用户账号"].tolist() == ["a"]


def test_user_export_api(client, admin_headers):
    response = client.post("/system/user/export", headers=admin_headers, json={"deptId": 2})
    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX_MEDIA_TYPE
    assert "attachment" in response.headers["content-disposition"]

    frame = pd.read_excel(BytesIO(response.content), engine="openpyxl")
    assert len(frame) == 2


def test_export_requires_permission(client, alice_headers):
    response = client.post("/system/user/export", headers=alice_headers)
    assert response.status_code == 403
    assert response.json()["result"] is False
