from datetime import timedelta
from unittest.mock import MagicMock, patch

import geoip2.errors
import pytest

from backoffice.core.config import settings
from backoffice.core.exceptions import AuthException, BadRequest
from backoffice.modules.admin.utils.agent_util import (
    parse_browser, parse_os, parse_device_type, get_ip_location, INTERNAL_IP_LABEL, UNKNOWN_LOCATION
)
from backoffice.modules.admin.utils.auth_util import AuthContext, JWTUtil, PasswordUtil
from backoffice.modules.admin.utils.common_util import parse_ids
from backoffice.modules.admin.utils.route_util import merge_routes

CHROME_WIN = ("Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
              "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36")
EDGE_WIN = CHROME_WIN + " Edg/120.0.2210.91"
IPHONE_SAFARI = ("Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
                 "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1")


class TestAgentUtil:
    def test_browser(self):
        assert parse_browser(CHROME_WIN) == "Chrome 120"
        assert parse_browser(EDGE_WIN) == "Edge 120"
        assert parse_browser(IPHONE_SAFARI) == "Safari 17"
        assert parse_browser(None) == "Unknown"

    def test_os(self):
        assert parse_os(CHROME_WIN) == "Windows 10.0"
        assert parse_os(IPHONE_SAFARI) == "iOS 17.1"
        assert parse_os("curl/8.0") == "Unknown"

    def test_device_type(self):
        assert parse_device_type(CHROME_WIN) == "pc"
        assert parse_device_type(IPHONE_SAFARI) == "mobile"
        assert parse_device_type(None) == "pc"

    def test_ip_location(self):
        assert get_ip_location("127.0.0.1") == INTERNAL_IP_LABEL
        assert get_ip_location("192.168.1.20") == INTERNAL_IP_LABEL
        assert get_ip_location("testclient") == INTERNAL_IP_LABEL
        assert get_ip_location("8.8.8.8") == UNKNOWN_LOCATION

    def test_ip_location_from_geoip_db(self):
        response = MagicMock()
        response.country.names = {"zh-CN": "中国"}
        response.subdivisions.most_specific.names = {"zh-CN": "北京市"}
        response.city.names = {"zh-CN": "北京市"}
        reader = MagicMock()
        reader.city.return_value = response

        with patch.object(settings, "GEOIP_DB_PATH", "/data/GeoLite2-City.mmdb"), \
                patch("backoffice.modules.admin.utils.agent_util.get_geoip_reader", return_value=reader) as get_reader:
            assert get_ip_location("114.114.114.114") == "中国 北京市"
            get_reader.assert_called_with("/data/GeoLite2-City.mmdb")
            # 内网地址不查库
            assert get_ip_location("10.0.0.1") == INTERNAL_IP_LABEL
            assert reader.city.call_count == 1

            reader.city.side_effect = geoip2.errors.AddressNotFoundError("not found")
            assert get_ip_location("1.2.3.4") == UNKNOWN_LOCATION


class TestAuthUtil:
    def test_token_round_trip(self):
        token = JWTUtil.create_access_token({"user_id": 5, "username": "eve"})
        context = AuthContext.from_claims(JWTUtil.decode_access_token(token))
        assert context.user_id == 5
        assert context.user_name == "eve"

    def test_expired_token(self):
        token = JWTUtil.create_access_token({"user_id": 5, "username": "eve"}, timedelta(seconds=-1))
        with pytest.raises(AuthException):
            JWTUtil.decode_access_token(token)
        assert JWTUtil.decode_without_verify(token)["username"] == "eve"

    def test_claims_without_user(self):
        with pytest.raises(AuthException):
            AuthContext.from_claims({"username": "eve"})
        with pytest.raises(AuthException):
            AuthContext.from_claims({"user_id": "abc", "username": "eve"})

    def test_extract_bearer_token(self):
        assert JWTUtil.extract_bearer_token("Bearer abc") == "abc"
        assert JWTUtil.extract_bearer_token("bearer  abc ") == "abc"
        assert JWTUtil.extract_bearer_token("Basic abc") is None
        assert JWTUtil.extract_bearer_token("Bearer") is None
        assert JWTUtil.extract_bearer_token(None) is None

    def test_password_hash(self):
        hashed = PasswordUtil.get_password_hash("secret")
        assert PasswordUtil.verify_password("secret", hashed)
        assert not PasswordUtil.verify_password("other", hashed)
        assert not PasswordUtil.verify_password("secret", "not-a-hash")
        assert not PasswordUtil.verify_password("", hashed)


def test_parse_ids():
    assert parse_ids("1, 2,3,") == [1, 2, 3]
    with pytest.raises(BadRequest):
        parse_ids("1,a")
    with pytest.raises(BadRequest):
        parse_ids(" , ")


STATIC_ROUTES = [
    {"path": "/user", "layout": False, "routes": [{"name": "login", "path": "/user/login"}]},
    {"path": "/welcome", "name": "welcome", "icon": "smile"},
    {
        "path": "/admin",
        "name": "admin",
        "icon": "crown",
        "routes": [
            {"path": "/admin", "redirect": "/admin/sub-page"},
            {"path": "/admin/sub-page", "name": "sub-page"},
        ],
    },
    {"path": "/", "redirect": "/welcome"},
    {"path": "/*", "layout": False},
]


def test_merge_routes_static_first():
    dynamic = [{
        "path": "/system",
        "hidden": False,
        "meta": {"title": "系统管理", "icon": "system"},
        "children": [{"path": "user", "hidden": True, "meta": {"title": "用户管理", "icon": "user"}}],
    }]
    menus = merge_routes(STATIC_ROUTES, dynamic)

    assert [menu["path"] for menu in menus] == ["/welcome", "/admin", "/system"]
    assert menus[0] == {"path": "/welcome", "name": "welcome", "locale": "menu.welcome", "icon": "smile"}
    assert menus[1]["children"] == [
        {"path": "/admin/sub-page", "name": "admin.sub-page", "locale": "menu.admin.sub-page", "icon": None}
    ]
    assert menus[2]["name"] == "系统管理"
    assert menus[2]["children"][0]["hideInMenu"] is True


def test_merge_routes_without_dynamic():
    assert [menu["name"] for menu in merge_routes(STATIC_ROUTES)] == ["welcome", "admin"]
