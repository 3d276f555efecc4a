import pytest

from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.modules.admin.models.system import SysUser
from backoffice.modules.admin.schemas.user import (
    AddUserModel, EditUserModel, UserPageQueryModel, ChangeUserStatusModel, UpdatePasswordModel
)
from backoffice.modules.admin.services.user_service import UserService
from backoffice.modules.admin.utils.auth_util import PasswordUtil
from tests.conftest import TEST_PASSWORD, auth_context


def test_list_by_dept_includes_children(seed):
    rows, total = UserService.get_user_list_services(seed, UserPageQueryModel(dept_id=2))
    assert total == 2
    assert sorted(row.user_name for row in rows) == ["alice", "bob"]
    assert {row.user_name: row.dept_name for row in rows}["bob"] == "组件小组"


def test_list_paging(seed):
    rows, total = UserService.get_user_list_services(seed, UserPageQueryModel(page_num=2, page_size=2))
    assert total == 3
    assert len(rows) == 1


def test_add_user_hashes_password_and_links(seed, admin_auth):
    data = AddUserModel(user_name="carol", nick_name="Carol", password="secret1", dept_id=3,
                        role_ids=[2], post_ids=[1])
    user = UserService.add_user_services(seed, data, admin_auth)
    stored = seed.get(SysUser, user.user_id)
    assert stored.password != "secret1"
    assert PasswordUtil.verify_password("secret1", stored.password)
    assert UserService.get_user_role_ids_services(seed, user.user_id) == [2]
    assert UserService.get_user_post_ids_services(seed, user.user_id) == [1]


def test_add_user_duplicate_name(seed, admin_auth):
    with pytest.raises(BadRequest):
        UserService.add_user_services(
            seed, AddUserModel(user_name="alice", nick_name="A", password="secret1"), admin_auth
        )


def test_add_user_unknown_role(seed, admin_auth):
    with pytest.raises(BadRequest):
        UserService.add_user_services(
            seed, AddUserModel(user_name="dave", nick_name="D", password="secret1", role_ids=[42]), admin_auth
        )


def test_edit_user_keeps_password_when_empty(seed, admin_auth):
    before = seed.get(SysUser, 2).password
    UserService.edit_user_services(
        seed, EditUserModel(user_id=2, user_name="alice", nick_name="Alice Z", dept_id=4), admin_auth
    )
    seed.expire_all()
    user = seed.get(SysUser, 2)
    assert user.nick_name == "Alice Z"
    assert user.password == before
    # role_ids 未传，关联不变
    assert UserService.get_user_role_ids_services(seed, 2) == [2]


def test_admin_cannot_be_disabled_or_deleted(seed, admin_auth):
    with pytest.raises(BadRequest):
        UserService.change_status_services(seed, ChangeUserStatusModel(user_id=1, status="1"), auth_context(2, "alice"))
    with pytest.raises(BadRequest):
        UserService.delete_user_services(seed, [1], auth_context(2, "alice"))


def test_cannot_delete_self(seed, admin_auth):
    with pytest.raises(BadRequest):
        UserService.delete_user_services(seed, [1], admin_auth)


def test_delete_user_removes_links(seed, admin_auth):
    assert UserService.delete_user_services(seed, [2], admin_auth) == 1
    with pytest.raises(ResourceNotFound):
        UserService.get_user_detail_services(seed, 2)


def test_update_password(seed):
    auth = auth_context(3, "bob")
    with pytest.raises(BadRequest):
        UserService.update_password_services(
            seed, UpdatePasswordModel(old_password="wrong", new_password="secret2"), auth
        )
    with pytest.raises(BadRequest):
        UserService.update_password_services(
            seed, UpdatePasswordModel(old_password=TEST_PASSWORD, new_password=TEST_PASSWORD), auth
        )
    UserService.update_password_services(
        seed, UpdatePasswordModel(old_password=TEST_PASSWORD, new_password="secret2"), auth
    )
    seed.expire_all()
    assert PasswordUtil.verify_password("secret2", seed.get(SysUser, 3).password)


def test_detail_flags_assigned_roles(seed):
    detail = UserService.get_user_detail_services(seed, 2)
    assert detail.role_ids == [2]
    assert {role.role_key: role.flag for role in detail.roles} == {"superadmin": False, "editor": True}
    assert detail.user.dept_name == "前端组"


def test_profile(seed):
    profile = UserService.get_profile_services(seed, auth_context(2, "alice"))
    assert profile["roleGroup"] == "编辑"
    assert profile["postGroup"] == ""
