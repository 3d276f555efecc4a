import os

# 必须在导入 backoffice 之前设置，避免连接MySQL和创建日志目录
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["LOG_TO_FILE"] = "false"
os.environ["OPER_LOG_ENABLED"] = "true"
os.environ["AUTH_ENABLED"] = "true"

import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backoffice.db.base import Base
from backoffice.db.session import get_db
from backoffice.main import app
from backoffice.modules.admin.models.menu import SysMenu
from backoffice.modules.admin.models.system import (
    SysDept, SysUser, SysRole, SysPost, SysUserRole, SysRoleMenu
)
from backoffice.modules.admin.services.auth_service import AuthService
from backoffice.modules.admin.utils.auth_util import AuthContext, PasswordUtil

TEST_PASSWORD = "admin123"
# bcrypt 较慢，所有用户共用一个哈希
PASSWORD_HASH = PasswordUtil.get_password_hash(TEST_PASSWORD)


@pytest.fixture
def engine():
    """每个用例一个内存数据库，所有会话共享同一连接"""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    # 登录日志、操作日志使用独立会话写入
    with patch("backoffice.db.session.SessionLocal", factory):
        yield factory


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_dept(db, dept_id, parent_id, ancestors, name, order_num=0):
    dept = SysDept(dept_id=dept_id, parent_id=parent_id, ancestors=ancestors, dept_name=name, order_num=order_num)
    db.add(dept)
    return dept


def make_user(db, user_id, user_name, dept_id=None, role_ids=(), status="0"):
    user = SysUser(
        user_id=user_id,
        user_name=user_name,
        nick_name=user_name.title(),
        dept_id=dept_id,
        password=PASSWORD_HASH,
        status=status,
    )
    db.add(user)
    for role_id in role_ids:
        db.add(SysUserRole(user_id=user_id, role_id=role_id))
    return user


def make_menu(db, menu_id, parent_id, name, menu_type, path="", perms=None, order_num=0, **kwargs):
    menu = SysMenu(
        menu_id=menu_id,
        parent_id=parent_id,
        menu_name=name,
        menu_type=menu_type,
        path=path,
        perms=perms,
        order_num=order_num,
        **kwargs
    )
    db.add(menu)
    return menu


@pytest.fixture
def seed(db):
    """
    基础数据

    部门: 1 总公司 -> 2 研发部 -> 4 前端组 -> 5 组件小组，1 -> 3 市场部
    角色: 1 超级管理员，2 editor（只授权目录10）
    用户: 1 admin(超级管理员)，2 alice(editor)，3 bob(无角色)
    菜单: 10 系统管理(M) -> 11 用户管理(C)，12 用户按钮(F)
          20 其他(M) -> 21 用户(C)，路径与11相同
    """
    make_dept(db, 1, 0, "", "总公司")
    make_dept(db, 2, 1, "1", "研发部", order_num=1)
    make_dept(db, 3, 1, "1", "市场部", order_num=2)
    make_dept(db, 4, 2, "1,2", "前端组")
    make_dept(db, 5, 4, "1,2,4", "组件小组")

    db.add(SysRole(role_id=1, role_name="超级管理员", role_key="superadmin", role_sort=1, super_admin=True))
    db.add(SysRole(role_id=2, role_name="编辑", role_key="editor", role_sort=2))

    make_user(db, 1, "admin", dept_id=1, role_ids=[1])
    make_user(db, 2, "alice", dept_id=4, role_ids=[2])
    make_user(db, 3, "bob", dept_id=5)

    make_menu(db, 10, 0, "系统管理", "M", path="system", order_num=1, icon="system")
    make_menu(db, 11, 10, "用户管理", "C", path="user", perms="sys:user:list", order_num=1,
              component="system/user/index")
    make_menu(db, 12, 10, "用户按钮", "F", perms="sys:user:add, sys:user:edit", order_num=2)
    make_menu(db, 20, 0, "其他", "M", path="other", order_num=2)
    make_menu(db, 21, 20, "用户", "C", path="user", perms="other:user:list", order_num=1)

    db.add(SysRoleMenu(role_id=2, menu_id=10))
    db.add(SysPost(post_id=1, post_code="ceo", post_name="董事长", post_sort=1))
    db.commit()
    return db


def auth_context(user_id=1, user_name="admin"):
    return AuthContext(user_id=user_id, user_name=user_name, tenant_id="000000")


@pytest.fixture
def admin_auth():
    return auth_context()


def bearer(db, user_id):
    """为用户签发令牌并返回请求头"""
    user = db.get(SysUser, user_id)
    return {"Authorization": f"Bearer {AuthService.create_token(user)}"}


@pytest.fixture
def admin_headers(seed):
    return bearer(seed, 1)


@pytest.fixture
def alice_headers(seed):
    return bearer(seed, 2)


@pytest.fixture
def bob_headers(seed):
    return bearer(seed, 3)
