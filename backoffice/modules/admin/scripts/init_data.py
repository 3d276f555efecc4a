"""
初始化数据脚本

建表后幂等地写入：根部门、超级管理员角色、admin 用户以及系统管理菜单（含按钮权限）。
"""
from sqlalchemy.orm import Session
from sqlalchemy import select

from backoffice.core.config import settings
from backoffice.db.base import Base
from backoffice.db import session as db_session
from backoffice.modules.admin.models.menu import SysMenu, MENU_TYPE_DIR, MENU_TYPE_MENU, MENU_TYPE_BUTTON
from backoffice.modules.admin.models.system import SysDept, SysRole, SysUser, SysUserRole
from backoffice.modules.admin.utils.auth_util import PasswordUtil

ADMIN_PASSWORD = "admin123"
SEED_BY = "system"

# (menu_id, parent_id, 名称, 路由, 组件, 权限前缀, 图标, 按钮)
DIRECTORIES = [
    (1, 0, "系统管理", "system", "system"),
    (2, 0, "系统监控", "monitor", "monitor"),
]

PAGES = [
    (100, 1, "用户管理", "user", "system/user/index", "system:user", "user",
     ["query", "add", "edit", "remove", "export", "resetPwd"]),
    (101, 1, "角色管理", "role", "system/role/index", "system:role", "peoples",
     ["query", "add", "edit", "remove", "export"]),
    (102, 1, "菜单管理", "menu", "system/menu/index", "system:menu", "tree-table",
     ["query", "add", "edit", "remove"]),
    (103, 1, "部门管理", "dept", "system/dept/index", "system:dept", "tree",
     ["query", "add", "edit", "remove"]),
    (104, 1, "岗位管理", "post", "system/post/index", "system:post", "post",
     ["query", "add", "edit", "remove", "export"]),
    (105, 1, "字典管理", "dict", "system/dict/index", "system:dict", "dict",
     ["query", "add", "edit", "remove", "export"]),
    (106, 1, "参数设置", "config", "system/config/index", "system:config", "edit",
     ["query", "add", "edit", "remove", "export"]),
    (107, 1, "通知公告", "notice", "system/notice/index", "system:notice", "message",
     ["query", "add", "edit", "remove"]),
    (108, 2, "操作日志", "operlog", "monitor/operlog/index", "monitor:operlog", "form",
     ["query", "remove", "export"]),
    (109, 2, "登录日志", "logininfor", "monitor/logininfor/index", "monitor:logininfor", "logininfor",
     ["query", "remove", "export", "unlock"]),
]

BUTTON_NAMES = {
    "query": "查询",
    "add": "新增",
    "edit": "修改",
    "remove": "删除",
    "export": "导出",
    "resetPwd": "重置密码",
    "unlock": "账户解锁",
}

BUTTON_ID_START = 1000


def build_menus():
    """
    生成种子菜单（目录、菜单、按钮）

    Returns:
        SysMenu 列表，按钮ID从 1000 起连续分配
    """
    menus = [
        SysMenu(menu_id=menu_id, parent_id=parent_id, menu_name=name, order_num=index + 1,
                path=path, menu_type=MENU_TYPE_DIR, icon=icon, is_frame=1, is_cache=0,
                create_by=SEED_BY, update_by=SEED_BY)
        for index, (menu_id, parent_id, name, path, icon) in enumerate(DIRECTORIES)
    ]
    button_id = BUTTON_ID_START
    for index, (menu_id, parent_id, name, path, component, prefix, icon, buttons) in enumerate(PAGES):
        menus.append(SysMenu(
            menu_id=menu_id, parent_id=parent_id, menu_name=name, order_num=index + 1,
            path=path, component=component, menu_type=MENU_TYPE_MENU, perms=f"{prefix}:list",
            icon=icon, is_frame=1, is_cache=0, create_by=SEED_BY, update_by=SEED_BY
        ))
        for order, action in enumerate(buttons, start=1):
            menus.append(SysMenu(
                menu_id=button_id, parent_id=menu_id, menu_name=f"{name[:-2]}{BUTTON_NAMES[action]}",
                order_num=order, path="", menu_type=MENU_TYPE_BUTTON, perms=f"{prefix}:{action}",
                icon="#", is_frame=1, is_cache=0, create_by=SEED_BY, update_by=SEED_BY
            ))
            button_id += 1
    return menus


def init_dept(db: Session) -> SysDept:
    dept = db.execute(select(SysDept).where(SysDept.parent_id == 0)).scalars().first()
    if dept:
        print("根部门已存在，跳过初始化")
        return dept
    dept = SysDept(
        tenant_id=settings.DEFAULT_TENANT_ID,
        parent_id=0,
        ancestors="",
        dept_name="总公司",
        order_num=0,
        leader="admin",
        create_by=SEED_BY,
        update_by=SEED_BY
    )
    db.add(dept)
    db.flush()
    return dept


def init_super_admin_role(db: Session) -> SysRole:
    role = db.execute(
        select(SysRole).where(SysRole.role_key == settings.SUPER_ADMIN_ROLE_KEY)
    ).scalars().first()
    if role:
        if not role.super_admin:
            # 早期数据只有角色键，补齐标记
            role.super_admin = True
        print("超级管理员角色已存在，跳过初始化")
        return role
    role = SysRole(
        tenant_id=settings.DEFAULT_TENANT_ID,
        role_name="超级管理员",
        role_key=settings.SUPER_ADMIN_ROLE_KEY,
        role_sort=1,
        data_scope="1",
        super_admin=True,
        create_by=SEED_BY,
        update_by=SEED_BY,
        remark="超级管理员"
    )
    db.add(role)
    db.flush()
    return role


def init_admin_user(db: Session, dept: SysDept, role: SysRole) -> SysUser:
    user = db.execute(
        select(SysUser).where(SysUser.user_name == settings.ADMIN_USER_NAME)
    ).scalars().first()
    if user:
        print("管理员用户已存在，跳过初始化")
        return user
    user = SysUser(
        tenant_id=settings.DEFAULT_TENANT_ID,
        dept_id=dept.dept_id,
        user_name=settings.ADMIN_USER_NAME,
        nick_name="超级管理员",
        password=PasswordUtil.get_password_hash(ADMIN_PASSWORD),
        create_by=SEED_BY,
        update_by=SEED_BY,
        remark="管理员"
    )
    db.add(user)
    db.flush()
    db.add(SysUserRole(user_id=user.user_id, role_id=role.role_id))
    return user


def init_menus(db: Session) -> int:
    existing = set(db.execute(select(SysMenu.menu_id)).scalars().all())
    missing = [menu for menu in build_menus() if menu.menu_id not in existing]
    db.add_all(missing)
    return len(missing)


def seed(db: Session) -> None:
    """
    写入初始化数据，可重复执行

    Args:
        db: 数据库会话
    """
    try:
        dept = init_dept(db)
        role = init_super_admin_role(db)
        init_admin_user(db, dept, role)
        added = init_menus(db)
        db.commit()
    except Exception:
        db.rollback()
        raise
    print(f"初始化完成，新增菜单 {added} 个")


def main():
    """主函数"""
    print("=" * 60)
    print("初始化后台管理数据")
    print("=" * 60)

    Base.metadata.create_all(bind=db_session.engine)
    with db_session.SessionLocal() as db:
        seed(db)

    print(f"管理员账号: {settings.ADMIN_USER_NAME} / {ADMIN_PASSWORD}")


if __name__ == "__main__":
    main()
