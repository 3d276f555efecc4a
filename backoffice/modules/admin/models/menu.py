"""
菜单权限数据库模型
"""
from sqlalchemy import Column, Integer, String

from backoffice.db.base import Base, IdType, AuditMixin

# 菜单类型
MENU_TYPE_DIR = 'M'
MENU_TYPE_MENU = 'C'
MENU_TYPE_BUTTON = 'F'


class SysMenu(AuditMixin, Base):
    """菜单权限表"""
    __tablename__ = "sys_menu"

    menu_id = Column(IdType, primary_key=True, autoincrement=True, comment="菜单ID")
    menu_name = Column(String(50), nullable=False, comment="菜单名称")
    parent_id = Column(IdType, default=0, nullable=False, comment="父菜单ID")
    order_num = Column(Integer, default=0, comment="显示顺序")
    path = Column(String(200), default="", comment="路由地址")
    component = Column(String(255), comment="组件路径")
    query_param = Column(String(255), comment="路由参数")
    is_frame = Column(Integer, default=1, comment="是否为外链（0是 1否）")
    is_cache = Column(Integer, default=0, comment="是否缓存（0缓存 1不缓存）")
    menu_type = Column(String(1), default="", comment="菜单类型（M目录 C菜单 F按钮）")
    visible = Column(String(1), default="0", comment="显示状态（0显示 1隐藏）")
    status = Column(String(1), default="0", comment="菜单状态（0正常 1停用）")
    perms = Column(String(100), comment="权限标识")
    icon = Column(String(100), default="#", comment="菜单图标")
    remark = Column(String(500), default="", comment="备注")
