#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
系统管理数据库模型
用户、部门、角色、岗位、参数配置、字典、通知公告及关联表
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, Index, UniqueConstraint

from backoffice.db.base import Base, IdType, SoftDeleteMixin, AuditMixin


class SysDept(SoftDeleteMixin, AuditMixin, Base):
    """部门表"""
    __tablename__ = "sys_dept"

    dept_id = Column(IdType, primary_key=True, autoincrement=True, comment="部门id")
    tenant_id = Column(String(20), default="000000", comment="租户编号")
    parent_id = Column(IdType, default=0, nullable=False, comment="父部门id")
    ancestors = Column(String(500), default="", nullable=False, comment="祖级列表")
    dept_name = Column(String(30), default="", nullable=False, comment="部门名称")
    dept_category = Column(String(100), comment="部门类别编码")
    order_num = Column(Integer, default=0, comment="显示顺序")
    leader = Column(String(20), comment="负责人")
    phone = Column(String(20), comment="联系电话")
    email = Column(String(50), comment="邮箱")
    status = Column(String(1), default="0", comment="部门状态（0正常 1停用）")


class SysUser(SoftDeleteMixin, AuditMixin, Base):
    """用户表"""
    __tablename__ = "sys_user"

    # 逻辑删除后账号可以重新使用，唯一性由服务层按未删除数据校验
    __table_args__ = (
        Index('idx_sys_user_tenant_name', 'tenant_id', 'user_name'),
    )

    user_id = Column(IdType, primary_key=True, autoincrement=True, comment="用户ID")
    tenant_id = Column(String(20), default="000000", comment="租户编号")
    dept_id = Column(IdType, comment="部门ID")
    user_name = Column(String(30), nullable=False, comment="用户账号")
    nick_name = Column(String(30), nullable=False, comment="用户昵称")
    user_type = Column(String(10), default="sys_user", comment="用户类型（sys_user系统用户）")
    email = Column(String(50), default="", comment="用户邮箱")
    phonenumber = Column(String(11), default="", comment="手机号码")
    sex = Column(String(1), default="0", comment="用户性别（0男 1女 2未知）")
    avatar = Column(String(255), comment="头像地址")
    password = Column(String(100), default="", comment="密码")
    status = Column(String(1), default="0", comment="帐号状态（0正常 1停用）")
    login_ip = Column(String(128), default="", comment="最后登录IP")
    login_date = Column(DateTime, comment="最后登录时间")
    remark = Column(String(500), comment="备注")


class SysRole(SoftDeleteMixin, AuditMixin, Base):
    """角色表"""
    __tablename__ = "sys_role"

    role_id = Column(IdType, primary_key=True, autoincrement=True, comment="角色ID")
    tenant_id = Column(String(20), default="000000", comment="租户编号")
    role_name = Column(String(30), nullable=False, comment="角色名称")
    role_key = Column(String(100), nullable=False, comment="角色权限字符串")
    role_sort = Column(Integer, default=0, nullable=False, comment="显示顺序")
    data_scope = Column(String(1), default="1", comment="数据范围（1全部 2自定义 3本部门 4本部门及以下 5仅本人 6部门及以下或本人）")
    menu_check_strictly = Column(Boolean, default=True, comment="菜单树选择项是否关联显示")
    dept_check_strictly = Column(Boolean, default=True, comment="部门树选择项是否关联显示")
    super_admin = Column(Boolean, default=False, nullable=False, comment="是否超级管理员（拥有全部权限）")
    status = Column(String(1), default="0", nullable=False, comment="角色状态（0正常 1停用）")
    remark = Column(String(500), comment="备注")


class SysPost(AuditMixin, Base):
    """岗位表"""
    __tablename__ = "sys_post"

    post_id = Column(IdType, primary_key=True, autoincrement=True, comment="岗位ID")
    tenant_id = Column(String(20), default="000000", comment="租户编号")
    dept_id = Column(IdType, comment="部门id")
    post_code = Column(String(64), nullable=False, comment="岗位编码")
    post_category = Column(String(100), comment="岗位类别编码")
    post_name = Column(String(50), nullable=False, comment="岗位名称")
    post_sort = Column(Integer, default=0, nullable=False, comment="显示顺序")
    status = Column(String(1), default="0", nullable=False, comment="状态（0正常 1停用）")
    remark = Column(String(500), comment="备注")


class SysUserRole(Base):
    """用户和角色关联表"""
    __tablename__ = "sys_user_role"

    user_id = Column(IdType, primary_key=True, comment="用户ID")
    role_id = Column(IdType, primary_key=True, comment="角色ID")


class SysUserPost(Base):
    """用户与岗位关联表"""
    __tablename__ = "sys_user_post"

    user_id = Column(IdType, primary_key=True, comment="用户ID")
    post_id = Column(IdType, primary_key=True, comment="岗位ID")


class SysRoleMenu(Base):
    """角色和菜单关联表"""
    __tablename__ = "sys_role_menu"

    role_id = Column(IdType, primary_key=True, comment="角色ID")
    menu_id = Column(IdType, primary_key=True, comment="菜单ID")


class SysConfig(AuditMixin, Base):
    """参数配置表"""
    __tablename__ = "sys_config"

    __table_args__ = (
        UniqueConstraint('tenant_id', 'config_key', name='uk_sys_config_tenant_key'),
    )

    config_id = Column(IdType, primary_key=True, autoincrement=True, comment="参数主键")
    tenant_id = Column(String(20), default="000000", comment="租户编号")
    config_name = Column(String(100), default="", comment="参数名称")
    config_key = Column(String(100), default="", comment="参数键名")
    config_value = Column(String(500), default="", comment="参数键值")
    config_type = Column(String(1), default="N", comment="系统内置（Y是 N否）")
    remark = Column(String(500), comment="备注")


class SysDictType(AuditMixin, Base):
    """字典类型表"""
    __tablename__ = "sys_dict_type"

    __table_args__ = (
        UniqueConstraint('tenant_id', 'dict_type', name='uk_sys_dict_type_tenant_type'),
    )

    dict_id = Column(IdType, primary_key=True, autoincrement=True, comment="字典主键")
    tenant_id = Column(String(20), default="000000", comment="租户编号")
    dict_name = Column(String(100), default="", comment="字典名称")
    dict_type = Column(String(100), default="", comment="字典类型")
    remark = Column(String(500), comment="备注")


class SysDictData(AuditMixin, Base):
    """字典数据表"""
    __tablename__ = "sys_dict_data"

    dict_code = Column(IdType, primary_key=True, autoincrement=True, comment="字典编码")
    tenant_id = Column(String(20), default="000000", comment="租户编号")
    dict_sort = Column(Integer, default=0, comment="字典排序")
    dict_label = Column(String(100), default="", comment="字典标签")
    dict_value = Column(String(100), default="", comment="字典键值")
    dict_type = Column(String(100), default="", comment="字典类型")
    css_class = Column(String(100), comment="样式属性（其他样式扩展）")
    list_class = Column(String(100), comment="表格回显样式")
    is_default = Column(String(1), default="N", comment="是否默认（Y是 N否）")
    remark = Column(String(500), comment="备注")


class SysNotice(AuditMixin, Base):
    """通知公告表"""
    __tablename__ = "sys_notice"

    notice_id = Column(IdType, primary_key=True, autoincrement=True, comment="公告ID")
    tenant_id = Column(String(20), default="000000", comment="租户编号")
    notice_title = Column(String(50), nullable=False, comment="公告标题")
    notice_type = Column(String(1), nullable=False, comment="公告类型（1通知 2公告）")
    notice_content = Column(Text, comment="公告内容")
    status = Column(String(1), default="0", comment="公告状态（0正常 1关闭）")
    remark = Column(String(255), comment="备注")
