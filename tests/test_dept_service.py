import pytest

from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.modules.admin.models.system import SysDept
from backoffice.modules.admin.schemas.dept import AddDeptModel, EditDeptModel, DeptQueryModel
from backoffice.modules.admin.services.dept_service import DeptService, child_ancestors


def edit_model(dept, **changes):
    data = {"dept_id": dept.dept_id, "parent_id": dept.parent_id, "dept_name": dept.dept_name,
            "order_num": dept.order_num or 0}
    data.update(changes)
    return EditDeptModel(**data)


def test_child_ancestors():
    assert child_ancestors(None) == ""
    assert child_ancestors(SysDept(dept_id=1, ancestors="")) == "1"
    assert child_ancestors(SysDept(dept_id=7, ancestors="1,3")) == "1,3,7"


def test_add_dept_computes_ancestors(seed, admin_auth):
    dept = DeptService.add_dept_services(seed, AddDeptModel(parent_id=4, dept_name="测试组"), admin_auth)
    assert dept.ancestors == "1,2,4"
    assert dept.create_by == "admin"


def test_add_dept_rejects_duplicate_sibling_name(seed, admin_auth):
    with pytest.raises(BadRequest):
        DeptService.add_dept_services(seed, AddDeptModel(parent_id=1, dept_name="研发部"), admin_auth)


def test_add_dept_unknown_parent(seed, admin_auth):
    with pytest.raises(ResourceNotFound):
        DeptService.add_dept_services(seed, AddDeptModel(parent_id=99, dept_name="无主"), admin_auth)


def test_move_dept_rewrites_descendants(seed, admin_auth):
    dept = seed.get(SysDept, 4)
    DeptService.edit_dept_services(seed, edit_model(dept, parent_id=3), admin_auth)

    seed.expire_all()
    assert seed.get(SysDept, 4).ancestors == "1,3"
    assert seed.get(SysDept, 5).ancestors == "1,3,4"
    # 兄弟部门不受影响
    assert seed.get(SysDept, 2).ancestors == "1"


def test_move_dept_under_descendant_is_rejected(seed, admin_auth):
    dept = seed.get(SysDept, 2)
    with pytest.raises(BadRequest):
        DeptService.edit_dept_services(seed, edit_model(dept, parent_id=5), admin_auth)
    with pytest.raises(BadRequest):
        DeptService.edit_dept_services(seed, edit_model(dept, parent_id=2), admin_auth)
    seed.expire_all()
    assert seed.get(SysDept, 2).parent_id == 1


def test_find_child_depts_is_transitive(seed):
    assert sorted(dept.dept_id for dept in DeptService.find_child_depts(seed, 1)) == [2, 3, 4, 5]
    # 只含子孙，不含自身、祖先和兄弟
    assert sorted(DeptService.find_child_dept_ids(seed, 2)) == [4, 5]
    assert DeptService.find_child_dept_ids(seed, 5) == []


def test_move_dept_to_root_rewrites_descendants(seed, admin_auth):
    dept = seed.get(SysDept, 2)
    DeptService.edit_dept_services(seed, edit_model(dept, parent_id=0), admin_auth)

    seed.expire_all()
    assert [seed.get(SysDept, dept_id).ancestors for dept_id in (2, 4, 5)] == ["", "2", "2,4"]
    assert seed.get(SysDept, 3).ancestors == "1"


def test_delete_dept_with_children_fails(seed, admin_auth):
    with pytest.raises(BadRequest):
        DeptService.delete_dept_services(seed, [2], admin_auth)


def test_delete_dept_with_users_fails(seed, admin_auth):
    with pytest.raises(BadRequest):
        DeptService.delete_dept_services(seed, [5], admin_auth)


def test_delete_leaf_dept_is_soft(seed, admin_auth):
    assert DeptService.delete_dept_services(seed, [3], admin_auth) == 1
    seed.expire_all()
    assert seed.get(SysDept, 3).del_flag == "2"
    with pytest.raises(ResourceNotFound):
        DeptService.get_dept_detail_services(seed, 3)


def test_dept_tree(seed):
    tree = DeptService.get_dept_tree_services(seed)
    assert [node.dept_id for node in tree] == [1]
    assert [child.dept_id for child in tree[0].children] == [2, 3]


def test_filtered_tree_promotes_orphans(seed):
    tree = DeptService.get_dept_tree_services(seed, DeptQueryModel(dept_name="组"))
    assert sorted(node.dept_id for node in tree) == [4]
    assert [child.dept_id for child in tree[0].children] == [5]


def test_list_exclude_child(seed):
    depts = DeptService.find_list_exclude_child(seed, 2)
    assert sorted(dept.dept_id for dept in depts) == [1, 3]
