from app.core.update_plan import (
    BulkReassign,
    HistoryReassign,
    Rejected,
    SingleFieldUpdate,
    plan_update,
)


def test_many_ids_with_only_manager_is_bulk():
    plan = plan_update(["a", "b", "c"], {"manager_id": "m1"})
    assert plan == BulkReassign(user_ids=["a", "b", "c"], manager_id="m1")


def test_many_ids_with_other_fields_is_rejected():
    plan = plan_update(["a", "b"], {"manager_id": "m1", "full_name": "X"})
    assert isinstance(plan, Rejected)


def test_many_ids_without_manager_is_rejected():
    assert isinstance(plan_update(["a", "b"], {"full_name": "X"}), Rejected)


def test_single_id_with_manager_is_history_reassign():
    plan = plan_update(["a"], {"manager_id": "m1"})
    assert plan == HistoryReassign(user_id="a", manager_id="m1")


def test_single_id_with_manager_and_fields_still_history_reassign():
    """Other fields ride along validated but are not part of the plan"""
    plan = plan_update(["a"], {"manager_id": "m1", "full_name": "New Name"})
    assert plan == HistoryReassign(user_id="a", manager_id="m1")


def test_single_id_without_manager_is_field_update():
    plan = plan_update(["a"], {"full_name": "X", "pan_num": "ABCDE1234F"})
    assert plan == SingleFieldUpdate(user_id="a", changes={"full_name": "X", "pan_num": "ABCDE1234F"})


def test_repeated_ids_count_as_many_targets():
    """["a", "a"] branches like any multi-id request"""
    assert plan_update(["a", "a"], {"manager_id": "m1"}) == BulkReassign(user_ids=["a", "a"], manager_id="m1")
    assert isinstance(plan_update(["a", "a"], {"full_name": "X"}), Rejected)
