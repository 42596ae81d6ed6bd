"""
Decide how an /update_user request is applied.

The plan is computed once from the validated payload and the target ids,
counted as supplied:

  BulkReassign       many ids, payload is exactly {manager_id}
  Rejected           many ids, anything else
  HistoryReassign    one id, payload carries manager_id
  SingleFieldUpdate  one id, no manager_id
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class BulkReassign:
    user_ids: list[str]
    manager_id: str


@dataclass(frozen=True)
class HistoryReassign:
    user_id: str
    manager_id: str


@dataclass(frozen=True)
class SingleFieldUpdate:
    user_id: str
    changes: dict[str, str]


@dataclass(frozen=True)
class Rejected:
    reason: str


UpdatePlan = Union[BulkReassign, HistoryReassign, SingleFieldUpdate, Rejected]


def plan_update(user_ids: list[str], payload: dict[str, str]) -> UpdatePlan:
    """
    `user_ids` must be non-empty; callers check that before planning.

    With one id and a manager_id, any other fields in the payload have been
    validated but are not applied: the replacement row copies the current
    full_name/mob_num/pan_num.
    """
    if len(user_ids) > 1:
        if set(payload) == {"manager_id"}:
            return BulkReassign(user_ids=list(user_ids), manager_id=payload["manager_id"])
        return Rejected("Individual updates can only be performed on a single user.")

    user_id = user_ids[0]
    if "manager_id" in payload:
        return HistoryReassign(user_id=user_id, manager_id=payload["manager_id"])

    return SingleFieldUpdate(user_id=user_id, changes=dict(payload))
