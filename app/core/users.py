"""
Record service: user and manager operations against the relational store.

All functions take the request's SQLAlchemy session; nothing here holds a
module-level connection. Mutations run inside `transaction(db)` so each
request either fully applies or leaves the store untouched.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, NoReturn

from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    DuplicateField,
    ManagerInactiveOrMissing,
    NotFound,
    UnsupportedBulkOperation,
    ValidationError,
)
from app.core.update_plan import (
    BulkReassign,
    HistoryReassign,
    Rejected,
    SingleFieldUpdate,
    plan_update,
)
from app.core.validation import normalize_mob_num, validate_create, validate_update_payload
from app.db.session import transaction
from app.models.manager import Manager
from app.models.user import User, utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateResult:
    message: str
    new_user_id: str | None = None
    updated_count: int | None = None


def require_active_manager(db: Session, manager_id: str) -> Manager:
    manager = db.get(Manager, manager_id)
    if not manager or not manager.is_active:
        raise ManagerInactiveOrMissing(manager_id)
    return manager


def _duplicate_field(db: Session, mob_num: str | None, pan_num: str | None, exclude_id: str | None = None) -> str | None:
    """Name the field that collided with an active row, if we can tell."""
    for name, column, value in (("mob_num", User.mob_num, mob_num), ("pan_num", User.pan_num, pan_num)):
        if value is None:
            continue
        q = select(User.user_id).where(column == value, User.is_active.is_(True))
        if exclude_id:
            q = q.where(User.user_id != exclude_id)
        if db.execute(q.limit(1)).first():
            return name
    return None


def _raise_duplicate(db: Session, mob_num: str | None, pan_num: str | None, exclude_id: str | None = None) -> NoReturn:
    field = _duplicate_field(db, mob_num, pan_num, exclude_id)
    logger.warning("Duplicate %s rejected", field or "mob_num/pan_num")
    raise DuplicateField(field)


def create_user(db: Session, *, full_name: Any, mob_num: Any, pan_num: Any, manager_id: str) -> User:
    normalized = validate_create(full_name, mob_num, pan_num)

    try:
        with transaction(db):
            require_active_manager(db, manager_id)
            now = utcnow()
            user = User(
                user_id=str(uuid.uuid4()),
                full_name=normalized.full_name,
                mob_num=normalized.mob_num,
                pan_num=normalized.pan_num,
                manager_id=manager_id,
                created_at=now,
                updated_at=now,
                is_active=True,
            )
            db.add(user)
            db.flush()
    except IntegrityError:
        _raise_duplicate(db, normalized.mob_num, normalized.pan_num)

    logger.info("Created user %s under manager %s", user.user_id, manager_id)
    return user


def list_users(
    db: Session,
    *,
    user_id: str | None = None,
    mob_num: str | None = None,
    manager_id: str | None = None,
) -> list[User]:
    q = select(User).where(User.is_active.is_(True))

    if user_id:
        q = q.where(User.user_id == user_id)
    if mob_num:
        formatted = normalize_mob_num(mob_num)
        if not formatted:
            raise ValidationError("Mobile number filter must contain digits.")
        q = q.where(User.mob_num.like(f"%{formatted}"))
    if manager_id:
        q = q.where(User.manager_id == manager_id)

    return list(db.execute(q.order_by(User.created_at.asc())).scalars().all())


def delete_user(db: Session, *, user_id: str | None = None, mob_num: str | None = None) -> int:
    if not user_id and not mob_num:
        raise ValidationError("Missing required keys: user_id or mob_num.")

    if user_id:
        stmt = delete(User).where(User.user_id == user_id)
    else:
        stmt = delete(User).where(User.mob_num == normalize_mob_num(mob_num))

    with transaction(db):
        deleted = db.execute(stmt).rowcount

        if deleted == 0:
            raise NotFound("User not found.")

    logger.info("Deleted %d user row(s) (user_id=%s, mob_num=%s)", deleted, user_id, mob_num)
    return deleted


def list_managers(db: Session) -> list[Manager]:
    return list(db.execute(select(Manager).order_by(Manager.manager_name.asc())).scalars().all())


def update_users(db: Session, *, user_ids: list[str], update_data: dict[str, Any]) -> UpdateResult:
    if not user_ids:
        raise ValidationError("user_ids must contain at least one user ID.")
    if any(not isinstance(uid, str) or not uid for uid in user_ids):
        raise ValidationError("user_ids must be non-empty strings.")

    payload = validate_update_payload(update_data)
    plan = plan_update(user_ids, payload)

    if isinstance(plan, Rejected):
        raise UnsupportedBulkOperation(plan.reason)
    if isinstance(plan, BulkReassign):
        return _bulk_reassign(db, plan)
    if isinstance(plan, HistoryReassign):
        return _history_reassign(db, plan)
    return _single_field_update(db, plan)


def _bulk_reassign(db: Session, plan: BulkReassign) -> UpdateResult:
    with transaction(db):
        require_active_manager(db, plan.manager_id)
        result = db.execute(
            update(User)
            .where(User.user_id.in_(plan.user_ids))
            .values(manager_id=plan.manager_id, updated_at=utcnow())
        )
        count = result.rowcount

    logger.info("Bulk reassigned %d user(s) to manager %s", count, plan.manager_id)
    return UpdateResult(message=f"Bulk update successful for {count} user(s).", updated_count=count)


def _history_reassign(db: Session, plan: HistoryReassign) -> UpdateResult:
    """
    Deactivate the current row and insert a replacement under the new manager.
    The replacement copies full_name/mob_num/pan_num; the old and new rows are
    linked only by those values, there is no identity column.
    """
    with transaction(db):
        require_active_manager(db, plan.manager_id)

        current = db.execute(
            select(User).where(User.user_id == plan.user_id, User.is_active.is_(True))
        ).scalar_one_or_none()
        if current is None:
            raise NotFound("User not found or is inactive.")

        now = utcnow()
        current.is_active = False
        current.updated_at = now
        # the partial unique indexes need the old row inactive before the insert
        db.flush()

        replacement = User(
            user_id=str(uuid.uuid4()),
            full_name=current.full_name,
            mob_num=current.mob_num,
            pan_num=current.pan_num,
            manager_id=plan.manager_id,
            created_at=now,
            updated_at=now,
            is_active=True,
        )
        db.add(replacement)
        db.flush()

    logger.info(
        "Reassigned user %s to manager %s as new user %s",
        plan.user_id,
        plan.manager_id,
        replacement.user_id,
    )
    return UpdateResult(message="Manager updated successfully.", new_user_id=replacement.user_id)


def _single_field_update(db: Session, plan: SingleFieldUpdate) -> UpdateResult:
    try:
        with transaction(db):
            result = db.execute(
                update(User)
                .where(User.user_id == plan.user_id)
                .values(**plan.changes, updated_at=utcnow())
            )
            if result.rowcount == 0:
                raise NotFound("User not found.")
    except IntegrityError:
        _raise_duplicate(db, plan.changes.get("mob_num"), plan.changes.get("pan_num"), plan.user_id)

    logger.info("Updated user %s fields: %s", plan.user_id, ", ".join(sorted(plan.changes)))
    return UpdateResult(message="User updated successfully.")
