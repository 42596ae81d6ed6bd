# seed_dev.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.init_db import init_db
from app.db.session import SessionLocal, engine
from app.models.manager import Manager
from app.models.user import User, utcnow
from app.core.validation import validate_create


SAMPLE_USERS = (
    # (full_name, mob_num, pan_num, manager_name)
    ("Asha Verma", "+91-98765-43210", "abcde1234f", "Manager A"),
    ("Rohit Nair", "91 99887 76655", "PQRSX5678K", "Manager A"),
    ("Meera Iyer", "9123456780", "lmnop4321z", "Manager B"),
)


def get_or_create_user(db: Session, full_name: str, mob_num: str, pan_num: str, manager: Manager) -> User:
    normalized = validate_create(full_name, mob_num, pan_num)
    u = (
        db.execute(select(User).where(User.mob_num == normalized.mob_num, User.is_active.is_(True)))
        .scalar_one_or_none()
    )
    if u:
        return u

    now = utcnow()
    u = User(
        full_name=normalized.full_name,
        mob_num=normalized.mob_num,
        pan_num=normalized.pan_num,
        manager_id=manager.manager_id,
        created_at=now,
        updated_at=now,
        is_active=True,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


def main():
    init_db(engine, seed=True)

    db = SessionLocal()
    try:
        managers = {m.manager_name: m for m in db.execute(select(Manager)).scalars().all()}

        users = [
            get_or_create_user(db, full_name, mob_num, pan_num, managers[manager_name])
            for full_name, mob_num, pan_num, manager_name in SAMPLE_USERS
        ]

        print("\n=== DEV SEED COMPLETE ===")
        print("Managers:")
        for m in managers.values():
            print(f"  {m.manager_name:<18} {m.manager_id} active={m.is_active}")

        print("\nUsers:")
        for u in users:
            print(f"  {u.full_name:<12} {u.user_id} mob={u.mob_num} pan={u.pan_num}")

        print("\nNext API steps (Postman):")
        print("  POST /api/users/get_users    {}")
        print(f'  POST /api/users/update_user  {{"user_ids": ["{users[0].user_id}"], '
              f'"update_data": {{"manager_id": "{managers["Manager B"].manager_id}"}}}}')

    finally:
        db.close()


if __name__ == "__main__":
    main()
