from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.manager import Manager
from app.models.user import User, utcnow

API = settings.API_PREFIX


def create_manager(db: Session, name: str = "Manager A", is_active: bool = True) -> Manager:
    m = Manager(manager_name=name, is_active=is_active)
    db.add(m)
    db.commit()
    db.refresh(m)
    return m


def create_user(
    db: Session,
    manager: Manager,
    *,
    full_name: str = "Asha Verma",
    mob_num: str = "9876543210",
    pan_num: str = "ABCDE1234F",
    is_active: bool = True,
) -> User:
    now = utcnow()
    u = User(
        full_name=full_name,
        mob_num=mob_num,
        pan_num=pan_num,
        manager_id=manager.manager_id,
        created_at=now,
        updated_at=now,
        is_active=is_active,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


def count_users(db: Session) -> int:
    return db.execute(select(func.count()).select_from(User)).scalar_one()


def all_users(db: Session) -> list[User]:
    db.expire_all()
    return list(db.execute(select(User)).scalars().all())
