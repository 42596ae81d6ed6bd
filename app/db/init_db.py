import logging
from pathlib import Path

from sqlalchemy import func, select
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session

from app.db.base import Base
from app.models.manager import Manager

logger = logging.getLogger(__name__)

SEED_MANAGERS = (
    ("Manager A", True),
    ("Manager B", True),
    ("Inactive Manager", False),
)


def ensure_sqlite_dir(url) -> None:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite" or not parsed.database or parsed.database == ":memory:":
        return
    db_dir = Path(parsed.database).resolve().parent
    if not db_dir.exists():
        logger.info("Creating database directory: %s", db_dir)
        db_dir.mkdir(parents=True, exist_ok=True)


def seed_managers(db: Session) -> list[Manager]:
    """Insert the sample managers when the table is empty; returns what was added."""
    count = db.execute(select(func.count()).select_from(Manager)).scalar_one()
    if count:
        return []

    logger.info("Managers table is empty, pre-filling with sample data.")
    managers = [Manager(manager_name=name, is_active=active) for name, active in SEED_MANAGERS]
    db.add_all(managers)
    db.commit()
    return managers


def init_db(engine: Engine, *, seed: bool = True) -> None:
    ensure_sqlite_dir(engine.url)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")

    if seed:
        with Session(engine, expire_on_commit=False) as db:
            seed_managers(db)
