import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime, ForeignKey, Index, CheckConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        # Unique among active rows only: a manager reassignment keeps the
        # deactivated row around with the same mob_num/pan_num.
        Index(
            "uq_users_active_mob_num",
            "mob_num",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
        Index(
            "uq_users_active_pan_num",
            "pan_num",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
        CheckConstraint("length(mob_num) = 10", name="ck_users_mob_num_length"),
    )

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    mob_num: Mapped[str] = mapped_column(String(10), index=True, nullable=False)
    pan_num: Mapped[str] = mapped_column(String(10), nullable=False)

    manager_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("managers.manager_id", ondelete="RESTRICT"), index=True, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

