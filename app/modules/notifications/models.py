# app/modules/notifications/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, Boolean, JSON
from app.db.base import Base, TimestampMixin, UUIDPkMixin


class Notification(Base, UUIDPkMixin, TimestampMixin):
    __tablename__ = "notifications"

    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True)
    type: Mapped[str] = mapped_column(String(50))  # order | support | system
    title: Mapped[str] = mapped_column(String(200))
    message: Mapped[str] = mapped_column(String(2000))
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)
    read: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
