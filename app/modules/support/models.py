# app/modules/support/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, Text
from app.db.base import Base, TimestampMixin, UUIDPkMixin

SUPPORT_STATUSES = ("pendente", "em_andamento", "resolvido")


class SupportMessage(Base, UUIDPkMixin, TimestampMixin):
    __tablename__ = "support_messages"

    user_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    message: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), default="pendente", index=True)
