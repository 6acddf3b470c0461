# app/modules/conversations/models.py
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, DateTime, Integer
from app.db.base import Base, TimestampMixin, UUIDPkMixin

SUPPORT_TITLE = "Equipe AgriLink"


class Conversation(Base, UUIDPkMixin, TimestampMixin):
    __tablename__ = "conversations"

    # quem abriu a conversa
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True)
    # outro lado; nulo na conversa com a equipe de suporte
    participant_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )

    title: Mapped[str] = mapped_column(String(200))
    avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)
    last_message: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    last_timestamp: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
    unread_count: Mapped[int] = mapped_column(Integer, default=0)


class Message(Base, UUIDPkMixin, TimestampMixin):
    __tablename__ = "messages"

    conversation_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("conversations.id", ondelete="CASCADE"), index=True
    )
    sender_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True)
    content: Mapped[str] = mapped_column(String(4000))
