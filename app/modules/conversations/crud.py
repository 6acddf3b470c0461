# app/modules/conversations/crud.py
from fastapi import HTTPException
from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.users.models import User
from app.utils.clock import utcnow
from .models import SUPPORT_TITLE, Conversation, Message

SUPPORT_WELCOME = "Bem-vindo ao suporte do AgriLink!"
SUPPORT_AVATAR = "https://cdn-icons-png.flaticon.com/512/906/906349.png"


def is_member(conv: Conversation, user: User) -> bool:
    if user.id in (conv.user_id, conv.participant_id):
        return True
    # conversa de suporte também é visível para a equipe
    return conv.participant_id is None and (user.is_admin or user.is_support_agent)


async def get_conversation_for(db: AsyncSession, conversation_id: str, user: User) -> Conversation:
    res = await db.execute(select(Conversation).where(Conversation.id == conversation_id))
    conv = res.scalar_one_or_none()
    if not conv or not is_member(conv, user):
        raise HTTPException(status_code=404, detail="Conversa não encontrada")
    return conv


async def list_conversations(db: AsyncSession, user_id: str, q: str | None = None) -> list[Conversation]:
    stmt = select(Conversation).where(
        or_(Conversation.user_id == user_id, Conversation.participant_id == user_id)
    )
    if q and q.strip():
        stmt = stmt.where(Conversation.title.ilike(f"%{q.strip()}%"))
    stmt = stmt.order_by(Conversation.last_timestamp.desc())
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def get_or_create_support_conversation(db: AsyncSession, user_id: str) -> Conversation:
    res = await db.execute(
        select(Conversation).where(
            Conversation.user_id == user_id,
            Conversation.participant_id.is_(None),
            Conversation.title == SUPPORT_TITLE,
        )
    )
    conv = res.scalars().first()
    if conv:
        return conv
    conv = Conversation(
        user_id=user_id,
        title=SUPPORT_TITLE,
        avatar=SUPPORT_AVATAR,
        last_message=SUPPORT_WELCOME,
        last_timestamp=utcnow(),
        unread_count=0,
    )
    db.add(conv)
    await db.commit()
    await db.refresh(conv)
    return conv


async def get_or_create_direct_conversation(db: AsyncSession, me: User, participant: User) -> tuple[Conversation, bool]:
    # o par vale nos dois sentidos
    res = await db.execute(
        select(Conversation).where(
            or_(
                and_(Conversation.user_id == me.id, Conversation.participant_id == participant.id),
                and_(Conversation.user_id == participant.id, Conversation.participant_id == me.id),
            )
        )
    )
    conv = res.scalars().first()
    if conv:
        return conv, False
    conv = Conversation(
        user_id=me.id,
        participant_id=participant.id,
        title=participant.full_name,
        avatar=participant.avatar_url,
        last_timestamp=utcnow(),
        unread_count=0,
    )
    db.add(conv)
    await db.commit()
    await db.refresh(conv)
    return conv, True


async def list_messages(db: AsyncSession, conversation_id: str) -> list[Message]:
    res = await db.execute(
        select(Message).where(Message.conversation_id == conversation_id).order_by(Message.created_at.asc())
    )
    return list(res.scalars().all())


async def post_message(db: AsyncSession, conv: Conversation, sender_id: str, content: str) -> Message:
    content = content.strip()
    if not content:
        raise HTTPException(status_code=422, detail="Mensagem vazia")
    now = utcnow()
    msg = Message(conversation_id=conv.id, sender_id=sender_id, content=content, created_at=now)
    db.add(msg)
    conv.last_message = content
    conv.last_timestamp = now
    await db.commit()
    await db.refresh(msg)
    return msg
