from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user
from app.modules.users.models import User
from .crud import (
    get_conversation_for, get_or_create_direct_conversation, get_or_create_support_conversation,
    list_conversations, list_messages, post_message,
)
from .schemas import ConversationOut, ConversationStart, MessageIn, MessageOut

router = APIRouter()


@router.get("", response_model=list[ConversationOut])
async def my_conversations(
    q: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    me: User = Depends(get_current_user),
):
    return await list_conversations(db, me.id, q)


@router.post("/support", response_model=ConversationOut)
async def support_conversation(db: AsyncSession = Depends(get_db), me: User = Depends(get_current_user)):
    return await get_or_create_support_conversation(db, me.id)


@router.post("", response_model=ConversationOut)
async def start_conversation(
    payload: ConversationStart,
    response: Response,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(get_current_user),
):
    if payload.participant_id == me.id:
        raise HTTPException(status_code=400, detail="Não é possível conversar consigo mesmo")
    res = await db.execute(select(User).where(User.id == payload.participant_id))
    other = res.scalar_one_or_none()
    if not other:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")
    conv, created = await get_or_create_direct_conversation(db, me, other)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return conv


@router.get("/{conversation_id}", response_model=ConversationOut)
async def get_conversation(conversation_id: str, db: AsyncSession = Depends(get_db),
                           me: User = Depends(get_current_user)):
    return await get_conversation_for(db, conversation_id, me)


@router.get("/{conversation_id}/messages", response_model=list[MessageOut])
async def conversation_messages(conversation_id: str, db: AsyncSession = Depends(get_db),
                                me: User = Depends(get_current_user)):
    conv = await get_conversation_for(db, conversation_id, me)
    return await list_messages(db, conv.id)


@router.post("/{conversation_id}/messages", response_model=MessageOut, status_code=201)
async def send_message(
    conversation_id: str,
    payload: MessageIn,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(get_current_user),
):
    conv = await get_conversation_for(db, conversation_id, me)
    return await post_message(db, conv, me.id, payload.content)
