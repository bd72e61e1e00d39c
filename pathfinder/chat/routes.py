# Chat widget endpoints (JSON)
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from pathfinder.chat.companion import ChatCompanion
from pathfinder.deps import get_client_context
from pathfinder.rendering.markdown import render_chat_message
from pathfinder.session.registry import ClientContext

router = APIRouter(prefix="/chat")


class ChatRequest(BaseModel):
    message: str


def _chat_payload(chat: ChatCompanion, accepted: bool | None = None) -> dict:
    payload = {
        "awaiting": chat.awaiting,
        "messages": [
            {"role": m.role, "content": m.content, "html": str(render_chat_message(m.content))}
            for m in chat.messages
        ],
    }
    if accepted is not None:
        payload["accepted"] = accepted
    return payload


@router.get("")
async def get_chat(ctx: ClientContext = Depends(get_client_context)):
    return _chat_payload(ctx.chat)


@router.post("")
async def send_message(body: ChatRequest, ctx: ClientContext = Depends(get_client_context)):
    accepted = await ctx.chat.submit(body.message)
    return _chat_payload(ctx.chat, accepted)


@router.post("/clear")
async def clear_chat(ctx: ClientContext = Depends(get_client_context)):
    ctx.chat.clear()
    return _chat_payload(ctx.chat)
