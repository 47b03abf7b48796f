"""Chat endpoint: retrieval-augmented answers over docs and video transcripts."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from docchat.api.dependencies import get_services
from docchat.api.models import ChatRequestBody, ChatResponseBody, ErrorBody
from docchat.chat.models import ChatRequest
from docchat.services import Services

router = APIRouter()


@router.post(
    "/api/chat",
    response_model=ChatResponseBody,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorBody}, 500: {"model": ErrorBody}, 503: {"model": ErrorBody}},
)
async def chat(
    body: ChatRequestBody,
    services: Annotated[Services, Depends(get_services)],
) -> ChatResponseBody:
    """Answer a chat message.

    Generation failures still return 200 with a fallback answer built from the
    retrieved context. An empty message is a 400 and a storage outage a 503
    (see the exception handlers in ``docchat.api.main``).
    """
    request = ChatRequest(
        message=body.message or "",
        conversation_id=body.conversation_id,
        context=body.context,
    )
    # The service makes blocking LLM and Supabase calls; run it in a worker thread.
    result = await asyncio.to_thread(services.chat.handle, request)
    return ChatResponseBody(
        response=result.response,
        conversation_id=result.conversation_id,
        follow_up_questions=result.follow_up_questions,
        sources=result.sources,
    )
