"""POST /v1/chat - advisory chat assistant"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from cashflow_gateway.api.v1.schemas import ChatRequest, ChatResponse
from cashflow_gateway.api.dependencies import get_chat_client, get_request_id
from cashflow_gateway.domain.exceptions import ChatServiceError, EmptyChatResponseError
from cashflow_gateway.domain.models import ChatMessage
from cashflow_gateway.infrastructure.clients.chat import ChatClient
from cashflow_gateway.infrastructure.observability.metrics import chat_failure_counter

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request_body: ChatRequest,
    request: Request,
    chat_client: ChatClient = Depends(get_chat_client),
):
    """Forward the conversation to the language model and return its reply"""
    request_id = get_request_id(request)
    messages = [ChatMessage(role=m.role, content=m.content) for m in request_body.messages]

    try:
        reply = await chat_client.complete(messages)

    except EmptyChatResponseError as e:
        chat_failure_counter.inc()
        logging.error(f"Empty chat response: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail=str(e))

    except ChatServiceError as e:
        chat_failure_counter.inc()
        logging.error(f"Chat API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="There was an error processing your request")

    return ChatResponse(content=reply.content, role=reply.role)
