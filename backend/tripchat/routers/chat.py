"""Chat router — streams the assistant's reply to a chat history."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse, StreamingResponse

from tripchat.schemas.chat import ChatRequest
from tripchat.services.chat_service import chat_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat")
async def chat(req: ChatRequest):
    """Stream the assistant's reply as plain text chunks."""
    stream = chat_service.stream_reply([m.model_dump() for m in req.messages])

    # Pull the first chunk up front so provider failures still get a proper status
    try:
        first_chunk = await anext(stream)
    except StopAsyncIteration:
        first_chunk = ""
    except Exception as e:
        logger.error(f"Error handling chat request: {e}")
        return JSONResponse({"error": str(e)}, status_code=500)

    async def body():
        if first_chunk:
            yield first_chunk
        async for chunk in stream:
            yield chunk

    return StreamingResponse(body(), media_type="text/plain; charset=utf-8")
