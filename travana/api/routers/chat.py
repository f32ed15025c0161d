from fastapi import APIRouter

from travana.ai.chat_assistant import assistant_status, send_message
from travana.api.models.schemas import ChatbotStatus, ChatReply, ChatRequest, ChatResponse
from travana.core.errors import ValidationError

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(body: ChatRequest):
    if not body.message:
        raise ValidationError("Message is required")
    reply = await send_message(body.message, body.conversationHistory)
    return ChatResponse(response=reply)


@router.post("/chatbot", response_model=ChatReply)
async def chatbot(body: ChatRequest):
    """Same assistant as /chat, answered without the success envelope."""
    if not body.message:
        raise ValidationError("Message is required")
    return await send_message(body.message, body.conversationHistory)


@router.get("/chatbot", response_model=ChatbotStatus)
async def chatbot_status():
    return assistant_status()
