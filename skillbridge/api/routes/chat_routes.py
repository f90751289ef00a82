"""
Chat Routes

GET /chat/greeting - Opening message of the career assistant
POST /chat - Ask the career assistant
"""

from fastapi import APIRouter, Depends

from skillbridge.core.auth import get_current_user
from skillbridge.services.chatbot_service import GREETING, reply_to
from skillbridge.services.mongo_service import utcnow
from skillbridge.schemas.schemas import ChatRequest, ChatResponse

router = APIRouter(prefix="/chat", tags=["Chat"])


@router.get("/greeting", response_model=ChatResponse)
async def get_greeting(user: dict = Depends(get_current_user)):
    return ChatResponse(reply=GREETING, topic="greeting", timestamp=utcnow())


@router.post("", response_model=ChatResponse)
async def chat(request: ChatRequest, user: dict = Depends(get_current_user)):
    """Keyword-matched career tips (resume, interview, skills, career)."""
    topic, reply = reply_to(request.message)
    return ChatResponse(reply=reply, topic=topic, timestamp=utcnow())
