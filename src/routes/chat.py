"""
Chat Routes
"""

from fastapi import APIRouter, Depends, Request

from src.middleware.error_handler import ApiErrorRoute
from src.schemas.chat import ChatRequest, ChatResponse
from src.services.chat_service import ChatService

router = APIRouter(route_class=ApiErrorRoute)


def get_chat_service(request: Request) -> ChatService:
    """Chat variant selected at startup and stored on the app"""
    return request.app.state.chat_service


@router.post("", response_model=ChatResponse, summary="Process message")
async def send_message(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service)
):
    """
    Send a message to the chat assistant

    Model and tool failures come back as a normal reply prefixed with ⚠️.
    """
    response = await chat_service.get_response(
        request.message,
        request.conversation_history or []
    )
    return ChatResponse(response=response)
