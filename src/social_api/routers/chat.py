from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from social_api.database.schemas import MessageDraft
from social_api.db_layer import ChatService
from social_api.dependencies import chat_service
from social_api.schemas import (
    ChatUploadResponse,
    ConversationsResponse,
    MessageResponse,
    MessagesResponse,
)

router = APIRouter()


# --- public room --- #

@router.get("/chat/public", response_model=MessagesResponse)
def get_public_messages(chat: ChatService = Depends(chat_service)) -> MessagesResponse:
    """All public messages, oldest first."""
    return MessagesResponse(messages=chat.get_public_messages())


@router.post("/chat/public", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def send_public_message(
    draft: MessageDraft,
    chat: ChatService = Depends(chat_service),
) -> MessageResponse:
    return MessageResponse(message=chat.send_public_message(draft))


@router.post("/chat/public/voice", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_public_voice_message(
    audio: UploadFile = File(...),
    sender_id: str = Form(..., alias="senderId"),
    sender_name: str = Form(..., alias="senderName"),
    sender_profile_picture: Optional[str] = Form(None, alias="senderProfilePicture"),
    chat: ChatService = Depends(chat_service),
) -> MessageResponse:
    content = await audio.read()
    message = await run_in_threadpool(
        chat.send_voice_message,
        content,
        sender_id=sender_id,
        sender_name=sender_name,
        sender_profile_picture=sender_profile_picture,
        content_type=audio.content_type,
    )
    return MessageResponse(message=message)


# --- private threads --- #

@router.get("/chat/private", response_model=MessagesResponse)
def get_private_messages(
    user1_id: Optional[str] = Query(None, alias="user1Id"),
    user2_id: Optional[str] = Query(None, alias="user2Id"),
    chat: ChatService = Depends(chat_service),
) -> MessagesResponse:
    """The thread between two users in both directions, oldest first."""
    if not user1_id or not user2_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Both user IDs are required")
    return MessagesResponse(messages=chat.get_private_messages(user1_id, user2_id))


@router.post("/chat/private", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def send_private_message(
    draft: MessageDraft,
    chat: ChatService = Depends(chat_service),
) -> MessageResponse:
    return MessageResponse(message=chat.send_private_message(draft))


@router.post("/chat/private/voice", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_private_voice_message(
    audio: UploadFile = File(...),
    sender_id: str = Form(..., alias="senderId"),
    sender_name: str = Form(..., alias="senderName"),
    receiver_id: str = Form(..., alias="receiverId"),
    receiver_name: str = Form(..., alias="receiverName"),
    sender_profile_picture: Optional[str] = Form(None, alias="senderProfilePicture"),
    chat: ChatService = Depends(chat_service),
) -> MessageResponse:
    content = await audio.read()
    message = await run_in_threadpool(
        chat.send_voice_message,
        content,
        sender_id=sender_id,
        sender_name=sender_name,
        sender_profile_picture=sender_profile_picture,
        receiver_id=receiver_id,
        receiver_name=receiver_name,
        content_type=audio.content_type,
    )
    return MessageResponse(message=message)


@router.get("/chat/conversations", response_model=ConversationsResponse)
def get_conversations(
    user_id: Optional[str] = Query(None, alias="userId"),
    chat: ChatService = Depends(chat_service),
) -> ConversationsResponse:
    """Users the caller has private threads with, most recent first."""
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID is required")
    return ConversationsResponse(conversations=chat.get_conversations(user_id))


# --- attachments --- #

@router.post("/chat/upload", response_model=ChatUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_chat_attachment(
    file: Optional[UploadFile] = File(None),
    chat: ChatService = Depends(chat_service),
) -> ChatUploadResponse:
    """Store an image or video for a chat message and return its URL."""
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")

    content = await file.read()
    url = await run_in_threadpool(chat.upload_attachment, file.filename, content, file.content_type)
    return ChatUploadResponse(success=True, url=url)
