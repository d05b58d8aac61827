"""
Chat service for the Social API.
Handles the public room, private threads, voice notes and chat attachments.
"""

import logging
from typing import List, Optional

from social_api.database import BlobDocumentStore, keys
from social_api.database.schemas import Message, MessageDraft, MessageType, PublicUser
from social_api.errors import SocialApiError

from .media_service import MediaService

logger = logging.getLogger(__name__)

VOICE_CONTENT_TYPE = "audio/webm"


class ChatService:
    """Service for public and private chat messages"""

    def __init__(self, store: BlobDocumentStore, media: MediaService):
        self.store = store
        self.media = media

    def get_public_messages(self) -> List[Message]:
        return self.store.get_public_messages()

    def send_public_message(self, draft: MessageDraft) -> Message:
        if draft.is_private:
            raise SocialApiError("Public messages cannot have a receiver")
        message = self.store.add_public_message(draft)
        logger.info(f"Public {message.type.value} message {message.id} from {message.sender_id}")
        return message

    def get_private_messages(self, user1_id: str, user2_id: str) -> List[Message]:
        return self.store.get_private_messages(user1_id, user2_id)

    def send_private_message(self, draft: MessageDraft) -> Message:
        if not draft.is_private:
            raise SocialApiError("Receiver ID is required for private messages")
        message = self.store.add_private_message(draft)
        logger.info(
            f"Private {message.type.value} message {message.id} "
            f"from {message.sender_id} to {message.receiver_id}"
        )
        return message

    def get_conversations(self, user_id: str) -> List[PublicUser]:
        """Counterparts of a user's private threads, most recent first"""
        return [conversation.user for conversation in self.store.get_conversations(user_id)]

    def upload_attachment(self, filename: str, content: bytes, content_type: Optional[str]) -> str:
        """Store a chat attachment and return its URL"""
        millis = keys.epoch_millis(self.store.now())
        object_key = keys.build_key(keys.CHAT_MEDIA, f"chat-media-{millis}-{filename or 'upload'}")
        return self.media.store_file(object_key, content, content_type)

    def send_voice_message(
        self,
        audio: bytes,
        sender_id: str,
        sender_name: str,
        sender_profile_picture: Optional[str] = None,
        receiver_id: Optional[str] = None,
        receiver_name: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> Message:
        """Upload a voice note and post it, privately when a receiver is given"""
        if not audio:
            raise SocialApiError("No audio provided")

        millis = keys.epoch_millis(self.store.now())
        object_key = keys.build_key(keys.VOICE, f"{millis}-voice-message.webm")
        voice_url = self.media.store_file(object_key, audio, content_type or VOICE_CONTENT_TYPE)

        draft = MessageDraft(
            type=MessageType.VOICE,
            voice_url=voice_url,
            sender_id=sender_id,
            sender_name=sender_name,
            sender_profile_picture=sender_profile_picture,
            receiver_id=receiver_id,
            receiver_name=receiver_name,
        )
        if draft.is_private:
            return self.send_private_message(draft)
        return self.send_public_message(draft)


def get_chat_service(store: BlobDocumentStore, media: MediaService) -> ChatService:
    """Get chat service instance"""
    return ChatService(store, media)
