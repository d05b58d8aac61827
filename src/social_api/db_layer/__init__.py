"""
Social API Database Layer

Services that hold the application rules (email uniqueness, one like per
user, password hashing, media key layout) on top of the blob document store.
"""

from .user_service import UserService, get_user_service
from .chat_service import ChatService, get_chat_service
from .media_service import MediaService, get_media_service

__all__ = [
    'UserService', 'get_user_service',
    'ChatService', 'get_chat_service',
    'MediaService', 'get_media_service',
]
