"""Views derived from several collections at read time."""

from datetime import datetime
from typing import Dict, Iterable, List

from .schemas import DocumentSchema, Message, PublicUser, User


class Conversation(DocumentSchema):
    """A counterpart user and the time of the latest message exchanged with them"""
    user: PublicUser
    last_message_at: datetime


def build_conversations(
    user_id: str,
    users: Iterable[User],
    private_messages: Iterable[Message],
) -> List[Conversation]:
    """
    Distinct users that ``user_id`` exchanged private messages with, most recent first.

    Scans every private message in the system; there is no per-conversation
    index. Counterparts without a stored user record are left out.
    """
    users_by_id: Dict[str, User] = {user.id: user for user in users}
    latest: Dict[str, datetime] = {}

    for message in private_messages:
        if message.sender_id == user_id:
            other_id = message.receiver_id
        elif message.receiver_id == user_id:
            other_id = message.sender_id
        else:
            continue

        if other_id is None or other_id not in users_by_id:
            continue
        if other_id not in latest or message.created_at > latest[other_id]:
            latest[other_id] = message.created_at

    # sorted() is stable, so ties keep first-seen order
    ordered = sorted(latest.items(), key=lambda item: item[1], reverse=True)
    return [
        Conversation(user=users_by_id[other_id].to_public(), last_message_at=last_at)
        for other_id, last_at in ordered
    ]
