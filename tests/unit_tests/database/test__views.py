from datetime import datetime, timedelta, timezone

from social_api.database.schemas import Message, User
from social_api.database.views import build_conversations

T0 = datetime(2024, 5, 1, tzinfo=timezone.utc)


def make_user(user_id):
    return User(
        id=user_id,
        created_at=T0,
        name=user_id.upper(),
        email=f"{user_id}@example.com",
        password_hash="hash",
    )


def make_message(sender_id, receiver_id, minutes):
    return Message(
        id=f"msg_{sender_id}_{receiver_id}_{minutes}",
        created_at=T0 + timedelta(minutes=minutes),
        sender_id=sender_id,
        sender_name=sender_id.upper(),
        receiver_id=receiver_id,
        receiver_name=receiver_id.upper(),
        content="hi",
    )


def test_latest_message_per_counterpart_decides_order():
    users = [make_user(u) for u in ("a", "b", "c")]
    messages = [
        make_message("a", "b", 1),
        make_message("c", "a", 2),
        make_message("b", "a", 3),
    ]

    conversations = build_conversations("a", users, messages)

    assert [c.user.id for c in conversations] == ["b", "c"]
    assert conversations[0].last_message_at == T0 + timedelta(minutes=3)


def test_messages_between_other_users_are_ignored():
    users = [make_user(u) for u in ("a", "b", "c")]
    conversations = build_conversations("a", users, [make_message("b", "c", 1)])
    assert conversations == []


def test_ties_keep_first_seen_order():
    users = [make_user(u) for u in ("a", "b", "c")]
    messages = [make_message("a", "c", 1), make_message("a", "b", 1)]

    assert [c.user.id for c in build_conversations("a", users, messages)] == ["c", "b"]


def test_conversation_user_is_public():
    users = [make_user(u) for u in ("a", "b")]
    [conversation] = build_conversations("a", users, [make_message("a", "b", 1)])

    assert "passwordHash" not in conversation.model_dump(by_alias=True)["user"]
