import pytest

from services import conversation_service
from utils import database
from utils.exceptions import NotFoundError, ValidationError


def test_create_conversation_without_title_uses_default(test_db):
    conversation = conversation_service.create_conversation()
    assert conversation.title == "New Consultation"


@pytest.mark.parametrize("title", ["", "   ", None])
def test_blank_title_uses_default(test_db, title):
    assert conversation_service.create_conversation(title).title == "New Consultation"


def test_title_is_trimmed(test_db):
    conversation = conversation_service.create_conversation("  Dr. Rao / Mr. Singh  ")
    assert database.get_conversation(conversation.id).title == "Dr. Rao / Mr. Singh"


def test_list_conversations_most_recent_first(test_db):
    created = [conversation_service.create_conversation(f"Visit {i}") for i in range(3)]

    listed = conversation_service.list_conversations()

    assert [c.id for c in listed] == [c.id for c in reversed(created)]


def test_get_conversation_includes_messages(test_db):
    conversation = conversation_service.create_conversation()
    database.add_message(conversation.id, "DOCTOR", "Good morning", None, "en", "en")

    loaded = conversation_service.get_conversation(conversation.id)

    assert [m.original_text for m in loaded.messages] == ["Good morning"]
    assert "messages" in loaded.to_dict()


def test_get_missing_conversation(test_db):
    with pytest.raises(NotFoundError):
        conversation_service.get_conversation("missing")


def test_rename_conversation(test_db):
    conversation = conversation_service.create_conversation()

    renamed = conversation_service.rename_conversation(conversation.id, " Knee pain review ")

    assert renamed.title == "Knee pain review"
    assert renamed.created_at == conversation.created_at


def test_rename_rejects_blank_title(test_db):
    conversation = conversation_service.create_conversation()
    with pytest.raises(ValidationError):
        conversation_service.rename_conversation(conversation.id, "  ")


def test_rename_missing_conversation(test_db):
    with pytest.raises(NotFoundError):
        conversation_service.rename_conversation("missing", "Title")


def test_delete_conversation(test_db):
    conversation = conversation_service.create_conversation()
    conversation_service.delete_conversation(conversation.id)

    assert conversation_service.list_conversations() == []
    with pytest.raises(NotFoundError):
        conversation_service.delete_conversation(conversation.id)


@pytest.mark.parametrize("operation", [
    conversation_service.get_conversation,
    conversation_service.delete_conversation,
    lambda conversation_id: conversation_service.rename_conversation(conversation_id, "Title"),
])
def test_non_string_conversation_id_is_rejected(test_db, operation):
    with pytest.raises(ValidationError):
        operation({"id": "abc"})


def test_rename_rejects_non_string_title(test_db):
    conversation = conversation_service.create_conversation()

    with pytest.raises(ValidationError):
        conversation_service.rename_conversation(conversation.id, 7)
