from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from quota_chat.models.chat import ChatMeta, ChatRecord, MessageTurn
from quota_chat.stores.chat_store import ChatStore
from quota_chat.utils.error_handler import ChatNotFoundError


@pytest.fixture
def store() -> ChatStore:
    return ChatStore(shards=4)


def test_trip_planning_scenario(store: ChatStore) -> None:
    store.create_chat("U", "c1", "Trip planning")
    store.append_message("U", "c1", "Where to?", "Paris")

    assert store.get_chat_history("U", "c1") == ChatRecord(
        name="Trip planning",
        messages=[MessageTurn(question="Where to?", answer="Paris")],
    )
    assert store.rename_chat("U", "c1", "Paris trip") is True
    assert store.list_chats("U") == [ChatMeta(id="c1", name="Paris trip")]


def test_create_is_idempotent_and_keeps_original(store: ChatStore) -> None:
    store.create_chat("U", "c1", "First")
    store.append_message("U", "c1", "q", "a")

    store.create_chat("U", "c1", "Second")

    record = store.get_chat_history("U", "c1")
    assert record.name == "First"
    assert record.messages == [MessageTurn(question="q", answer="a")]


def test_append_to_unknown_chat_is_a_noop(store: ChatStore) -> None:
    store.create_chat("U", "c1", "Chat")

    store.append_message("U", "missing", "q", "a")
    store.append_message("nobody", "c1", "q", "a")

    assert store.list_chats("U") == [ChatMeta(id="c1", name="Chat")]
    assert store.list_chats("nobody") == []
    assert store.get_chat_history("U", "c1").messages == []


@pytest.mark.parametrize("user, chat_id", [("nobody", "c1"), ("U", "missing")])
def test_history_of_unknown_chat_raises_not_found(store: ChatStore, user: str, chat_id: str) -> None:
    store.create_chat("U", "c1", "Chat")

    with pytest.raises(ChatNotFoundError) as excinfo:
        store.get_chat_history(user, chat_id)

    assert excinfo.value.chat_id == chat_id


def test_history_keeps_append_order(store: ChatStore) -> None:
    store.create_chat("U", "c1", "Chat")
    for index in range(5):
        store.append_message("U", "c1", f"q{index}", f"a{index}")

    messages = store.get_chat_history("U", "c1").messages

    assert [(turn.question, turn.answer) for turn in messages] == [
        (f"q{index}", f"a{index}") for index in range(5)
    ]


def test_history_is_a_copy(store: ChatStore) -> None:
    store.create_chat("U", "c1", "Chat")
    record = store.get_chat_history("U", "c1")

    record.name = "changed"
    record.messages.append(MessageTurn(question="q", answer="a"))

    assert store.get_chat_history("U", "c1") == ChatRecord(name="Chat")


def test_list_chats(store: ChatStore) -> None:
    assert store.list_chats("U") == []

    store.create_chat("U", "a", "Alpha")
    store.create_chat("U", "b", "Beta")

    assert {(meta.id, meta.name) for meta in store.list_chats("U")} == {
        ("a", "Alpha"),
        ("b", "Beta"),
    }


def test_delete_returns_true_exactly_once(store: ChatStore) -> None:
    store.create_chat("U", "c1", "Chat")

    assert store.delete_chat("U", "c1") is True
    assert store.delete_chat("U", "c1") is False
    assert store.delete_chat("nobody", "c1") is False
    assert store.list_chats("U") == []


def test_recreated_chat_starts_empty(store: ChatStore) -> None:
    store.create_chat("U", "c1", "Old")
    store.append_message("U", "c1", "q", "a")
    store.delete_chat("U", "c1")

    store.create_chat("U", "c1", "New")

    assert store.get_chat_history("U", "c1") == ChatRecord(name="New")


def test_rename_unknown_chat_returns_false(store: ChatStore) -> None:
    assert store.rename_chat("U", "c1", "name") is False
    assert store.list_chats("U") == []


def test_chat_ids_are_scoped_per_user(store: ChatStore) -> None:
    store.create_chat("alice", "c1", "Alice's")
    store.create_chat("bob", "c1", "Bob's")
    store.append_message("alice", "c1", "q", "a")

    assert store.get_chat_history("bob", "c1").messages == []
    assert store.delete_chat("bob", "c1") is True
    assert store.get_chat_history("alice", "c1").name == "Alice's"


def test_concurrent_appends_are_all_recorded_in_order(store: ChatStore) -> None:
    store.create_chat("U", "c1", "Chat")

    def append_many(worker: int) -> None:
        for index in range(100):
            store.append_message("U", "c1", f"w{worker}", str(index))

    with ThreadPoolExecutor(max_workers=4) as pool:
        list(pool.map(append_many, range(4)))

    messages = store.get_chat_history("U", "c1").messages
    assert len(messages) == 400
    for worker in range(4):
        answers = [int(turn.answer) for turn in messages if turn.question == f"w{worker}"]
        assert answers == list(range(100))


def test_stats_and_snapshot_restore(store: ChatStore) -> None:
    store.create_chat("alice", "a", "A")
    store.create_chat("bob", "b", "B")
    store.append_message("bob", "b", "q", "a")

    assert store.stats() == {"users": 2, "chats": 2, "messages": 1}

    restored = ChatStore()
    restored.restore(store.snapshot())
    assert restored.list_chats("alice") == [ChatMeta(id="a", name="A")]
    assert restored.get_chat_history("bob", "b") == store.get_chat_history("bob", "b")


def test_record_turn_reports_whether_it_appended(store: ChatStore) -> None:
    store.create_chat("U", "c1", "Chat")

    assert store.record_turn("U", "c1", "q", "a") is True
    assert store.record_turn("U", "missing", "q", "a") is False
    assert store.get_chat_history("U", "c1").messages == [MessageTurn(question="q", answer="a")]
