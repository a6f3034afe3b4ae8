"""Unit tests for the conversation memory module."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from kei_tutor.memory import (
    ConversationStore,
    InMemoryConversationStore,
    Message,
    Sender,
    create_conversation_store,
)


class TestConversationStoreInterface:
    """Tests for the abstract ConversationStore interface."""

    def test_store_is_abstract(self):
        """Test that ConversationStore cannot be instantiated directly."""
        with pytest.raises(TypeError):
            ConversationStore()  # type: ignore


class TestMessage:
    """Tests for the Message model."""

    def test_user_and_assistant_constructors(self):
        """Test the sender shortcuts."""
        assert Message.user("hi").sender == Sender.USER
        assert Message.assistant("hello").sender == Sender.ASSISTANT

    def test_message_is_immutable(self):
        """Test that messages cannot be changed after creation."""
        message = Message.user("hi")
        with pytest.raises(ValueError):
            message.text = "changed"  # type: ignore

    def test_timestamps_are_monotonic(self):
        """Test that later messages never get an earlier timestamp."""
        first = Message.user("a")
        second = Message.user("b")
        assert second.timestamp >= first.timestamp


class TestInMemoryConversationStore:
    """Tests for InMemoryConversationStore."""

    def test_starts_empty(self):
        """Test that a new store has no messages."""
        store = InMemoryConversationStore(max_length=5)
        assert store.length() == 0
        assert len(store) == 0
        assert store.snapshot() == []

    def test_append_preserves_order(self):
        """Test that messages come back in insertion order."""
        store = InMemoryConversationStore(max_length=5)
        for text in ("one", "two", "three"):
            store.append(Message.user(text))
        assert [m.text for m in store.snapshot()] == ["one", "two", "three"]

    def test_duplicates_allowed(self):
        """Test that identical texts are stored separately."""
        store = InMemoryConversationStore(max_length=5)
        store.append(Message.user("same"))
        store.append(Message.user("same"))
        assert store.length() == 2

    def test_evicts_oldest_when_full(self):
        """Test FIFO eviction at the bound."""
        store = InMemoryConversationStore(max_length=3)
        for i in range(5):
            store.append(Message.user(str(i)))
        assert [m.text for m in store.snapshot()] == ["2", "3", "4"]

    def test_snapshot_is_a_copy(self):
        """Test that mutating a snapshot does not affect the store."""
        store = InMemoryConversationStore(max_length=3)
        store.append(Message.user("kept"))
        snapshot = store.snapshot()
        snapshot.clear()
        snapshot.append(Message.user("injected"))
        assert [m.text for m in store.snapshot()] == ["kept"]

    def test_clear_is_idempotent(self):
        """Test that clearing twice leaves the store empty both times."""
        store = InMemoryConversationStore(max_length=3)
        store.append(Message.user("a"))
        store.clear()
        assert store.length() == 0
        store.clear()
        assert store.length() == 0

    def test_recent_returns_tail(self):
        """Test that recent() returns the newest messages, oldest first."""
        store = InMemoryConversationStore(max_length=10)
        for i in range(6):
            store.append(Message.user(str(i)))
        assert [m.text for m in store.recent(2)] == ["4", "5"]
        assert store.recent(0) == []

    @pytest.mark.parametrize("max_length", [0, -1])
    def test_invalid_max_length_raises(self, max_length: int):
        """Test that a bound below 1 is rejected."""
        with pytest.raises(ValueError, match="at least 1"):
            InMemoryConversationStore(max_length=max_length)

    @given(
        st.integers(min_value=1, max_value=30),
        st.lists(st.text(max_size=20), max_size=80)
    )
    def test_bound_and_fifo_law(self, max_length: int, texts: list[str]):
        """Property test: length never exceeds the bound and the survivors are the newest."""
        store = InMemoryConversationStore(max_length=max_length)
        appended: list[Message] = []
        for text in texts:
            message = Message.user(text)
            store.append(message)
            appended.append(message)
            assert store.length() <= max_length
            assert store.snapshot() == appended[-max_length:]


class TestConversationStoreFactory:
    """Tests for the conversation store factory."""

    def test_create_memory_store(self):
        """Test creating an in-memory store via factory."""
        store = create_conversation_store("memory", max_length=7)
        assert isinstance(store, InMemoryConversationStore)
        assert store.max_length == 7
        assert store.backend_type == "memory"

    def test_unknown_store_raises(self):
        """Test that unknown store types are rejected."""
        with pytest.raises(ValueError, match="Unsupported conversation store"):
            create_conversation_store("sqlite")
