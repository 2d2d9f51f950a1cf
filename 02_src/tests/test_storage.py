"""Tests for Storage."""

import asyncio

import pytest

from staffdir.errors import DuplicateEmailError
from staffdir.models import Employee, Message
from staffdir.storage import participants_key


def make_message(sender: str, text: str, **fields) -> Message:
    return Message({"sender": sender, "text": text, **fields})


def make_employee(id: str, name: str, email: str) -> Employee:
    return Employee(
        id=id,
        name=name,
        email=email,
        department="Engineering",
        role="Engineer",
        password_hash="hash",
    )


class TestStorageInit:
    """Tests for Storage initialization."""

    async def test_init_creates_tables(self, storage):
        """Test that init creates all tables."""
        async with storage._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ) as cursor:
            tables = [row[0] for row in await cursor.fetchall()]
            assert "employees" in tables
            assert "conversations" in tables
            assert "conversation_messages" in tables

    async def test_uninitialized_storage_raises(self):
        from staffdir.storage import Storage

        st = Storage(":memory:")
        with pytest.raises(RuntimeError, match="not initialized"):
            await st.list_employees()


class TestStorageEmployees:
    """Tests for Employee storage."""

    async def test_insert_and_get_employee(self, storage):
        employee = make_employee("a" * 32, "Ada", "ada@example.com")
        await storage.insert_employee(employee)

        retrieved = await storage.get_employee("a" * 32)
        assert retrieved == employee

    async def test_get_employee_by_email(self, storage):
        employee = make_employee("a" * 32, "Ada", "ada@example.com")
        await storage.insert_employee(employee)

        retrieved = await storage.get_employee_by_email("ada@example.com")
        assert retrieved is not None
        assert retrieved.id == "a" * 32

    async def test_get_nonexistent_employee(self, storage):
        assert await storage.get_employee("b" * 32) is None
        assert await storage.get_employee_by_email("nobody@example.com") is None

    async def test_duplicate_email_rejected(self, storage):
        await storage.insert_employee(make_employee("a" * 32, "Ada", "ada@example.com"))

        with pytest.raises(DuplicateEmailError):
            await storage.insert_employee(
                make_employee("b" * 32, "Other Ada", "ada@example.com")
            )

        employees = await storage.list_employees()
        assert len(employees) == 1

    async def test_list_employees_sorted_by_name(self, storage):
        await storage.insert_employee(make_employee("1" * 32, "Grace", "grace@example.com"))
        await storage.insert_employee(make_employee("2" * 32, "Ada", "ada@example.com"))
        await storage.insert_employee(make_employee("3" * 32, "Linus", "linus@example.com"))

        names = [e.name for e in await storage.list_employees()]
        assert names == ["Ada", "Grace", "Linus"]


class TestStorageConversations:
    """Tests for conversation storage."""

    async def test_get_missing_conversation(self, storage):
        assert await storage.get_conversation(["a", "b"]) is None

    async def test_append_creates_conversation(self, storage):
        msg = make_message("a", "hi", recipient="b", timestamp="t1")
        conversation_id = await storage.append_message(["a", "b"], msg)

        conversation = await storage.get_conversation(["a", "b"])
        assert conversation is not None
        assert conversation.id == conversation_id
        assert conversation.participants == ["a", "b"]
        assert conversation.messages == [msg]

    async def test_append_preserves_order(self, storage):
        for i in range(5):
            await storage.append_message(
                ["a", "b"], make_message("a", str(i), timestamp=f"t{i}")
            )

        conversation = await storage.get_conversation(["a", "b"])
        assert [m.text for m in conversation.messages] == ["0", "1", "2", "3", "4"]

    async def test_participant_order_is_part_of_key(self, storage):
        await storage.append_message(["a", "b"], make_message("a", "x", timestamp="t"))
        await storage.append_message(["b", "a"], make_message("b", "y", timestamp="t"))

        conversations = await storage.list_conversations()
        assert len(conversations) == 2
        assert (await storage.get_conversation(["b", "a"])).messages[0].text == "y"

    async def test_concurrent_first_appends_share_one_conversation(self, storage):
        await asyncio.gather(
            *[
                storage.append_message(
                    ["a", "b"], make_message("a", str(i), timestamp="t")
                )
                for i in range(10)
            ]
        )

        conversations = await storage.list_conversations()
        assert len(conversations) == 1
        assert len(conversations[0].messages) == 10

    async def test_message_body_stored_verbatim(self, storage):
        msg = make_message(
            "a", "hi", timestamp=1700000000000, reactions={"👍": ["b"]}, edited=False
        )
        await storage.append_message(["a", "b"], msg)

        stored = (await storage.get_conversation(["a", "b"])).messages[0]
        assert stored.to_dict() == {
            "sender": "a",
            "text": "hi",
            "timestamp": 1700000000000,
            "reactions": {"👍": ["b"]},
            "edited": False,
        }
        assert "recipient" not in stored.to_dict()

    async def test_reads_never_see_half_written_upsert(self, storage):
        results = await asyncio.gather(
            storage.append_message(["a", "b"], make_message("a", "first")),
            storage.get_conversation(["a", "b"]),
            storage.list_conversations(),
        )

        conversation, conversations = results[1], results[2]
        assert conversation is None or len(conversation.messages) == 1
        assert all(len(c.messages) == 1 for c in conversations)

    async def test_list_conversations_groups_messages(self, storage):
        await storage.append_message(["a", "b"], make_message("a", "1", timestamp="t"))
        await storage.append_message(["a", "c"], make_message("a", "2", timestamp="t"))
        await storage.append_message(["a", "b"], make_message("b", "3", timestamp="t"))

        conversations = await storage.list_conversations()
        by_key = {participants_key(c.participants): c for c in conversations}
        assert [m.text for m in by_key['["a","b"]'].messages] == ["1", "3"]
        assert [m.text for m in by_key['["a","c"]'].messages] == ["2"]


class TestStorageClear:
    """Tests for clearing storage."""

    async def test_clear_all_data(self, storage):
        await storage.insert_employee(make_employee("a" * 32, "Ada", "ada@example.com"))
        await storage.append_message(["a", "b"], make_message("a", "hi", timestamp="t"))

        await storage.clear()

        async with storage._conn.execute("SELECT COUNT(*) FROM employees") as cursor:
            count = await cursor.fetchone()
            assert count[0] == 0

        async with storage._conn.execute(
            "SELECT COUNT(*) FROM conversation_messages"
        ) as cursor:
            count = await cursor.fetchone()
            assert count[0] == 0
