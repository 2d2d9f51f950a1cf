"""SQLite storage implementation."""

import asyncio
import json
import sqlite3
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..errors import DuplicateEmailError
from ..models import Conversation, Employee, Message


def participants_key(participants: list[str]) -> str:
    """Encode a participant list as its exact-match lookup key."""
    return json.dumps(list(participants), separators=(",", ":"))


class IStorage(Protocol):
    """Persistent storage for employees and conversations (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # Employees
    async def insert_employee(self, employee: Employee) -> None:
        """Insert an employee. Raises DuplicateEmailError on a taken email."""
        ...

    async def get_employee(self, employee_id: str) -> Employee | None:
        """Get an employee by ID."""
        ...

    async def get_employee_by_email(self, email: str) -> Employee | None:
        """Get an employee by email."""
        ...

    async def list_employees(self) -> list[Employee]:
        """Get all employees sorted by name ascending."""
        ...

    # Conversations
    async def append_message(self, participants: list[str], message: Message) -> int:
        """Append to the conversation for participants, creating it if needed."""
        ...

    async def get_conversation(self, participants: list[str]) -> Conversation | None:
        """Get the conversation matching the exact participant list."""
        ...

    async def list_conversations(self) -> list[Conversation]:
        """Get all conversations with their messages."""
        ...

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        ...


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None
        # One transaction or multi-statement read at a time on the shared
        # connection, so reads never see an uncommitted upsert
        self._lock = asyncio.Lock()

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)
        await self._conn.execute("PRAGMA foreign_keys = ON")

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    # Employees
    async def insert_employee(self, employee: Employee) -> None:
        """Insert an employee. Raises DuplicateEmailError on a taken email."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        async with self._lock:
            try:
                await self._conn.execute(
                    """
                    INSERT INTO employees
                    (id, name, email, department, role, password_hash)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        employee.id,
                        employee.name,
                        employee.email,
                        employee.department,
                        employee.role,
                        employee.password_hash,
                    ),
                )
            except sqlite3.IntegrityError as exc:
                await self._conn.rollback()
                raise DuplicateEmailError() from exc
            await self._conn.commit()

    async def get_employee(self, employee_id: str) -> Employee | None:
        """Get an employee by ID."""
        return await self._fetch_employee("id", employee_id)

    async def get_employee_by_email(self, email: str) -> Employee | None:
        """Get an employee by email."""
        return await self._fetch_employee("email", email)

    async def _fetch_employee(self, column: str, value: str) -> Employee | None:
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        cursor = await self._conn.execute(
            f"""
            SELECT id, name, email, department, role, password_hash
            FROM employees
            WHERE {column} = ?
            """,
            (value,),
        )
        row = await cursor.fetchone()

        if not row:
            return None

        return Employee(*row)

    async def list_employees(self) -> list[Employee]:
        """Get all employees sorted by name ascending."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        cursor = await self._conn.execute(
            """
            SELECT id, name, email, department, role, password_hash
            FROM employees
            ORDER BY name ASC, id ASC
            """
        )
        rows = await cursor.fetchall()

        return [Employee(*row) for row in rows]

    # Conversations
    async def append_message(self, participants: list[str], message: Message) -> int:
        """Append to the conversation for participants, creating it if needed.

        The conversation row is upserted against the UNIQUE participants key,
        so concurrent first messages for the same list share one conversation.
        Returns the conversation id.
        """
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        key = participants_key(participants)

        async with self._lock:
            try:
                await self._conn.execute(
                    """
                    INSERT INTO conversations (participants)
                    VALUES (?)
                    ON CONFLICT(participants) DO NOTHING
                    """,
                    (key,),
                )
                cursor = await self._conn.execute(
                    "SELECT id FROM conversations WHERE participants = ?",
                    (key,),
                )
                row = await cursor.fetchone()
                conversation_id = row[0]

                await self._conn.execute(
                    """
                    INSERT INTO conversation_messages
                    (conversation_id, sender, body)
                    VALUES (?, ?, ?)
                    """,
                    (conversation_id, message.sender, json.dumps(message.body)),
                )
            except Exception:
                await self._conn.rollback()
                raise
            await self._conn.commit()

        return conversation_id

    async def get_conversation(self, participants: list[str]) -> Conversation | None:
        """Get the conversation matching the exact participant list."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        async with self._lock:
            cursor = await self._conn.execute(
                "SELECT id, participants FROM conversations WHERE participants = ?",
                (participants_key(participants),),
            )
            row = await cursor.fetchone()

            if not row:
                return None

            conversation = Conversation(id=row[0], participants=json.loads(row[1]))
            cursor = await self._conn.execute(
                """
                SELECT body
                FROM conversation_messages
                WHERE conversation_id = ?
                ORDER BY id ASC
                """,
                (conversation.id,),
            )
            rows = await cursor.fetchall()

        conversation.messages = [Message(body=json.loads(row[0])) for row in rows]
        return conversation

    async def list_conversations(self) -> list[Conversation]:
        """Get all conversations with their messages."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        async with self._lock:
            cursor = await self._conn.execute(
                "SELECT id, participants FROM conversations ORDER BY id ASC"
            )
            conversation_rows = await cursor.fetchall()

            cursor = await self._conn.execute(
                """
                SELECT conversation_id, body
                FROM conversation_messages
                ORDER BY conversation_id ASC, id ASC
                """
            )
            message_rows = await cursor.fetchall()

        conversations = {
            row[0]: Conversation(id=row[0], participants=json.loads(row[1]))
            for row in conversation_rows
        }
        for conversation_id, body in message_rows:
            conversations[conversation_id].messages.append(
                Message(body=json.loads(body))
            )

        return list(conversations.values())

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        tables = [
            "conversation_messages",
            "conversations",
            "employees",
        ]

        async with self._lock:
            for table in tables:
                await self._conn.execute(f"DELETE FROM {table}")

            await self._conn.commit()
