import sqlite3
import os
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from models import Conversation, Message
from utils.exceptions import NotFoundError, PersistenceError

# Initialize logger
logger = logging.getLogger(__name__)

# Database file path, overridden by the app factory and by tests
DB_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'consultations.db')

DATABASE_VERSION = 1


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='microseconds')


def _casefold(value):
    return value.casefold() if value is not None else None


@contextmanager
def get_db_connection():
    """
    Context manager for database connections.

    Enables foreign keys (cascading deletes) for the connection and converts
    any sqlite3 error into a PersistenceError.
    """
    conn = None
    try:
        conn = sqlite3.connect(DB_PATH)
        conn.row_factory = sqlite3.Row
        conn.execute('PRAGMA foreign_keys = ON')
        conn.create_function('casefold', 1, _casefold, deterministic=True)
        yield conn
    except sqlite3.Error as e:
        if conn:
            conn.rollback()
        logger.error(f"Database error: {e}")
        raise PersistenceError('Database operation failed') from e
    finally:
        if conn:
            conn.close()


def init_db():
    """Initialize the database by creating necessary tables if they don't exist"""
    with get_db_connection() as conn:
        cursor = conn.cursor()

        cursor.execute('''
        CREATE TABLE IF NOT EXISTS conversations (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            summary TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        ''')

        cursor.execute('''
        CREATE TABLE IF NOT EXISTS messages (
            id TEXT PRIMARY KEY,
            conversation_id TEXT NOT NULL,
            role TEXT NOT NULL CHECK (role IN ('DOCTOR', 'PATIENT')),
            original_text TEXT NOT NULL,
            translated_text TEXT,
            original_lang TEXT NOT NULL CHECK (original_lang IN ('en', 'hi')),
            target_lang TEXT NOT NULL CHECK (target_lang IN ('en', 'hi')),
            audio_url TEXT,
            created_at TEXT NOT NULL,
            FOREIGN KEY (conversation_id) REFERENCES conversations(id) ON DELETE CASCADE
        )
        ''')

        cursor.execute('''
        CREATE INDEX IF NOT EXISTS idx_messages_conversation
        ON messages(conversation_id, created_at)
        ''')

        cursor.execute('''
        CREATE TABLE IF NOT EXISTS database_version (
            version INTEGER PRIMARY KEY,
            applied_at TEXT NOT NULL,
            description TEXT
        )
        ''')
        cursor.execute(
            'INSERT OR IGNORE INTO database_version (version, applied_at, description) VALUES (?, ?, ?)',
            (DATABASE_VERSION, _now(), 'Conversations, translated messages and summaries')
        )

        conn.commit()
    logger.info(f"Database initialized successfully at {DB_PATH}")


def create_conversation(title: str) -> Conversation:
    """Create a new conversation and return the stored record"""
    conversation_id = uuid4().hex
    timestamp = _now()

    with get_db_connection() as conn:
        conn.execute(
            'INSERT INTO conversations (id, title, summary, created_at, updated_at) VALUES (?, ?, NULL, ?, ?)',
            (conversation_id, title, timestamp, timestamp)
        )
        conn.commit()

    logger.debug(f"Created conversation {conversation_id}: {title}")
    return Conversation(
        id=conversation_id,
        title=title,
        created_at=timestamp,
        updated_at=timestamp,
        summary=None
    )


def conversation_exists(conversation_id: str) -> bool:
    with get_db_connection() as conn:
        row = conn.execute(
            'SELECT 1 FROM conversations WHERE id = ?', (conversation_id,)
        ).fetchone()
    return row is not None


def get_conversation(conversation_id: str, include_messages: bool = False) -> Optional[Conversation]:
    """Get a conversation by ID, optionally including all its messages"""
    with get_db_connection() as conn:
        row = conn.execute(
            'SELECT id, title, summary, created_at, updated_at FROM conversations WHERE id = ?',
            (conversation_id,)
        ).fetchone()
        if not row:
            return None

        conversation = Conversation.from_row(row)
        if include_messages:
            rows = conn.execute(
                'SELECT * FROM messages WHERE conversation_id = ? ORDER BY created_at ASC, rowid ASC',
                (conversation_id,)
            ).fetchall()
            conversation.messages = [Message.from_row(r) for r in rows]

    return conversation


def list_conversations() -> List[Conversation]:
    """Get all conversations newest first, each with its latest message attached"""
    with get_db_connection() as conn:
        rows = conn.execute(
            'SELECT id, title, summary, created_at, updated_at FROM conversations '
            'ORDER BY created_at DESC, rowid DESC'
        ).fetchall()

        latest_rows = conn.execute('''
        SELECT * FROM (
            SELECT m.*, ROW_NUMBER() OVER (
                PARTITION BY m.conversation_id ORDER BY m.created_at DESC, m.rowid DESC
            ) AS position
            FROM messages m
        ) WHERE position = 1
        ''').fetchall()

    latest = {r['conversation_id']: Message.from_row(r) for r in latest_rows}

    conversations = []
    for row in rows:
        conversation = Conversation.from_row(row)
        conversation.latest_message = latest.get(conversation.id)
        conversations.append(conversation)
    return conversations


def update_conversation_title(conversation_id: str, new_title: str) -> bool:
    """Update the title of a conversation"""
    with get_db_connection() as conn:
        cursor = conn.execute(
            'UPDATE conversations SET title = ?, updated_at = ? WHERE id = ?',
            (new_title, _now(), conversation_id)
        )
        conn.commit()
        return cursor.rowcount > 0


def update_conversation_summary(conversation_id: str, summary: str) -> bool:
    """Overwrite the stored summary narrative of a conversation"""
    with get_db_connection() as conn:
        cursor = conn.execute(
            'UPDATE conversations SET summary = ?, updated_at = ? WHERE id = ?',
            (summary, _now(), conversation_id)
        )
        conn.commit()
        return cursor.rowcount > 0


def delete_conversation(conversation_id: str) -> bool:
    """Delete a conversation and all its messages"""
    with get_db_connection() as conn:
        cursor = conn.execute('DELETE FROM conversations WHERE id = ?', (conversation_id,))
        conn.commit()
        return cursor.rowcount > 0


def add_message(conversation_id: str, role: str, original_text: str, translated_text: Optional[str],
                original_lang: str, target_lang: str, audio_url: Optional[str] = None) -> Message:
    """Add a message to a conversation and refresh the conversation's updated_at"""
    message = Message(
        id=uuid4().hex,
        conversation_id=conversation_id,
        role=role,
        original_text=original_text,
        translated_text=translated_text,
        original_lang=original_lang,
        target_lang=target_lang,
        audio_url=audio_url,
        created_at=_now(),
    )

    with get_db_connection() as conn:
        try:
            conn.execute(
                'INSERT INTO messages (id, conversation_id, role, original_text, translated_text, '
                'original_lang, target_lang, audio_url, created_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)',
                (message.id, message.conversation_id, message.role, message.original_text,
                 message.translated_text, message.original_lang, message.target_lang,
                 message.audio_url, message.created_at)
            )
        except sqlite3.IntegrityError as e:
            # Only the foreign key can fail here; inputs are validated upstream
            raise NotFoundError(f'Conversation {conversation_id} not found') from e

        conn.execute(
            'UPDATE conversations SET updated_at = ? WHERE id = ?',
            (message.created_at, conversation_id)
        )
        conn.commit()

    logger.debug(f"Added {role} message {message.id} to conversation {conversation_id}")
    return message


def get_messages(conversation_id: str, search: Optional[str] = None) -> List[Message]:
    """
    Get messages for a conversation, oldest first.

    Args:
        conversation_id: The conversation ID
        search: Optional case-insensitive substring matched against the
            original or translated text

    Returns:
        List[Message]: Matching messages, possibly empty
    """
    query = 'SELECT * FROM messages WHERE conversation_id = ?'
    params = [conversation_id]

    if search:
        query += (
            ' AND (instr(casefold(original_text), casefold(?)) > 0'
            ' OR instr(casefold(translated_text), casefold(?)) > 0)'
        )
        params.extend([search, search])

    query += ' ORDER BY created_at ASC, rowid ASC'

    with get_db_connection() as conn:
        rows = conn.execute(query, params).fetchall()

    return [Message.from_row(row) for row in rows]
