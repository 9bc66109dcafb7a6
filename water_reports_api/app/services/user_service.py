"""
Business logic for users.

Users are citizens or officials; the role is stored as given and not
enforced anywhere.  Passwords are stored and compared as plain text,
exactly as clients send them.  This keeps login behaviour identical
to the existing web client but is not safe for production; switching
to a hash (bcrypt/argon2) changes which passwords authenticate, so it
must be done together with a data migration.
"""

import logging
import sqlite3
from datetime import date
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email

from water_reports_api.app.core.db import get_connection
from water_reports_api.app.core.exceptions import ConflictError, NotFoundError, ValidationError
from water_reports_api.app.schemas.user import UserCreate, UserRead


REQUIRED_FIELDS = [
    ("name", "Name is required"),
    ("email", "Email is required"),
    ("password", "Password is required"),
    ("role", "Role is required"),
]


def _validate(data: UserCreate) -> None:
    """Raise ``ValidationError`` for a blank required field or a malformed email."""
    for field, message in REQUIRED_FIELDS:
        value = getattr(data, field)
        if value is None or not value.strip():
            raise ValidationError(message)
    try:
        # Municipal staff may use internal hosts such as ops@intranet.
        validate_email(data.email, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        raise ValidationError("Invalid email format")


class UserService:
    """Service for registering, authenticating and managing users."""

    @classmethod
    async def register_user(cls, data: UserCreate) -> UserRead:
        """Create a new user in the database.

        The email must be unique across all users; ``ConflictError`` is
        raised otherwise.  ``created_at`` is set to today's date and
        never changes afterwards.
        """
        logger = logging.getLogger(__name__)
        _validate(data)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            existing = cursor.execute(
                "SELECT id FROM users WHERE email = ?", (data.email,)
            ).fetchone()
            if existing:
                raise ConflictError("Email already registered")
            try:
                cursor.execute(
                    "INSERT INTO users (name, email, password, role, department, created_at) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        data.name,
                        data.email,
                        data.password,
                        data.role,
                        data.department,
                        date.today().isoformat(),
                    ),
                )
            except sqlite3.IntegrityError:
                # Another request registered the same email in between.
                conn.rollback()
                raise ConflictError("Email already registered")
            user_id = cursor.lastrowid
            conn.commit()
            logger.info("Registered user %s (%s)", user_id, data.role)
            row = cursor.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return cls._row_to_user_read(row)
        finally:
            conn.close()

    @classmethod
    async def list_users(cls) -> List[UserRead]:
        """Return the list of all users from the database."""
        conn = get_connection()
        try:
            rows = conn.execute("SELECT * FROM users ORDER BY id").fetchall()
            return [cls._row_to_user_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_user(cls, user_id: int) -> Optional[UserRead]:
        """Retrieve a user by ID."""
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            if row:
                return cls._row_to_user_read(row)
            return None
        finally:
            conn.close()

    @classmethod
    async def authenticate(cls, email: Optional[str], password: Optional[str]) -> Optional[UserRead]:
        """Authenticate a user by email and password.

        Returns the user only if a record with exactly this email exists
        and its stored password equals ``password`` character for
        character.  Otherwise returns ``None``.
        """
        if email is None or password is None:
            return None
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
            if not row or row["password"] != password:
                return None
            return cls._row_to_user_read(row)
        finally:
            conn.close()

    @classmethod
    async def update_user(cls, user_id: int, data: UserCreate) -> UserRead:
        """Overwrite a user's name, email, password, role and department.

        Raises ``NotFoundError`` if the user does not exist,
        ``ValidationError`` for blank or malformed input and
        ``ConflictError`` if the new email belongs to another user.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute("SELECT id FROM users WHERE id = ?", (user_id,)).fetchone()
            if not row:
                raise NotFoundError(f"User not found with id: {user_id}")
            _validate(data)
            taken = cursor.execute(
                "SELECT id FROM users WHERE email = ? AND id != ?",
                (data.email, user_id),
            ).fetchone()
            if taken:
                raise ConflictError("Email already registered")
            try:
                cursor.execute(
                    "UPDATE users SET name = ?, email = ?, password = ?, role = ?, department = ? "
                    "WHERE id = ?",
                    (data.name, data.email, data.password, data.role, data.department, user_id),
                )
            except sqlite3.IntegrityError:
                conn.rollback()
                raise ConflictError("Email already registered")
            if cursor.rowcount == 0:
                conn.rollback()
                raise NotFoundError(f"User not found with id: {user_id}")
            conn.commit()
            logger.info("Updated user %s", user_id)
            row = cursor.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            if not row:
                raise NotFoundError(f"User not found with id: {user_id}")
            return cls._row_to_user_read(row)
        finally:
            conn.close()

    @classmethod
    async def delete_user(cls, user_id: int) -> None:
        """Delete a user by ID.

        Reports are not linked to users, so nothing else is removed.
        Raises ``NotFoundError`` if the user does not exist.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
            affected = cursor.rowcount
            conn.commit()
            if not affected:
                raise NotFoundError(f"User not found with id: {user_id}")
            logger.info("Deleted user %s", user_id)
        finally:
            conn.close()

    @classmethod
    async def count_users(cls) -> int:
        conn = get_connection()
        try:
            return conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]
        finally:
            conn.close()

    @staticmethod
    def _row_to_user_read(row: sqlite3.Row) -> UserRead:
        """Convert a database row to a UserRead schema instance (without password)."""
        return UserRead(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            role=row["role"],
            department=row["department"],
            created_at=row["created_at"],
        )
