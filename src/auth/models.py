"""Database models for authentication.

Cassandra table definitions for:
- users: Main user table keyed by id
- users_by_email: Lookup table enforcing email uniqueness (lightweight
  transaction on insert)

Note: Uses cassandra-driver directly (not an ORM). Tables are created via
the CQL statements below in the database module.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from src.auth.permissions import UserRole
from src.utils import ensure_utc_aware, utcnow


USER_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.users (
    id UUID PRIMARY KEY,
    email TEXT,
    name TEXT,
    password_hash TEXT,
    role TEXT,
    created_at TIMESTAMP
)
"""

USER_BY_EMAIL_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.users_by_email (
    email TEXT PRIMARY KEY,
    user_id UUID
)
"""

AUTH_TABLES_CQL = [
    USER_TABLE_CQL,
    USER_BY_EMAIL_TABLE_CQL,
]


def normalize_email(email: str) -> str:
    """Lowercase and strip an email for storage and lookup."""
    return email.lower().strip()


class User:
    """User entity.

    Attributes:
        id: Unique identifier (UUID)
        email: Unique email address (normalized to lowercase)
        name: Display name
        password_hash: Argon2id hashed password
        role: ``student`` or ``instructor``; immutable after registration
        created_at: Account creation timestamp
    """

    def __init__(
        self,
        id: UUID | None = None,
        email: str = "",
        name: str = "",
        password_hash: str = "",
        role: str = UserRole.STUDENT.value,
        created_at: datetime | None = None,
    ):
        self.id = id or uuid4()
        self.email = normalize_email(email)
        self.name = name
        self.password_hash = password_hash
        self.role = role
        self.created_at = ensure_utc_aware(created_at) or utcnow()

    @classmethod
    def from_row(cls, row: Any) -> "User":
        """Create User instance from Cassandra row."""
        return cls(
            id=row.id,
            email=row.email,
            name=row.name,
            password_hash=row.password_hash,
            role=row.role,
            created_at=row.created_at,
        )

    def to_dict(self, include_password: bool = False) -> dict[str, Any]:
        """Convert to dictionary (excludes password_hash by default)."""
        data = {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "created_at": self.created_at,
        }
        if include_password:
            data["password_hash"] = self.password_hash
        return data

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"
