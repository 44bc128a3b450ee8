"""User storage.

``UserRepository`` is the contract the auth service depends on;
``CassandraUserRepository`` implements it with prepared CQL statements.
"""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from src.auth.models import User, normalize_email


if TYPE_CHECKING:
    from cassandra.cluster import Session


class UserRepository(Protocol):
    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def create(self, user: User) -> bool:
        """Insert the user; False when the email is already taken."""
        ...

    async def update_password_hash(self, user_id: UUID, password_hash: str) -> None: ...


class CassandraUserRepository:
    """User repository backed by the ``users`` and ``users_by_email`` tables."""

    def __init__(self, session: "Session", keyspace: str):
        self.session = session
        self.keyspace = keyspace
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for better performance."""
        self._get_user_by_id = self.session.prepare(
            f"SELECT * FROM {self.keyspace}.users WHERE id = ?"
        )
        self._get_user_id_by_email = self.session.prepare(
            f"SELECT user_id FROM {self.keyspace}.users_by_email WHERE email = ?"
        )
        # LWT: the email row is the uniqueness guard
        self._claim_email = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.users_by_email (email, user_id)
            VALUES (?, ?) IF NOT EXISTS
        """)
        self._insert_user = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.users
            (id, email, name, password_hash, role, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
        """)
        self._update_password_hash = self.session.prepare(
            f"UPDATE {self.keyspace}.users SET password_hash = ? WHERE id = ?"
        )

    async def get_by_id(self, user_id: UUID) -> User | None:
        result = await self.session.aexecute(self._get_user_by_id, [user_id])
        row = result.one()
        return User.from_row(row) if row else None

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.aexecute(
            self._get_user_id_by_email, [normalize_email(email)]
        )
        row = result.one()
        return await self.get_by_id(row.user_id) if row else None

    async def create(self, user: User) -> bool:
        claimed = await self.session.aexecute(self._claim_email, [user.email, user.id])
        if not claimed.was_applied:
            return False

        await self.session.aexecute(
            self._insert_user,
            [
                user.id,
                user.email,
                user.name,
                user.password_hash,
                user.role,
                user.created_at,
            ],
        )
        return True

    async def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        await self.session.aexecute(self._update_password_hash, [password_hash, user_id])
