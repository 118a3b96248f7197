"""SqlAccountService: the account domain service over the SQLite store.

Implements :class:`~acctl.services.contracts.AccountService`.  Every
failure is a :class:`DomainServiceError` whose message is the reason shown
to the operator; codes are ``NOT_FOUND``, ``CONFLICT``, ``INVALID_INPUT``
or ``STORE_ERROR``.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select, update

from acctl.domain.models import Profile, UserRecord
from acctl.domain.types import LOCAL_PROVIDER, Role, UserStatus
from acctl.errors import DomainServiceError
from acctl.infrastructure.database.schema import profiles, user_roles, users
from acctl.infrastructure.passwords import hash_password
from acctl.services._helpers import now_iso
from acctl.services.base import BaseService

if TYPE_CHECKING:
    from sqlalchemy import Connection

    from acctl.config.models import AccountsConfig
    from acctl.infrastructure.store import Store

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _not_found(user_id: str) -> DomainServiceError:
    return DomainServiceError(f"User {user_id} not found", code="NOT_FOUND")


class SqlAccountService(BaseService):
    """Account operations backed by :class:`~acctl.infrastructure.store.Store`."""

    def __init__(self, store: Store, rules: AccountsConfig) -> None:
        super().__init__(store)
        self._rules = rules
        self._username_re = re.compile(rules.username_pattern)

    # ------------------------------------------------------------------
    # Input checks
    # ------------------------------------------------------------------

    def is_valid_password(self, password: str) -> str:
        rules = self._rules
        if not password:
            raise DomainServiceError("Password is required", code="INVALID_INPUT")
        if len(password) < rules.min_password_length:
            raise DomainServiceError(
                f"Password must be at least {rules.min_password_length} characters",
                code="INVALID_INPUT",
            )
        if len(password) > rules.max_password_length:
            raise DomainServiceError(
                f"Password must be at most {rules.max_password_length} characters",
                code="INVALID_INPUT",
            )
        return password

    def is_valid_username(self, username: str) -> str:
        self._check_username_format(username)
        with self._store.transaction() as conn:
            self._check_username_free(conn, username)
        return username

    def _check_username_format(self, username: str | None) -> str:
        rules = self._rules
        if not username:
            raise DomainServiceError("Username is required", code="INVALID_INPUT")
        if not rules.min_username_length <= len(username) <= rules.max_username_length:
            raise DomainServiceError(
                f"Username must be between {rules.min_username_length} and "
                f"{rules.max_username_length} characters",
                code="INVALID_INPUT",
            )
        if not self._username_re.match(username):
            raise DomainServiceError(
                "Username may only contain letters, numbers and _", code="INVALID_INPUT"
            )
        return username

    def _check_username_free(
        self, conn: Connection, username: str, *, exclude: str | None = None
    ) -> None:
        stmt = select(users.c.id).where(users.c.username_lower == username.lower())
        if exclude is not None:
            stmt = stmt.where(users.c.id != exclude)
        if conn.execute(stmt).first() is not None:
            raise DomainServiceError(f"Username {username} already in use", code="CONFLICT")

    def _check_email(self, email: str | None) -> str:
        if not email or not email.strip():
            raise DomainServiceError("Email is required", code="INVALID_INPUT")
        email = email.strip().lower()
        if not _EMAIL_RE.match(email):
            raise DomainServiceError(f"Email {email} is not valid", code="INVALID_INPUT")
        return email

    def _check_email_free(self, conn: Connection, email: str) -> None:
        row = conn.execute(
            select(profiles.c.user_id).where(
                profiles.c.provider == LOCAL_PROVIDER, profiles.c.profile_id == email
            )
        ).first()
        if row is not None:
            raise DomainServiceError(f"Email {email} already in use", code="CONFLICT")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_account(self, user_id: str) -> UserRecord:
        with self._store.transaction() as conn:
            return self._load(conn, user_id)

    def list_accounts(self) -> list[UserRecord]:
        with self._store.transaction() as conn:
            ids = conn.execute(select(users.c.id).order_by(users.c.created_at, users.c.id))
            return [self._load(conn, row.id) for row in ids.all()]

    def _require(self, conn: Connection, user_id: str) -> Any:
        row = conn.execute(select(users).where(users.c.id == user_id)).first()
        if row is None:
            raise _not_found(user_id)
        return row

    def _load(self, conn: Connection, user_id: str) -> UserRecord:
        row = self._require(conn, user_id)
        profile_rows = conn.execute(
            select(profiles)
            .where(profiles.c.user_id == user_id)
            .order_by(profiles.c.position)
        ).all()
        role_rows = conn.execute(
            select(user_roles.c.role).where(user_roles.c.user_id == user_id)
        ).all()
        return UserRecord(
            id=row.id,
            username=row.username,
            profiles=[
                Profile(
                    provider=p.provider,
                    id=p.profile_id,
                    metadata=json.loads(p.metadata) if p.metadata else {},
                )
                for p in profile_rows
            ],
            roles=frozenset(Role(r.role) for r in role_rows),
            status=UserStatus(row.status),
            disabled=bool(row.disabled),
            created_at=row.created_at,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_account(
        self, email: str | None, password: str | None, username: str | None
    ) -> UserRecord:
        email = self._check_email(email)
        password = self.is_valid_password(password or "")
        username = self._check_username_format(username.strip() if username else username)
        user_id = str(uuid.uuid4())

        with self._store.transaction() as conn:
            self._check_username_free(conn, username)
            self._check_email_free(conn, email)
            conn.execute(
                insert(users).values(
                    id=user_id,
                    username=username,
                    username_lower=username.lower(),
                    password_hash=hash_password(password),
                    status=UserStatus.ACTIVE.value,
                    disabled=0,
                    created_at=now_iso(),
                )
            )
            conn.execute(
                insert(profiles).values(
                    user_id=user_id,
                    position=0,
                    provider=LOCAL_PROVIDER,
                    profile_id=email,
                    metadata=json.dumps({}),
                )
            )
            logger.debug("Created account %s (%s)", user_id, username)
            return self._load(conn, user_id)

    def change_password(self, user_id: str, password: str) -> None:
        password = self.is_valid_password(password)
        with self._store.transaction() as conn:
            self._require(conn, user_id)
            conn.execute(
                update(users)
                .where(users.c.id == user_id)
                .values(password_hash=hash_password(password))
            )

    def delete_account(self, user_id: str) -> None:
        with self._store.transaction() as conn:
            self._require(conn, user_id)
            conn.execute(delete(user_roles).where(user_roles.c.user_id == user_id))
            conn.execute(delete(profiles).where(profiles.c.user_id == user_id))
            conn.execute(delete(users).where(users.c.id == user_id))

    def update_email(self, user_id: str, email: str) -> None:
        email = self._check_email(email)
        with self._store.transaction() as conn:
            self._require(conn, user_id)
            local = conn.execute(
                select(profiles.c.profile_id).where(
                    profiles.c.user_id == user_id, profiles.c.provider == LOCAL_PROVIDER
                )
            ).first()
            if local is None:
                raise DomainServiceError(
                    f"User {user_id} has no local profile", code="NOT_FOUND"
                )
            if local.profile_id == email:
                return
            self._check_email_free(conn, email)
            # Changing the address invalidates any earlier confirmation.
            conn.execute(
                update(profiles)
                .where(profiles.c.user_id == user_id, profiles.c.provider == LOCAL_PROVIDER)
                .values(profile_id=email, metadata=json.dumps({}))
            )

    def update_username(self, user_id: str, username: str) -> None:
        username = self._check_username_format(username)
        with self._store.transaction() as conn:
            self._require(conn, user_id)
            self._check_username_free(conn, username, exclude=user_id)
            conn.execute(
                update(users)
                .where(users.c.id == user_id)
                .values(username=username, username_lower=username.lower())
            )

    def add_role(self, user_id: str, role: Role) -> None:
        with self._store.transaction() as conn:
            self._require(conn, user_id)
            exists = conn.execute(
                select(user_roles.c.role).where(
                    user_roles.c.user_id == user_id, user_roles.c.role == Role(role).value
                )
            ).first()
            if exists is None:
                conn.execute(insert(user_roles).values(user_id=user_id, role=Role(role).value))

    def remove_role(self, user_id: str, role: Role) -> None:
        with self._store.transaction() as conn:
            self._require(conn, user_id)
            conn.execute(
                delete(user_roles).where(
                    user_roles.c.user_id == user_id, user_roles.c.role == Role(role).value
                )
            )

    def set_status(self, user_id: str, status: UserStatus) -> None:
        with self._store.transaction() as conn:
            self._require(conn, user_id)
            conn.execute(
                update(users).where(users.c.id == user_id).values(status=UserStatus(status).value)
            )

    def disable_account(self, user_id: str) -> None:
        self._set_disabled(user_id, True)

    def enable_account(self, user_id: str) -> None:
        self._set_disabled(user_id, False)

    def _set_disabled(self, user_id: str, disabled: bool) -> None:
        with self._store.transaction() as conn:
            self._require(conn, user_id)
            conn.execute(
                update(users).where(users.c.id == user_id).values(disabled=int(disabled))
            )

    def merge_accounts(self, dst_id: str, src_id: str) -> None:
        """Move *src_id*'s profiles and roles onto *dst_id*, then delete *src_id*."""
        if dst_id == src_id:
            raise DomainServiceError("Cannot merge a user into itself", code="INVALID_INPUT")
        with self._store.transaction() as conn:
            self._require(conn, dst_id)
            self._require(conn, src_id)

            dst_local = conn.execute(
                select(profiles.c.profile_id).where(
                    profiles.c.user_id == dst_id, profiles.c.provider == LOCAL_PROVIDER
                )
            ).first()
            src_local = conn.execute(
                select(profiles.c.profile_id).where(
                    profiles.c.user_id == src_id, profiles.c.provider == LOCAL_PROVIDER
                )
            ).first()
            if dst_local is not None and src_local is not None:
                raise DomainServiceError(
                    "Both users have a local profile; remove one before merging",
                    code="CONFLICT",
                )

            next_position = conn.execute(
                select(func.coalesce(func.max(profiles.c.position), -1) + 1).where(
                    profiles.c.user_id == dst_id
                )
            ).scalar_one()
            src_profiles = conn.execute(
                select(profiles.c.provider, profiles.c.profile_id)
                .where(profiles.c.user_id == src_id)
                .order_by(profiles.c.position)
            ).all()
            for offset, p in enumerate(src_profiles):
                conn.execute(
                    update(profiles)
                    .where(
                        profiles.c.provider == p.provider,
                        profiles.c.profile_id == p.profile_id,
                    )
                    .values(user_id=dst_id, position=next_position + offset)
                )

            dst_roles = {
                r.role
                for r in conn.execute(
                    select(user_roles.c.role).where(user_roles.c.user_id == dst_id)
                ).all()
            }
            for r in conn.execute(
                select(user_roles.c.role).where(user_roles.c.user_id == src_id)
            ).all():
                if r.role not in dst_roles:
                    conn.execute(insert(user_roles).values(user_id=dst_id, role=r.role))

            conn.execute(delete(user_roles).where(user_roles.c.user_id == src_id))
            conn.execute(delete(users).where(users.c.id == src_id))
            logger.debug("Merged %s into %s", src_id, dst_id)

    def confirm_email(self, user_id: str, email: str) -> None:
        email = self._check_email(email)
        with self._store.transaction() as conn:
            self._require(conn, user_id)
            row = conn.execute(
                select(profiles.c.metadata).where(
                    profiles.c.user_id == user_id,
                    profiles.c.provider == LOCAL_PROVIDER,
                    profiles.c.profile_id == email,
                )
            ).first()
            if row is None:
                raise DomainServiceError(
                    f"User {user_id} has no local profile with email {email}",
                    code="NOT_FOUND",
                )
            metadata = json.loads(row.metadata) if row.metadata else {}
            metadata["confirmed_at"] = now_iso()
            conn.execute(
                update(profiles)
                .where(
                    profiles.c.user_id == user_id,
                    profiles.c.provider == LOCAL_PROVIDER,
                    profiles.c.profile_id == email,
                )
                .values(metadata=json.dumps(metadata))
            )
