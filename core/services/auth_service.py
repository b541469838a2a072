# =============================================================================
# core/services/auth_service.py - Admin Authentication and Sessions
# =============================================================================
# Password checks and the server-side session lifecycle:
#
#   login()           -> (token, AdminUserSummary), or InvalidCredentialsError
#   resolve_session() -> AdminUserSummary, or None when unauthenticated
#   logout()          -> deletes the session row; safe to repeat
#
# The token is 32 random bytes (urlsafe base64) and names a row in
# admin_sessions; it carries no user data. Sessions expire a fixed number
# of days after login; resolving a session does not extend it.
# =============================================================================

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import bcrypt
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    SetupUnavailableError,
)
from core.models.auth import AdminUserSummary
from core.tables import AdminSession, AdminUser, utcnow

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def hash_password(password: str, rounds: int = 12) -> str:
    """bcrypt hash with a fresh salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time bcrypt comparison. A malformed hash never matches."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> str:
    """Hash compared against when the username doesn't exist."""
    return hash_password(secrets.token_urlsafe(16), rounds)


def warm_dummy_hash(rounds: int) -> None:
    """Build the dummy hash up front so the first unknown-user login costs one bcrypt check."""
    _dummy_hash(rounds)


class AuthService:
    """
    Service for admin accounts and sessions.

    Every method takes the request's database session; methods that write
    commit before returning.
    """

    # -------------------------------------------------------------------------
    # Login / Logout
    # -------------------------------------------------------------------------

    @staticmethod
    def login(
        db: Session,
        username: str,
        password: str,
        ttl: timedelta,
        rounds: int = 12,
    ) -> tuple[str, AdminUserSummary]:
        """
        Check credentials and open a session.

        Args:
            db: Database session
            username: Exact, case-sensitive username
            password: Plain password
            ttl: Session lifetime from now
            rounds: bcrypt cost used for the dummy comparison

        Returns:
            Tuple of (session token, user summary)

        Raises:
            InvalidCredentialsError: Unknown user or wrong password (same
                error, same amount of hashing work in both cases)
        """
        user = db.scalar(select(AdminUser).where(AdminUser.username == username))

        if user is None:
            verify_password(password, _dummy_hash(rounds))
            logger.info("Failed admin login")
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            logger.info("Failed admin login")
            raise InvalidCredentialsError()

        now = utcnow()
        AuthService.purge_expired(db, now=now)

        token = secrets.token_urlsafe(TOKEN_BYTES)
        db.add(AdminSession(
            token=token,
            admin_user_id=user.id,
            created_at=now,
            expires_at=now + ttl,
        ))
        db.commit()

        logger.info(f"Admin logged in: {user.id}")
        return token, AdminUserSummary(id=user.id, username=user.username)

    @staticmethod
    def logout(db: Session, token: str | None) -> None:
        """Delete the session row. Unknown or missing tokens are a no-op."""
        if not token:
            return
        db.execute(delete(AdminSession).where(AdminSession.token == token))
        db.commit()

    @staticmethod
    def resolve_session(
        db: Session,
        token: str | None,
        now: datetime | None = None,
    ) -> AdminUserSummary | None:
        """
        Look up the admin behind a session token.

        Returns None when the token is missing, unknown, expired, or points
        at an admin that no longer exists.
        """
        if not token:
            return None

        session = db.get(AdminSession, token)
        if session is None:
            return None

        now = now or utcnow()
        if _as_utc(session.expires_at) <= now:
            return None

        user = db.get(AdminUser, session.admin_user_id)
        if user is None:
            logger.warning("Session references a deleted admin user")
            return None

        return AdminUserSummary(id=user.id, username=user.username)

    @staticmethod
    def purge_expired(db: Session, now: datetime | None = None) -> int:
        """Delete expired session rows. Caller commits."""
        now = now or utcnow()
        result = db.execute(
            delete(AdminSession)
            .where(AdminSession.expires_at <= now)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount:
            logger.debug(f"Purged {result.rowcount} expired sessions")
        return result.rowcount or 0

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    @staticmethod
    def admin_exists(db: Session) -> bool:
        return (db.scalar(select(func.count()).select_from(AdminUser)) or 0) > 0

    @staticmethod
    def create_admin(db: Session, username: str, password: str, rounds: int = 12) -> AdminUserSummary:
        """
        Create an admin account.

        Raises:
            ConflictError: If the username is taken
        """
        if db.scalar(select(AdminUser.id).where(AdminUser.username == username)) is not None:
            raise ConflictError("Username already exists", field="username", value=username)

        user = AdminUser(username=username, password_hash=hash_password(password, rounds))
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Username already exists", field="username", value=username)

        logger.info(f"Created admin user: {user.id}")
        return AdminUserSummary(id=user.id, username=user.username)

    @staticmethod
    def setup_admin(db: Session, username: str, password: str, rounds: int = 12) -> AdminUserSummary:
        """
        First-run setup: create the admin only while none exists.

        Raises:
            SetupUnavailableError: An admin account already exists
        """
        if AuthService.admin_exists(db):
            raise SetupUnavailableError()
        return AuthService.create_admin(db, username, password, rounds)

    @staticmethod
    def change_password(
        db: Session,
        user_id: str,
        current_password: str,
        new_password: str,
        keep_token: str | None = None,
        rounds: int = 12,
    ) -> None:
        """
        Rotate an admin's password after re-checking the current one.

        All of the admin's other sessions are revoked; `keep_token` (the
        session making the request) survives.

        Raises:
            InvalidCredentialsError: current_password is wrong
        """
        user = db.get(AdminUser, user_id)
        if user is None or not verify_password(current_password, user.password_hash):
            raise InvalidCredentialsError()

        user.password_hash = hash_password(new_password, rounds)
        stmt = delete(AdminSession).where(AdminSession.admin_user_id == user.id)
        if keep_token:
            stmt = stmt.where(AdminSession.token != keep_token)
        db.execute(stmt)
        db.commit()
        logger.info(f"Rotated password for admin user: {user.id}")

    @staticmethod
    def set_password(db: Session, username: str, new_password: str, rounds: int = 12) -> AdminUserSummary:
        """
        Overwrite a password without the current one (operator CLI only).

        Revokes every session of that admin.

        Raises:
            NotFoundError: No admin with this username
        """
        user = db.scalar(select(AdminUser).where(AdminUser.username == username))
        if user is None:
            raise NotFoundError("Admin user", username)

        user.password_hash = hash_password(new_password, rounds)
        db.execute(delete(AdminSession).where(AdminSession.admin_user_id == user.id))
        db.commit()
        logger.info(f"Reset password for admin user: {user.id}")
        return AdminUserSummary(id=user.id, username=user.username)

    @staticmethod
    def upsert_admin(db: Session, username: str, password: str, rounds: int = 12) -> tuple[AdminUserSummary, bool]:
        """
        Create the admin, or reset its password if it already exists.

        Returns:
            Tuple of (user summary, True if the account was created)
        """
        exists = db.scalar(select(AdminUser.id).where(AdminUser.username == username)) is not None
        if exists:
            return AuthService.set_password(db, username, password, rounds), False
        return AuthService.create_admin(db, username, password, rounds), True
