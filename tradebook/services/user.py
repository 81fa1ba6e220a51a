"""
tradebook/services/user.py

Credential store: the only module that reads or writes users.password_hash.

Lookups return None when no row matches so callers can tell "no such user"
apart from a database failure (which propagates as SQLAlchemyError).
Unique-constraint violations are translated to ConflictError; the raw
IntegrityError text never reaches a client.
"""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tradebook.errors import ConflictError
from tradebook.models.user import User

logger = logging.getLogger(__name__)


def get_user_by_id(user_id: str, db: Session) -> User | None:
    """
    Return a User by primary key, or None if not found.
    """
    return db.get(User, user_id)


def get_user_by_email(email: str, db: Session) -> User | None:
    """
    Return a User by email, or None if not found.
    """
    return db.query(User).filter(User.email == email).first()


def get_user_by_username(username: str, db: Session) -> User | None:
    return db.query(User).filter(User.username == username).first()


def create_user(email: str, name: str, username: str, password_hash: str, db: Session) -> User:
    """
    Insert a new User with an already-hashed password.

    The pre-check gives a clean error in the common case; the IntegrityError
    handler covers two sign-ups racing for the same email or username.
    """
    taken = (
        db.query(User.id)
        .filter(or_(User.email == email, User.username == username))
        .first()
    )
    if taken:
        raise ConflictError()

    new_user = User(
        email=email,
        name=name,
        username=username,
        password_hash=password_hash,
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Sign-up rejected by unique constraint")
        raise ConflictError()
    db.refresh(new_user)
    return new_user


def update_password_hash(user: User, password_hash: str, db: Session) -> None:
    user.password_hash = password_hash
    db.commit()


def update_user(user: User, fields: dict, db: Session) -> User:
    """
    Apply name/username changes. A username already held by someone else
    raises ConflictError and leaves the row untouched.
    """
    new_username = fields.get("username")
    if new_username is not None and new_username != user.username:
        if get_user_by_username(new_username, db):
            raise ConflictError("Username already taken.")

    for key in ("name", "username"):
        if key in fields:
            setattr(user, key, fields[key])

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Username already taken.")
    db.refresh(user)
    return user


def delete_user(user_id: str, db: Session) -> bool:
    """
    Delete a User by ID. Accounts, trades and the investment profile go
    with it through ON DELETE CASCADE.
    """
    db_user = db.get(User, user_id)
    if db_user:
        db.delete(db_user)
        db.commit()
        return True
    return False
