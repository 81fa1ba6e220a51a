"""
tradebook/services/profile.py

Profile read and update for the signed-in user.
"""

import logging

from sqlalchemy.orm import Session

from tradebook.errors import NoFieldsProvided, NotFoundOrUnauthorized
from tradebook.models.investment_profile import InvestmentProfile
from tradebook.models.user import User
from tradebook.schemas.profile import ProfileUpdate
from tradebook.services import user as user_store

logger = logging.getLogger(__name__)


def get_profile(user_id: str, db: Session) -> User:
    user = user_store.get_user_by_id(user_id, db)
    if user is None:
        raise NotFoundOrUnauthorized("User not found.")
    return user


def update_profile(user_id: str, profile_data: ProfileUpdate, db: Session) -> User:
    """
    Update name/username if sent, and replace the investment profile if sent.
    """
    fields = profile_data.model_dump(exclude_unset=True)
    if not fields:
        raise NoFieldsProvided()

    user = get_profile(user_id, db)

    questionnaire = fields.pop("investment_profile", None)
    if questionnaire is not None:
        profile = user.investment_profile
        if profile is None:
            profile = InvestmentProfile(user_id=user.id)
            db.add(profile)
        for column in InvestmentProfile.__table__.columns.keys():
            if column in ("id", "user_id"):
                continue
            setattr(profile, column, questionnaire.get(column))

    user = user_store.update_user(user, fields, db)
    logger.info("Profile updated: user_id=%s", user_id)
    return user


def delete_profile(user_id: str, db: Session) -> None:
    """Delete the caller's user row and everything it owns."""
    if not user_store.delete_user(user_id, db):
        raise NotFoundOrUnauthorized("User not found.")
    logger.info("User deleted: user_id=%s", user_id)
