import logging
from sqlalchemy.exc import SQLAlchemyError
from user_settings.extensions import db
from user_settings.models.user import User

logger = logging.getLogger(__name__)


class UserNotFoundError(Exception):
    def __init__(self, user_id):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


def get_user_settings(user_id):
    """
    Returns the stored settings record of a user.
    None when the user has no row or never stored any settings.
    """
    user = db.session.get(User, user_id)
    if not user:
        return None
    return user.settings


def update_settings(user_id, patch):
    """
    Shallow-merges ``patch`` into the user's settings record and commits.
    Each key in the patch replaces the stored value wholesale, None included.
    """
    user = db.session.get(User, user_id)
    if not user:
        raise UserNotFoundError(user_id)

    # Assign a new dict so the JSON column registers the change
    user.settings = {**(user.settings or {}), **patch}

    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception(f"Failed to update settings for user {user_id}")
        raise

    logger.info(f"Updated settings {sorted(patch)} for user {user_id}")
