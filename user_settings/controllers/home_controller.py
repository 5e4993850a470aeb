import logging
from sqlalchemy.exc import SQLAlchemyError
from user_settings.extensions import db
from user_settings.utils.http import ok

logger = logging.getLogger(__name__)

def home_index():
    return ok({
        "message": "User settings service is running",
    })

def health_check():
    db_status = "healthy"
    try:
        # Ping the database
        db.session.execute(db.text('SELECT 1'))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        db_status = f"unhealthy: {str(e)}"

    return ok({
        "status": "online",
        "database": db_status,
    })
