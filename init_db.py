"""Initialize database tables for the social graph backend"""
import os
import sys

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from social_backend import app, db, logger


def init_database():
    """Create any missing tables, preserving existing data"""
    with app.app_context():
        # Import all models to ensure they're registered with SQLAlchemy
        from models.user import User
        from models.follow import Follow

        db.create_all()
        logger.info(f"Tables ready: {', '.join(sorted(db.metadata.tables))}")


if __name__ == '__main__':
    init_database()
