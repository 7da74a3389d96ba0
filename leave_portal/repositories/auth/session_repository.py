"""
Session Repository

Sign-in session rows: creation on sign-in, lookup by token id, deletion
of a user's rows on sign-out.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leave_portal.core.exceptions import RepositoryError
from leave_portal.models.auth.user_session import UserSession
from leave_portal.repositories.base.base_repository import BaseRepository


class SessionRepository(BaseRepository[UserSession]):
    """Sign-in session repository."""

    def __init__(self, db: Session):
        super().__init__(UserSession, db)

    def create_session(self, user_id: str) -> UserSession:
        return self.create(UserSession(user_id=user_id))

    def delete_for_user(self, user_id: str) -> int:
        """Delete every session of a user. Returns the number removed."""
        try:
            removed = (
                self.db.query(UserSession)
                .filter(UserSession.user_id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
            return removed
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Session deletion failed: {str(e)}") from e
