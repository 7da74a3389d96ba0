"""
User Repository

Account lookups and the employee roster used for availability.
"""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leave_portal.core.exceptions import RepositoryError
from leave_portal.models.user.user import User
from leave_portal.repositories.base.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """User account repository."""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def find_by_email(self, email: str) -> Optional[User]:
        """Exact, case-sensitive email match."""
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by email failed: {str(e)}") from e

    def find_roster_names(self) -> List[str]:
        """Display names of every non-admin account, alphabetically."""
        try:
            rows = (
                self.db.query(User.full_name)
                .filter(User.is_admin.is_(False))
                .order_by(User.full_name.asc(), User.id.asc())
                .all()
            )
            return [row.full_name for row in rows]
        except SQLAlchemyError as e:
            raise RepositoryError(f"Roster lookup failed: {str(e)}") from e

    def create_user(
        self,
        full_name: str,
        email: str,
        password_hash: str,
        is_admin: bool = False,
    ) -> User:
        """Provision an account with an already-hashed password."""
        user = User(
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            is_admin=is_admin,
        )
        return self.create(user)
