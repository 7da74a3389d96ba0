"""
Base service class providing common functionality for all services.
"""

from typing import Any, Dict, Generic, Optional, TypeVar

from sqlalchemy.orm import Session

from leave_portal.config.logging import get_logger
from leave_portal.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BaseAppException,
    InvalidDateRangeError,
    RepositoryError,
    ResourceNotFoundError,
    ValidationError,
)
from leave_portal.repositories.base.base_repository import BaseRepository
from leave_portal.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

TRepo = TypeVar("TRepo", bound=BaseRepository)


class BaseService(Generic[TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Consistent error handling via ServiceResult
    """

    def __init__(self, repository: TRepo, db_session: Session):
        """
        Initialize base service.

        Args:
            repository: Repository instance for data access
            db_session: SQLAlchemy database session
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(f"leave_portal.services.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Convert exception to a ServiceResult failure with logging.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            entity_ref: Reference to the entity involved (ID, name, etc.)
            severity: Error severity level
            additional_context: Extra context for logging/debugging
        """
        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }

        if additional_context:
            context.update(additional_context)

        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra=context,
        )

        error_code = self._map_exception_to_error_code(exception)
        message = f"Failed to {operation}"
        if isinstance(exception, BaseAppException) and error_code != ErrorCode.INTERNAL_ERROR:
            message = exception.message

        return ServiceResult.failure(
            ServiceError(
                code=error_code,
                message=message,
                details={
                    "error": str(exception),
                    "entity_ref": str(entity_ref) if entity_ref is not None else None,
                },
                severity=severity,
            )
        )

    def _map_exception_to_error_code(self, exception: Exception) -> ErrorCode:
        """Map exception types to appropriate error codes."""
        exception_mapping = {
            ResourceNotFoundError: ErrorCode.NOT_FOUND,
            ValidationError: ErrorCode.VALIDATION_ERROR,
            InvalidDateRangeError: ErrorCode.INVALID_DATE_RANGE,
            AuthenticationError: ErrorCode.AUTHENTICATION_FAILED,
            AuthorizationError: ErrorCode.INSUFFICIENT_PERMISSIONS,
            RepositoryError: ErrorCode.INTERNAL_ERROR,
            ValueError: ErrorCode.VALIDATION_ERROR,
        }

        for exc_type, error_code in exception_mapping.items():
            if isinstance(exception, exc_type):
                return error_code

        return ErrorCode.INTERNAL_ERROR
