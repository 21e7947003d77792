"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, validate input, and implement
business rules.

Public service methods never raise. Internally they raise the exceptions
from core/exceptions.py and hand the work to `_run`, which converts the
outcome into a Result:

    class NoteService(BaseService):
        async def get_note(self, owner_id, note_id) -> Result[Note]:
            return await self._run(
                "get_note",
                self._get_note(owner_id, note_id),
                note_id=note_id,
            )

        async def _get_note(self, owner_id, note_id) -> Note:
            owner = self._require_owner(owner_id)
            return await self.repo.get_owned(owner, note_id)
"""

from collections.abc import Coroutine
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from modules.notebook.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    ConflictError,
    DatabaseError,
    ValidationError,
)
from modules.notebook.core.logging import get_logger
from modules.notebook.core.result import Err, Ok, Result

logger = get_logger(__name__)

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Owner identity check
    - The Result boundary (`_run`, `_run_advisory`)
    - Error wrapping for database operations
    - Common validation patterns
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the service with a database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    # -------------------------------------------------------------------------
    # Result boundary
    # -------------------------------------------------------------------------

    async def _run(
        self,
        operation: str,
        coro: Coroutine[Any, Any, T],
        failure_message: str = "Request failed",
        **context: Any,
    ) -> Result[T]:
        """
        Await an operation and report its outcome as a Result.

        Application errors keep their kind and message. Anything else is
        logged with the operation name and context, then reported as an
        internal failure with failure_message.
        """
        try:
            return Ok(await coro)
        except (AuthenticationError, ValidationError) as e:
            self._log_debug(
                "Operation rejected",
                operation=operation,
                code=e.code,
                reason=e.message,
                **context,
            )
            return Err.from_exception(e)
        except ApplicationError as e:
            self._logger.warning(
                "Operation failed",
                extra={"operation": operation, "code": e.code, "error": e.message, **context},
            )
            if isinstance(e, DatabaseError):
                await self._rollback()
            return Err.from_exception(e)
        except Exception as e:
            self._logger.exception(
                "Unexpected error",
                extra={
                    "operation": operation,
                    "exception_type": type(e).__name__,
                    **context,
                },
            )
            await self._rollback()
            return Err.internal(failure_message)

    async def _run_advisory(
        self,
        operation: str,
        coro: Coroutine[Any, Any, T],
        empty: T,
        **context: Any,
    ) -> Result[T]:
        """
        Like `_run`, for best-effort features such as suggestions.

        Only a missing identity is reported as an error; every other
        failure is logged and replaced by the empty result.
        """
        try:
            return Ok(await coro)
        except AuthenticationError as e:
            return Err.from_exception(e)
        except Exception as e:
            self._logger.warning(
                "Advisory operation failed, returning empty result",
                extra={
                    "operation": operation,
                    "exception_type": type(e).__name__,
                    "error": str(e),
                    **context,
                },
            )
            await self._rollback()
            return Ok(empty)

    async def _rollback(self) -> None:
        try:
            await self._session.rollback()
        except SQLAlchemyError as e:
            self._logger.error("Rollback failed", extra={"error": str(e)})

    # -------------------------------------------------------------------------
    # Helpers used inside operations
    # -------------------------------------------------------------------------

    def _require_owner(self, owner_id: str | None) -> str:
        """
        Return the owner id or fail when there is no authenticated owner.

        Raises:
            AuthenticationError: If owner_id is missing
        """
        if not owner_id:
            raise AuthenticationError("Unauthorized")
        return owner_id

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Coroutine[Any, Any, T],
    ) -> T:
        """
        Execute a database operation with error handling.

        Wraps database operations to convert SQLAlchemy exceptions
        to application-specific exceptions.

        Raises:
            ConflictError: For unique constraint violations
            DatabaseError: For other database errors
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            error_str = str(e).lower()
            if "unique" in error_str or "duplicate" in error_str:
                raise ConflictError("Resource already exists")
            raise DatabaseError(f"Database constraint violation: {operation}")
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}")

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
    ) -> None:
        """
        Validate that required fields are present and not empty.

        Raises:
            ValidationError: If any required field is missing or empty
        """
        missing = []
        for name in field_names:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)

        if missing:
            raise ValidationError(
                f"{', '.join(missing)} required",
                details={"missing_fields": missing},
            )

    def _validate_string_length(
        self,
        value: str,
        field_name: str,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> None:
        """
        Validate string length constraints.

        Raises:
            ValidationError: If string length is out of bounds
        """
        if min_length is not None and len(value) < min_length:
            raise ValidationError(
                f"{field_name} too short",
                details={field_name: f"Minimum length is {min_length}"},
            )
        if max_length is not None and len(value) > max_length:
            raise ValidationError(
                f"{field_name} too long",
                details={field_name: f"Maximum length is {max_length}"},
            )

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """Log a service operation with context."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
