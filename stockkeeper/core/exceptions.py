"""
Error taxonomy and safe HTTP error construction.

Store and token operations raise the domain exceptions below; route handlers
catch them and convert them with ``BusinessError`` so that user-visible
messages stay short and generic while details go to the server log.
"""
from fastapi import HTTPException, status
import logging

logger = logging.getLogger(__name__)


class StockkeeperError(Exception):
    """Base class for expected, user-facing failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(StockkeeperError):
    """Missing or malformed input."""


class Conflict(StockkeeperError):
    """A uniqueness constraint was violated."""


class InvalidCredentials(StockkeeperError):
    """Unknown username or wrong password. Deliberately indistinguishable."""


class InvalidToken(StockkeeperError):
    """Bearer token failed signature, structure or expiry checks."""


class NotFound(StockkeeperError):
    """Row does not exist, or is owned by another account."""


class BusinessError:
    """HTTP errors with safe (non-leaky) messages."""

    @staticmethod
    def not_found(detail: str = "Resource not found", reason: str = "") -> HTTPException:
        """
        Generic 404 that doesn't confirm resource existence.

        Returns the same response whether the row doesn't exist or belongs to
        another account, so ids cannot be probed across accounts.
        """
        if reason:
            logger.warning(f"Not found / not owned: {reason}")

        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )

    @staticmethod
    def unauthorized(detail: str = "Authentication failed", reason: str = "") -> HTTPException:
        """
        Generic 401 for authentication failures.

        Same response for wrong password and non-existent user.
        """
        logger.warning(f"Unauthorized access attempt: {reason or detail}")
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @staticmethod
    def forbidden(detail: str = "Access denied", reason: str = "") -> HTTPException:
        """403 for a presented but invalid identity."""
        logger.warning(f"Forbidden access: {reason or detail}")
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )

    @staticmethod
    def bad_request(detail: str) -> HTTPException:
        """
        400 for input validation errors.

        OK to include specific details here since the caller caused the issue.
        """
        logger.info(f"Bad request: {detail}")
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )

    @staticmethod
    def conflict(detail: str) -> HTTPException:
        """409 for resource conflicts."""
        logger.info(f"Conflict: {detail}")
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )

    @staticmethod
    def server_error(original_error: Exception = None) -> HTTPException:
        """
        Generic 500 - logs actual error internally, hides from user.

        Never expose stack traces, SQL errors, or internal paths to users.
        """
        if original_error:
            logger.error(
                f"Internal server error: {type(original_error).__name__}: {str(original_error)}",
                exc_info=original_error,
            )
        else:
            logger.error("Internal server error occurred", exc_info=True)

        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
