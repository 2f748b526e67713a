"""
Decorators for router endpoints.

This module provides the shared error-handling decorator used by every router.
"""

from functools import wraps
from http import HTTPStatus

from fastapi import HTTPException

from fieldcrm.exceptions import FieldCRMError
from fieldcrm.utils.logger import logger


def _find_session(kwargs: dict):
    for name in ("repository", "service"):
        holder = kwargs.get(name)
        if holder is not None and hasattr(holder, "session"):
            return holder.session
    return None


def _actor_id(kwargs: dict) -> str | None:
    identity = kwargs.get("identity")
    if identity is not None:
        return identity.user.id
    current_user = kwargs.get("current_user")
    return current_user.id if current_user else None


def handle_db_errors(operation: str):
    """
    Decorator to handle errors consistently across endpoints.

    Domain errors become HTTP errors with their own status code. Anything else
    rolls back the transaction, is logged, and becomes a 500.

    Args:
        operation: Description of the operation for error messages (e.g., "create job")

    Returns:
        Decorator function
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except FieldCRMError as e:
                session = _find_session(kwargs)
                if session is not None:
                    await session.rollback()

                logger.info(
                    "Operation rejected",
                    operation=operation,
                    user_id=_actor_id(kwargs),
                    reason=e.message,
                )
                raise HTTPException(status_code=e.status_code, detail=e.message)
            except Exception as e:
                session = _find_session(kwargs)
                if session is not None:
                    await session.rollback()

                logger.exception(
                    "Operation failed",
                    operation=operation,
                    user_id=_actor_id(kwargs),
                    error=str(e),
                )

                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail=f"Failed to {operation}: {str(e)}",
                )

        return wrapper

    return decorator
