import logging
from functools import wraps
from typing import Callable, Dict, Optional, ParamSpec, Type, TypeVar

from fastapi import HTTPException

from .exceptions.base import AppError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

ErrorMapping = Dict[Type[Exception], tuple[int, str]]

DEFAULT_ERROR_MAPPING: ErrorMapping = {
    AppError: (500, "Internal application error"),
    ValueError: (400, "Invalid input"),
    KeyError: (404, "Resource not found"),
    Exception: (500, "Internal server error"),
}


def _most_specific(error: Exception, mapping: ErrorMapping) -> Optional[tuple[int, str]]:
    matches = [exc_type for exc_type in mapping if isinstance(error, exc_type)]
    if not matches:
        return None
    # The deepest class in the MRO wins, so CardNotFoundError beats AppError
    best = max(matches, key=lambda exc_type: len(exc_type.__mro__))
    return mapping[best]


def handle_exceptions(
    error_mapping: Optional[ErrorMapping] = None,
    log_level: int = logging.ERROR,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Exception handler with error mapping and logging

    Args:
        error_mapping: Custom mapping of exceptions to (status_code, message)
        log_level: Logging level for errors

    Usage:
        @handle_exceptions({
            CardNotFoundError: (404, "Card not found"),
        })
        async def my_route():
            ...
    """
    combined_mapping = {**DEFAULT_ERROR_MAPPING, **(error_mapping or {})}

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                resolved = _most_specific(e, combined_mapping)
                if resolved is None:
                    logger.exception("Unhandled exception in %s", func.__name__)
                    raise HTTPException(status_code=500, detail={"message": "Internal server error"})

                status_code, message = resolved
                # Prepare log data without reserved fields
                log_data = {
                    "function_name": func.__name__,
                    "function_module": func.__module__,
                    "exception_type": type(e).__name__,
                }

                if isinstance(e, AppError):
                    log_data.update({"error_code": e.error_code, "details": e.details})
                    error_response = {"message": message, "error_code": e.error_code, "details": e.details}
                else:
                    error_response = {"message": message}

                logger.log(log_level, str(e), extra=log_data)
                raise HTTPException(status_code=status_code, detail=error_response)

        return wrapper

    return decorator
