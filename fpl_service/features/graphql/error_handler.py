"""GraphQL error classification, masking and logging.

Every error leaving the API carries ``extensions.code``:

- VALIDATION_ERROR: malformed query or arguments (parse/validation errors,
  resolver argument checks)
- DEPTH_LIMIT_EXCEEDED: query nested deeper than the configured limit
- DATA_SOURCE_ERROR: the store query failed or no connection was available
- MALFORMED_DATA: the store returned a row the API cannot represent
- INTERNAL_ERROR: anything else

In production, messages of non user-facing errors are replaced so driver
and server details never reach clients. Full details are always logged.

Usage:
    schema = FplSchema(query=Query, extensions=[ErrorClassificationExtension])

    # Force masking regardless of environment
    class MaskingExtension(ErrorClassificationExtension):
        mask_errors = True
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from fpl_service.core.database.exceptions import DataSourceError, MalformedRowError

if TYPE_CHECKING:
    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)

__all__ = [
    "ErrorCategory",
    "ErrorClassificationExtension",
    "classify_error",
    "format_validation_error",
    "is_user_facing_error",
    "log_error",
]


class ErrorCategory:
    """Error codes exposed in ``extensions.code``."""

    VALIDATION = "VALIDATION_ERROR"
    DEPTH_LIMIT = "DEPTH_LIMIT_EXCEEDED"
    DATA_SOURCE = "DATA_SOURCE_ERROR"
    MALFORMED_DATA = "MALFORMED_DATA"
    INTERNAL = "INTERNAL_ERROR"


USER_FACING_CODES = frozenset({ErrorCategory.VALIDATION, ErrorCategory.DEPTH_LIMIT})

# Replacement messages used when masking in production
MASKED_MESSAGES = {
    ErrorCategory.DATA_SOURCE: "The statistics store is currently unavailable.",
    ErrorCategory.MALFORMED_DATA: "The statistics store returned data in an unexpected shape.",
    ErrorCategory.INTERNAL: "An internal error occurred. Please try again later.",
}


def classify_error(error: GraphQLError) -> str:
    """Return the error code for ``error``.

    An explicit ``extensions.code`` wins. Errors without an original
    exception come from parsing or validation.
    """
    code = (error.extensions or {}).get("code")
    if code:
        return str(code)

    original = error.original_error
    if isinstance(original, DataSourceError):
        return ErrorCategory.DATA_SOURCE
    if isinstance(original, MalformedRowError):
        return ErrorCategory.MALFORMED_DATA
    if original is None:
        if "exceeds maximum operation depth" in error.message:
            return ErrorCategory.DEPTH_LIMIT
        return ErrorCategory.VALIDATION
    return ErrorCategory.INTERNAL


def is_user_facing_error(error: GraphQLError) -> bool:
    """Whether the error message is safe to show unchanged."""
    return classify_error(error) in USER_FACING_CODES


def log_error(error: GraphQLError, execution_context: ExecutionContext | None = None) -> None:
    """Log an error server-side; user-facing ones at INFO, the rest at ERROR with traceback."""
    code = classify_error(error)
    log_context: dict[str, Any] = {
        "error_code": code,
        "error_message": error.message,
        "error_path": error.path,
    }

    if execution_context is not None:
        if execution_context.operation_name:
            log_context["operation_name"] = execution_context.operation_name
        request_id = getattr(execution_context.context, "request_id", None)
        if request_id:
            log_context["request_id"] = request_id

    original = error.original_error
    if original is not None:
        log_context["exception_type"] = type(original).__name__
        details = getattr(original, "details", None)
        if details:
            log_context["exception_details"] = details

    if code in USER_FACING_CODES:
        logger.info("GraphQL user-facing error", extra=log_context)
    else:
        exc_info = (type(original), original, original.__traceback__) if original else None
        logger.error("GraphQL error", extra=log_context, exc_info=exc_info)


def format_validation_error(message: str, argument: str | None = None) -> GraphQLError:
    """Build a VALIDATION_ERROR for a resolver argument check.

    Example:
        if start > end:
            raise format_validation_error("gameweekStart must not exceed gameweekEnd", "gameweekStart")
    """
    extensions: dict[str, Any] = {"code": ErrorCategory.VALIDATION}
    if argument:
        extensions["argument"] = argument
    return GraphQLError(message, extensions=extensions)


class ErrorClassificationExtension(SchemaExtension):
    """Tag every operation error with a code and mask internals when asked to.

    Errors are updated in place after the operation finishes, so the
    response (including errors raised before execution) carries the codes.
    Register the class, not an instance: strawberry then creates one per
    operation.
    """

    #: None follows the environment (masking on in production)
    mask_errors: bool | None = None

    def _should_mask(self) -> bool:
        if self.mask_errors is None:
            from fpl_service.core.settings import get_app_settings

            return get_app_settings().is_production
        return self.mask_errors

    def _errors(self) -> list[GraphQLError]:
        errors: list[GraphQLError] = []
        result = self.execution_context.result
        if result is not None and getattr(result, "errors", None):
            errors.extend(result.errors)
        for error in getattr(self.execution_context, "pre_execution_errors", None) or ():
            if error not in errors:
                errors.append(error)
        return errors

    def on_operation(self) -> Iterator[None]:
        yield

        mask = self._should_mask()
        for error in self._errors():
            code = classify_error(error)
            error.extensions = {**(error.extensions or {}), "code": code}
            if mask and code in MASKED_MESSAGES:
                error.message = MASKED_MESSAGES[code]
