"""
Base classes for DynamoDB operations.

Provides the error translation shared by every data access mixin in the
build_usher package: boto3 ``ClientError`` codes become the exceptions of
``build_usher.data.shared_exceptions``, chained to the original error.
"""

from functools import wraps
from typing import Optional

from botocore.exceptions import ClientError

from build_usher.data._base import DynamoClientProtocol
from build_usher.data.shared_exceptions import (
    DynamoDBAccessError,
    DynamoDBError,
    DynamoDBResourceNotFoundError,
    DynamoDBServerError,
    DynamoDBThroughputError,
    DynamoDBValidationError,
)

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def error_code(error: ClientError) -> str:
    """Return the DynamoDB error code carried by ``error``."""
    return error.response.get("Error", {}).get("Code", "")


def handle_dynamodb_errors(operation_name: str):
    """
    Decorator to handle DynamoDB errors consistently across all operations.

    Args:
        operation_name: Name of the operation for error context
    """

    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except ClientError as e:
                self._handle_client_error(
                    e,
                    operation_name,
                    context={"args": args, "kwargs": kwargs},
                )
                raise

        return wrapper

    return decorator


class DynamoDBBaseOperations(DynamoClientProtocol):
    """
    Base class for all DynamoDB operations with common functionality.
    """

    def _handle_client_error(
        self,
        error: ClientError,
        operation: str,
        context: Optional[dict] = None,
    ) -> None:
        """
        Centralized error handling for all DynamoDB operations.

        Args:
            error: The ClientError from boto3
            operation: Name of the operation that failed
            context: Additional context for error reporting

        Raises:
            Appropriate exception based on error code
        """
        error_handlers = {
            "ResourceNotFoundException": self._handle_resource_not_found,
            "ProvisionedThroughputExceededException": (
                self._handle_throughput_exceeded
            ),
            "InternalServerError": self._handle_internal_server_error,
            "ValidationException": self._handle_validation_exception,
            "AccessDeniedException": self._handle_access_denied,
        }

        handler = error_handlers.get(
            error_code(error), self._handle_unknown_error
        )
        handler(error, operation, context)

    def _handle_resource_not_found(
        self, error: ClientError, operation: str, context: Optional[dict]
    ):
        """Handle resource not found errors - usually table doesn't exist"""
        raise DynamoDBResourceNotFoundError(
            f"Table not found for operation {operation}"
        ) from error

    def _handle_throughput_exceeded(
        self, error: ClientError, operation: str, context: Optional[dict]
    ):
        raise DynamoDBThroughputError(
            f"Provisioned throughput exceeded for operation {operation}"
        ) from error

    def _handle_internal_server_error(
        self, error: ClientError, operation: str, context: Optional[dict]
    ):
        raise DynamoDBServerError(
            f"Internal server error for operation {operation}"
        ) from error

    def _handle_validation_exception(
        self, error: ClientError, operation: str, context: Optional[dict]
    ):
        message = error.response.get("Error", {}).get("Message", str(error))
        raise DynamoDBValidationError(
            f"Validation error in {operation}: {message}"
        ) from error

    def _handle_access_denied(
        self, error: ClientError, operation: str, context: Optional[dict]
    ):
        raise DynamoDBAccessError(f"Access denied for {operation}") from error

    def _handle_unknown_error(
        self, error: ClientError, operation: str, context: Optional[dict]
    ):
        """Handle any other unknown errors"""
        raise DynamoDBError(
            f"Could not complete {operation}: {error}"
        ) from error
