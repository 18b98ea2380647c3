"""Custom exceptions for build_usher operations."""


class BuildUsherError(Exception):
    """Base exception for all build_usher errors."""


class EventValidationError(BuildUsherError, ValueError):
    """Raised when an incoming build event is malformed."""


class GeometryServiceError(BuildUsherError):
    """Raised when the geometry function fails or returns unusable data."""


# DynamoDB specific exceptions
class DynamoDBError(BuildUsherError):
    """Base exception for DynamoDB operations."""


class DynamoDBThroughputError(DynamoDBError):
    """Raised when DynamoDB provisioned throughput is exceeded."""


class DynamoDBServerError(DynamoDBError):
    """Raised when DynamoDB has an internal server error."""


class DynamoDBAccessError(DynamoDBError):
    """Raised when access to DynamoDB is denied."""


class DynamoDBResourceNotFoundError(DynamoDBError):
    """Raised when a DynamoDB table is not found."""


class DynamoDBValidationError(DynamoDBError):
    """Raised when DynamoDB request validation fails."""


# Entity specific exceptions
class EntityError(BuildUsherError):
    """Base exception for entity operations."""


class EntityNotFoundError(EntityError):
    """Raised when an entity is not found."""


class EntityValidationError(EntityError):
    """Raised when entity validation fails."""


# Operation specific exceptions
class OperationError(BuildUsherError):
    """Base exception for operation failures."""


class IndexUpdateConflictError(OperationError):
    """
    Raised when the build index for a version keeps changing underneath
    the updater and no conditional write succeeds within the allowed
    number of attempts.
    """
