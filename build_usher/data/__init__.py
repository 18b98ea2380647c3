from .dynamo_client import DynamoClient
from .shared_exceptions import (
    BuildUsherError,
    DynamoDBError,
    EntityNotFoundError,
    EventValidationError,
    GeometryServiceError,
    IndexUpdateConflictError,
)
