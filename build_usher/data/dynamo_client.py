from typing import TYPE_CHECKING, Any, Optional

import boto3

from build_usher.data._build_indices import _BuildIndices
from build_usher.data._build_record import _BuildRecord

if TYPE_CHECKING:
    from mypy_boto3_dynamodb import DynamoDBClient


class DynamoClient(
    _BuildRecord,
    _BuildIndices,
):
    """A class used to represent a DynamoDB client."""

    def __init__(
        self,
        builds_table_name: str,
        global_vars_table_name: str,
        region: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        """Initializes a DynamoClient instance.

        Args:
            builds_table_name (str): Table holding the compressed builds.
            global_vars_table_name (str): Table holding the build indices.
            region (str, optional): The AWS region where the tables are
                located. Defaults to "us-east-1".
            endpoint_url (str, optional): Endpoint override for local testing.
            client (optional): Pre-configured boto3 DynamoDB client.

        Attributes:
            _client (DynamoDBClient): The Boto3 DynamoDB client.
            builds_table_name (str): The name of the builds table.
            global_vars_table_name (str): The name of the global vars table.
        """
        super().__init__()

        if client is not None:
            self._client: DynamoDBClient = client
        else:
            client_kwargs: dict[str, Any] = {"region_name": region}
            if endpoint_url:
                client_kwargs["endpoint_url"] = endpoint_url
            self._client = boto3.client("dynamodb", **client_kwargs)
        self.builds_table_name = builds_table_name
        self.global_vars_table_name = global_vars_table_name
        # Ensure the tables already exist
        for table_name in (builds_table_name, global_vars_table_name):
            try:
                self._client.describe_table(TableName=table_name)
            except self._client.exceptions.ResourceNotFoundException as e:
                raise ValueError(
                    f"The table '{table_name}' does not exist in region "
                    f"'{region}'."
                ) from e
