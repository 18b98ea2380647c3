import boto3
import pytest
from moto import mock_aws

from build_usher import DynamoClient
from build_usher.entities.build_indices import BuildIndices

BUILDS_TABLE = "MockedBuilds"
GLOBAL_VARS_TABLE = "MockedGlobalVars"


@pytest.fixture
def dynamodb_tables():
    """
    Spins up a mock DynamoDB instance, creates the builds table and the
    global vars table, waits until both are active, then yields their names
    for tests.

    After the tests, everything is torn down automatically.
    """
    with mock_aws():
        dynamodb = boto3.client("dynamodb", region_name="us-east-1")

        for table_name, key in (
            (BUILDS_TABLE, "tileIndexAndVersion"),
            (GLOBAL_VARS_TABLE, "name"),
        ):
            dynamodb.create_table(
                TableName=table_name,
                KeySchema=[{"AttributeName": key, "KeyType": "HASH"}],
                AttributeDefinitions=[
                    {"AttributeName": key, "AttributeType": "S"}
                ],
                BillingMode="PAY_PER_REQUEST",
            )
            dynamodb.get_waiter("table_exists").wait(TableName=table_name)

        yield BUILDS_TABLE, GLOBAL_VARS_TABLE


@pytest.fixture
def client(dynamodb_tables) -> DynamoClient:
    builds_table, global_vars_table = dynamodb_tables
    return DynamoClient(builds_table, global_vars_table)


@pytest.fixture
def seeded_client(client: DynamoClient) -> DynamoClient:
    """A client whose version 1.2 index already lists tiles 3 and 7."""
    client.put_build_indices(BuildIndices(version="1.2", indices=[3, 7]))
    return client
