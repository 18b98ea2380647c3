"""
Client for the hex-string-to-build Lambda.

The geometry service turns the hex string read from the chain into the
renderable hex shapes document. It is invoked synchronously with the same
API Gateway style envelope it receives from the web front end.
"""

import json
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from build_usher.config import UsherConfig, get_config
from build_usher.data.shared_exceptions import GeometryServiceError

logger = logging.getLogger(__name__)


def build_geometry_request(hex_string: str) -> Dict[str, Any]:
    """Return the invocation payload for ``hex_string``."""
    return {
        "body-json": {},
        "params": {
            "path": {},
            "querystring": {"hexString": hex_string},
        },
    }


class GeometryClient:
    """Invokes the geometry Lambda and returns its parsed response."""

    def __init__(
        self,
        function_name: Optional[str] = None,
        config: Optional[UsherConfig] = None,
        lambda_client: Optional[Any] = None,
    ):
        """
        Initialize the geometry client.

        Args:
            function_name: Name or ARN of the geometry Lambda (defaults to
                config)
            config: Configuration settings
            lambda_client: Optional pre-configured Lambda client
        """
        self._config = config or get_config()
        self._function_name = (
            function_name or self._config.geometry_function_name
        )

        if lambda_client is not None:
            self._client = lambda_client
        else:
            self._client = boto3.client(
                "lambda",
                region_name=self._config.aws_region,
                config=Config(
                    read_timeout=self._config.invoke_read_timeout,
                    retries={
                        "total_max_attempts": (
                            self._config.invoke_max_retries + 1
                        ),
                        "mode": "standard",
                    },
                ),
            )

    @property
    def function_name(self) -> str:
        return self._function_name

    def generate(self, hex_string: str) -> Dict[str, Any]:
        """Ask the geometry Lambda for the hex shapes of ``hex_string``.

        Returns:
            dict: The geometry document.

        Raises:
            ClientError, BotoCoreError: Transport failures, unchanged.
            GeometryServiceError: If the function raised or returned
                something other than a JSON object.
        """
        try:
            response = self._client.invoke(
                FunctionName=self._function_name,
                InvocationType="RequestResponse",
                Payload=json.dumps(build_geometry_request(hex_string)),
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Invoking %s failed: %s", self._function_name, e)
            raise

        raw_payload = response["Payload"].read()

        if response.get("FunctionError"):
            raise GeometryServiceError(
                f"{self._function_name} failed: "
                f"{_error_message(raw_payload)}"
            )

        try:
            document = json.loads(raw_payload)
        except (TypeError, ValueError) as exc:
            raise GeometryServiceError(
                f"{self._function_name} returned a payload that is not JSON"
            ) from exc
        if not isinstance(document, dict):
            raise GeometryServiceError(
                f"{self._function_name} returned "
                f"{type(document).__name__}, expected a JSON object"
            )
        return document


def _error_message(raw_payload: bytes) -> str:
    try:
        payload = json.loads(raw_payload)
    except (TypeError, ValueError):
        return raw_payload.decode("utf-8", errors="replace")
    if isinstance(payload, dict) and "errorMessage" in payload:
        return str(payload["errorMessage"])
    return json.dumps(payload)
