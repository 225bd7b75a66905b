"""
Lambda invocation for PLAYTOOLS.

``RemoteInvoker`` resolves the profile and function name for an environment,
makes sure the SSO session is valid, invokes the rewards calculator once and
collects everything worth showing into an ``InvocationResult``. Failures are
reported through the result, never raised.
"""

import base64
import binascii
import json
import logging
from typing import Any, Callable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from playtools.aws_utils import ensure_session
from playtools.config import PlaytoolsConfig
from playtools.errors import InvocationError, SessionError
from playtools.models import Environment, InvocationPayload, InvocationResult

logger = logging.getLogger(__name__)

SessionGuard = Callable[[str, str], list[str]]


def decode_log_result(encoded: str) -> str:
    """Decode the base64 log tail returned with ``LogType="Tail"``."""
    try:
        return base64.b64decode(encoded, validate=True).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"failed to decode base64: {e}") from e


def format_response(raw: bytes) -> str:
    """Pretty-print a JSON object response, falling back to the raw text."""
    text = raw.decode("utf-8", errors="replace")
    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = None
    if isinstance(parsed, dict):
        return f"Response: {json.dumps(parsed, indent=2)}"
    return f"Raw response: {text}"


class RemoteInvoker:
    """Invokes the sweepstake rewards calculator for a given environment."""

    def __init__(
        self,
        config: PlaytoolsConfig,
        session_guard: SessionGuard = ensure_session,
        session_factory: Callable[..., Any] = boto3.Session,
    ):
        self.config = config
        self._session_guard = session_guard
        self._session_factory = session_factory

    def _lambda_client(self, profile: str):
        kwargs = {"profile_name": profile}
        if self.config.region:
            kwargs["region_name"] = self.config.region
        session = self._session_factory(**kwargs)
        return session.client("lambda")

    def _call(self, profile: str, function_name: str, payload: InvocationPayload) -> tuple[dict, bytes]:
        try:
            client = self._lambda_client(profile)
            response = client.invoke(
                FunctionName=function_name,
                InvocationType="RequestResponse",
                LogType="Tail",
                Payload=payload.to_json().encode("utf-8"),
            )
            # the body streams from the connection, so reading it can still fail
            body = _read_payload(response.get("Payload"))
        except (BotoCoreError, ClientError) as e:
            raise InvocationError(f"failed to invoke Lambda: {e}") from e
        return response, body

    def invoke(self, environment: Environment, payload: InvocationPayload) -> InvocationResult:
        environment = Environment(environment)
        profile = self.config.profile_for(environment)
        function_name = self.config.function_name_for(environment)
        result = InvocationResult()

        result.output_lines.append(f"Environment: {environment.value}")
        result.output_lines.append(f"Payload: {payload.to_json(indent=2)}")
        logger.info("Invoking %s with profile %s: %s", function_name, profile, payload.to_json())

        try:
            result.output_lines.extend(self._session_guard(profile, self.config.aws_cli))
        except SessionError as e:
            logger.error("Session check failed for profile %s: %s", profile, e)
            result.error = str(e)
            return result

        try:
            response, body = self._call(profile, function_name, payload)
        except InvocationError as e:
            logger.error("%s", e)
            result.error = str(e)
            return result

        result.output_lines.append("Lambda invocation successful!")
        result.output_lines.append(format_response(body))

        function_error: Optional[str] = response.get("FunctionError")
        if function_error:
            logger.warning("Function %s reported error: %s", function_name, function_error)
            result.output_lines.append(f"Function error: {function_error}")

        log_result: Optional[str] = response.get("LogResult")
        if log_result:
            try:
                result.logs = decode_log_result(log_result)
            except ValueError as e:
                logger.warning("Could not decode log tail: %s", e)
                result.output_lines.append(f"Error decoding logs: {e}")

        return result


def _read_payload(body: Any) -> bytes:
    # boto3 returns a StreamingBody; stubs and tests may hand over bytes
    if body is None:
        return b""
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    return body.read()
