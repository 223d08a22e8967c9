import asyncio
import logging
import os
import subprocess
import sys
from pathlib import Path

import httpx
import pytest

from elyby import ApiError, ErrorKind, Failure, Success, configure_logging, log_api_error
from elyby.config.loader import ConfigLoader
from elyby.headers import USER_AGENT
from elyby.logging_utils import ElybyStreamHandler, redact
from elyby.models import Profile
from elyby.transport import build_timeout, parse_response, send_request

URL = "https://authserver.ely.by/auth/validate"


class TestSendRequest:
    """Tests for the shared request helper."""

    @pytest.mark.asyncio
    async def test_default_headers(self, stub, http_client):
        stub.add("POST", URL, status=200)

        result = await send_request("POST", URL, json_body={"accessToken": "t"}, http_client=http_client)

        assert result.ok
        assert stub.last_request.headers["user-agent"] == USER_AGENT
        assert stub.last_request.headers["accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_timeout_is_distinguishable(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            result = await send_request("POST", URL, json_body={}, http_client=client)

        assert result.kind is ErrorKind.TIMEOUT

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            result = await send_request("POST", URL, json_body={}, http_client=client)

        assert result.kind is ErrorKind.TRANSPORT

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        async def handler(request):
            await asyncio.sleep(10)
            return httpx.Response(200)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            task = asyncio.ensure_future(send_request("POST", URL, json_body={}, http_client=client))
            await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

    @pytest.mark.asyncio
    async def test_non_json_error_body_is_truncated(self, stub, http_client):
        stub.add("POST", URL, status=502, content=b"x" * 1000)

        result = await send_request("POST", URL, json_body={}, http_client=http_client)

        assert result.kind is ErrorKind.HTTP
        assert len(result.error.upstream_message) == 200

    @pytest.mark.asyncio
    async def test_own_client_uses_configured_timeout_and_is_closed(self, stub, monkeypatch):
        monkeypatch.setenv("ELYBY_REQUEST_TIMEOUT", "12.5")
        monkeypatch.setenv("ELYBY_CONNECT_TIMEOUT", "2")
        stub.add("POST", URL, status=200)
        created = []
        real_async_client = httpx.AsyncClient

        def make_client(**kwargs):
            client = real_async_client(transport=httpx.MockTransport(stub.handle), **kwargs)
            created.append((kwargs, client))
            return client

        monkeypatch.setattr(httpx, "AsyncClient", make_client)

        result = await send_request("POST", URL, json_body={})

        assert result.ok
        assert len(created) == 1
        kwargs, client = created[0]
        assert kwargs["timeout"] == httpx.Timeout(12.5, connect=2.0)
        assert kwargs["timeout"] == build_timeout()
        assert client.is_closed

    @pytest.mark.asyncio
    async def test_non_json_success_body_is_decode_failure(self, stub, http_client):
        url = "https://authserver.ely.by/session/profile/abc"
        stub.add("GET", url, status=200, content=b"<html>maintenance</html>")

        result = parse_response(await send_request("GET", url, http_client=http_client), Profile)

        assert result.kind is ErrorKind.DECODE
        assert result.error.status_code == 200


class TestResult:
    """Tests for the tagged result types."""

    def test_success(self):
        result = Success(False)
        assert result
        assert result.ok
        assert result.error is None
        assert result.value_or(None) is False

    def test_failure(self):
        result = Failure(ApiError(ErrorKind.HTTP, "boom", status_code=500))
        assert not result
        assert result.value is None
        assert result.value_or("fallback") == "fallback"
        assert result.kind is ErrorKind.HTTP

    def test_error_message_with_upstream_text(self):
        error = ApiError(ErrorKind.HTTP, "POST /auth failed with status 400", upstream_message="Bad")
        assert str(error) == "POST /auth failed with status 400. Bad"


class TestLogging:
    """Tests for the default error sink and redaction."""

    def test_log_api_error_uses_severity(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="elyby.errors"):
            log_api_error(ApiError(ErrorKind.NOT_FOUND, "nothing here", severity=logging.INFO))
            log_api_error(ApiError(ErrorKind.HTTP, "broken"))

        levels = [record.levelno for record in caplog.records if record.name == "elyby.errors"]
        assert levels == [logging.INFO, logging.ERROR]

    def test_redact_masks_secrets(self):
        body = {"username": "erick", "password": "secret", "clientToken": "abc", "requestUser": True}
        assert redact(body) == {
            "username": "erick",
            "password": "[REDACTED]",
            "clientToken": "[REDACTED]",
            "requestUser": True,
        }

    def test_redact_leaves_lists_alone(self):
        assert redact(["a", "b"]) == ["a", "b"]

    def test_configure_logging_adds_one_handler(self):
        package_logger = configure_logging("debug")
        configure_logging("debug")
        try:
            handlers = [h for h in package_logger.handlers if isinstance(h, ElybyStreamHandler)]
            assert len(handlers) == 1
            assert package_logger.level == logging.DEBUG
        finally:
            for handler in handlers:
                package_logger.removeHandler(handler)
            package_logger.setLevel(logging.NOTSET)


class TestConfigLoader:
    """Tests for environment and .env driven settings."""

    def test_env_overrides_default(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ELYBY_REQUEST_TIMEOUT", "5.5")
        loader = ConfigLoader(env_path=str(tmp_path / "missing.env"))
        assert loader.get("REQUEST_TIMEOUT", 30.0) == 5.5

    def test_invalid_value_falls_back(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ELYBY_CONNECT_TIMEOUT", "soon")
        loader = ConfigLoader(env_path=str(tmp_path / "missing.env"))
        assert loader.get("CONNECT_TIMEOUT", 10.0) == 10.0

    def test_dotenv_file_is_read_without_touching_environment(self, monkeypatch, tmp_path):
        monkeypatch.delenv("ELYBY_LOG_LEVEL", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("ELYBY_LOG_LEVEL=debug\nDATABASE_URL=postgres://app-secret\n")
        environment_before = dict(os.environ)

        loader = ConfigLoader(env_path=str(env_file))

        assert loader.get("LOG_LEVEL", "warning") == "debug"
        assert dict(os.environ) == environment_before

    def test_environment_wins_over_dotenv_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ELYBY_REQUEST_TIMEOUT", "7")
        env_file = tmp_path / ".env"
        env_file.write_text("ELYBY_REQUEST_TIMEOUT=90\n")
        loader = ConfigLoader(env_path=str(env_file))
        assert loader.get("REQUEST_TIMEOUT", 30.0) == 7.0

    def test_import_leaves_environment_unchanged(self, tmp_path):
        """Importing the package next to an application's .env must not export it."""
        (tmp_path / ".env").write_text("DATABASE_URL=postgres://app-secret\nELYBY_LOG_LEVEL=debug\n")
        project_root = Path(__file__).resolve().parent.parent
        environment = {
            key: value for key, value in os.environ.items()
            if key not in ("DATABASE_URL", "ELYBY_LOG_LEVEL")
        }
        environment["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(project_root), environment.get("PYTHONPATH")])
        )
        script = (
            "import os, elyby\n"
            "from elyby.transport import build_timeout\n"
            "build_timeout()\n"
            "print(os.environ.get('DATABASE_URL'), os.environ.get('ELYBY_LOG_LEVEL'))\n"
        )

        completed = subprocess.run(
            [sys.executable, "-c", script],
            cwd=tmp_path,
            env=environment,
            capture_output=True,
            text=True,
            check=True,
        )

        assert completed.stdout.strip() == "None None"

    def test_default_when_unset(self, monkeypatch, tmp_path):
        monkeypatch.delenv("ELYBY_LOG_LEVEL", raising=False)
        loader = ConfigLoader(env_path=str(tmp_path / "missing.env"))
        assert loader.get("LOG_LEVEL", "warning") == "warning"
