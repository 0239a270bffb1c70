"""Tests for the export trigger and the HTTP client wrapper."""

from unittest.mock import patch

import pytest
import requests

from crowdin_export.core.exceptions import (
    ConnectionFailedError,
    DownloadFailedError,
    ExportConnectionError,
    ExportError,
    InvalidCredentialsError,
)
from crowdin_export.core.models import ExportRequest
from crowdin_export.download.export import trigger_export
from crowdin_export.download.http import (
    USER_AGENT,
    CrowdinClient,
    get_request_timeout,
    redact_url,
)


@pytest.fixture
def request_():
    return ExportRequest(project_id="forge", api_key="secret")


# =============================================================================
# CrowdinClient
# =============================================================================


class TestCrowdinClient:
    def test_sets_user_agent(self, make_session):
        session = make_session({})
        CrowdinClient(session=session)
        assert session.headers["User-Agent"] == USER_AGENT

    def test_get_follows_redirects_with_timeout(self, make_session, make_response):
        session = make_session({"/export": make_response(200)})
        client = CrowdinClient(session=session, timeout=(1, 2))

        client.get("https://api.crowdin.com/api/project/forge/export?key=secret", stream=True)

        _, kwargs = session.get.call_args
        assert kwargs["allow_redirects"] is True
        assert kwargs["timeout"] == (1, 2)
        assert kwargs["stream"] is True

    def test_default_timeout_has_no_read_limit(self, make_session, make_response):
        session = make_session({"/export": make_response(200)})
        with patch("crowdin_export.config.env.REQUEST_CONNECT_TIMEOUT", 10.0), \
             patch("crowdin_export.config.env.REQUEST_READ_TIMEOUT", None):
            assert get_request_timeout() == (10.0, None)
            client = CrowdinClient(session=session)

        client.get("https://api.crowdin.com/api/project/forge/export?key=secret")

        assert session.get.call_args[1]["timeout"] == (10.0, None)

    def test_does_not_close_injected_session(self, make_session):
        session = make_session({})
        with CrowdinClient(session=session):
            pass
        session.close.assert_not_called()

    def test_redact_url_masks_key(self):
        url = "https://api.crowdin.com/api/project/forge/export?key=secret"
        assert redact_url(url) == "https://api.crowdin.com/api/project/forge/export?key=***"


# =============================================================================
# trigger_export
# =============================================================================


class TestTriggerExport:
    def test_requests_export_url(self, request_, make_session, make_response):
        session = make_session({"/export": make_response(200)})

        trigger_export(request_, CrowdinClient(session=session))

        url = session.get.call_args[0][0]
        assert url == "https://api.crowdin.com/api/project/forge/export?key=secret"

    def test_401_raises_invalid_credentials(self, request_, make_session, make_response):
        session = make_session({"/export": make_response(401)})

        with pytest.raises(InvalidCredentialsError) as exc_info:
            trigger_export(request_, CrowdinClient(session=session))

        assert isinstance(exc_info.value, ExportError)
        assert exc_info.value.operation == "export"

    @pytest.mark.parametrize("status", [200, 204, 302, 403, 404, 500, 503])
    def test_other_statuses_are_accepted(self, status, request_, make_session, make_response):
        session = make_session({"/export": make_response(status)})
        trigger_export(request_, CrowdinClient(session=session))

    def test_body_is_not_read(self, request_, make_session, make_response):
        response = make_response(200, body=b"<success/>")
        session = make_session({"/export": response})

        trigger_export(request_, CrowdinClient(session=session))

        response.iter_content.assert_not_called()
        response.__exit__.assert_called_once()

    def test_connection_error_raises_connection_failed(self, request_, make_session):
        cause = requests.exceptions.ConnectionError("Name or service not known")
        session = make_session({"/export": cause})

        with pytest.raises(ExportConnectionError) as exc_info:
            trigger_export(request_, CrowdinClient(session=session))

        assert isinstance(exc_info.value, ExportError)
        assert isinstance(exc_info.value, ConnectionFailedError)
        assert not isinstance(exc_info.value, DownloadFailedError)
        assert exc_info.value.operation == "export"
        assert exc_info.value.__cause__ is cause
        assert "secret" not in str(exc_info.value)

    def test_timeout_raises_connection_failed(self, request_, make_session):
        session = make_session({"/export": requests.exceptions.ConnectTimeout("timed out")})

        with pytest.raises(ConnectionFailedError):
            trigger_export(request_, CrowdinClient(session=session))
