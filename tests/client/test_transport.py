"""
Tests for HttpTransport: headers, path encoding, retry policy, status
classification and success-body parsing.
"""

import builtins
import json

import httpx
import pytest

from evolution_api.client.transport import (
    HttpTransport,
    RequestDescriptor,
    build_path,
    parse_body,
    parse_errors,
)
from evolution_api.core.config.settings import EvolutionConfig
from evolution_api.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConnectionError,
    EvolutionAPIError,
    NotFoundError,
    ProtocolError,
    RateLimitError,
    ServerError,
    TimeoutError,
    UnexpectedStatusError,
    ValidationError,
)


class TestBuildPath:
    def test_space_is_percent_encoded(self):
        assert build_path("instance", "connect", "my bot") == "/instance/connect/my%20bot"

    def test_reserved_characters_are_encoded(self):
        assert build_path("chat", "deleteChat", "a/b", "x+y") == "/chat/deleteChat/a%2Fb/x%2By"

    def test_plain_segments_unchanged(self):
        assert build_path("webhook", "find", "bot1") == "/webhook/find/bot1"


class TestRequestDescriptor:
    @pytest.mark.parametrize("body", [None, {}, []])
    def test_empty_bodies_are_not_sent(self, body):
        assert not RequestDescriptor("POST", "/x", body=body).has_body

    def test_non_empty_body_is_sent(self):
        assert RequestDescriptor("POST", "/x", body={"a": 1}).has_body

    def test_is_immutable(self):
        request = RequestDescriptor("GET", "/x")
        with pytest.raises(AttributeError):
            request.path = "/y"


class TestHeaders:
    def test_json_headers_and_api_key(self, transport, server):
        transport.get("/instance/fetchInstances")

        headers = server.last.headers
        assert headers["Content-Type"] == "application/json"
        assert headers["Accept"] == "application/json"
        assert headers["apikey"] == "test-key"

    def test_api_key_omitted_when_not_configured(self, http_client, server):
        transport = HttpTransport(EvolutionConfig(), http_client=http_client)

        transport.get("/instance/fetchInstances")

        assert "apikey" not in server.last.headers

    def test_url_joins_base_url_and_path(self, transport, server):
        transport.get("/chat/findChats/bot1")

        assert str(server.last.url) == "http://localhost:8080/chat/findChats/bot1"

    def test_encoded_name_reaches_the_wire_as_percent_20(self, transport, server):
        transport.post(build_path("instance", "connect", "my bot"))

        assert server.last.url.raw_path == b"/instance/connect/my%20bot"
        assert b"+" not in server.last.url.raw_path

    def test_query_params_are_sent(self, transport, server):
        transport.get("/instance/fetchInstances", params={"instanceName": "bot1"})

        assert server.last.url.params["instanceName"] == "bot1"

    def test_body_serialized_as_json(self, transport, server):
        transport.post("/message/sendText/bot1", {"number": "5511", "text": "hi"})

        assert server.last_json() == {"number": "5511", "text": "hi"}

    def test_empty_body_not_sent(self, transport, server):
        transport.post("/instance/connect/bot1", {})

        assert server.last.content == b""


class TestSuccessBodies:
    @pytest.mark.parametrize("status", [200, 201, 204])
    def test_empty_body_returns_none(self, transport, server, status):
        server.reply(status, None)

        assert transport.get("/x") is None

    def test_json_body_is_parsed(self, transport, server):
        server.reply(200, [{"instance": "a"}, {"instance": "b"}])

        assert transport.get("/x") == [{"instance": "a"}, {"instance": "b"}]

    def test_non_json_body_returned_verbatim(self, transport, server):
        server.reply(200, "OK <not json>")

        assert transport.get("/x") == "OK <not json>"

    def test_parse_body_helper(self):
        assert parse_body("") is None
        assert parse_body('{"a": 1}') == {"a": 1}
        assert parse_body("{broken") == "{broken"


class TestStatusClassification:
    @pytest.mark.parametrize(
        "status, error_class",
        [
            (401, AuthenticationError),
            (403, AuthorizationError),
            (404, NotFoundError),
            (429, RateLimitError),
            (500, ServerError),
            (502, ServerError),
            (503, ServerError),
            (599, ServerError),
        ],
    )
    def test_error_kind_and_exact_status(self, transport, server, status, error_class):
        server.reply(status, {"error": "nope"})

        with pytest.raises(error_class) as exc_info:
            transport.get("/instance/fetchInstances")

        assert exc_info.value.status_code == status
        assert exc_info.value.response.status_code == status
        assert json.loads(exc_info.value.response.raw_body) == {"error": "nope"}

    @pytest.mark.parametrize("status", [302, 418, 451])
    def test_other_statuses_are_unexpected(self, transport, server, status):
        server.reply(status, "teapot")

        with pytest.raises(UnexpectedStatusError) as exc_info:
            transport.get("/x")

        assert exc_info.value.status_code == status
        assert str(status) in exc_info.value.message

    @pytest.mark.parametrize("status", [400, 422])
    def test_validation_uses_errors_field(self, transport, server, status):
        server.reply(status, {"errors": {"number": ["invalid"]}, "message": "bad"})

        with pytest.raises(ValidationError) as exc_info:
            transport.post("/message/sendText/bot1", {"number": "x"})

        assert exc_info.value.status_code == status
        assert exc_info.value.errors == {"number": ["invalid"]}

    def test_validation_falls_back_to_whole_body(self, transport, server):
        server.reply(400, {"message": ["number is required"]})

        with pytest.raises(ValidationError) as exc_info:
            transport.post("/x", {"a": 1})

        assert exc_info.value.errors == {"message": ["number is required"]}

    def test_validation_with_non_json_body(self, transport, server):
        server.reply(422, "Unprocessable")

        with pytest.raises(ValidationError) as exc_info:
            transport.post("/x", {"a": 1})

        assert exc_info.value.errors == {"body": "Unprocessable"}

    def test_validation_null_errors_uses_whole_body(self, transport, server):
        server.reply(422, {"errors": None, "message": "bad number"})

        with pytest.raises(ValidationError) as exc_info:
            transport.post("/x", {"a": 1})

        assert exc_info.value.errors == {"errors": None, "message": "bad number"}

    def test_parse_errors_helper(self):
        assert parse_errors("") == {}
        assert parse_errors('{"errors": [1]}') == [1]
        assert parse_errors("[1, 2]") == [1, 2]
        assert parse_errors('{"errors": null, "message": "m"}') == {
            "errors": None,
            "message": "m",
        }

    def test_all_errors_share_base_class(self, transport, server):
        server.reply(404, None)

        with pytest.raises(EvolutionAPIError):
            transport.get("/x")

    def test_http_errors_are_not_retried(self, transport, server, sleeps):
        server.reply(503, {"error": "down"})

        with pytest.raises(ServerError):
            transport.get("/x")

        assert len(server.requests) == 1
        assert sleeps == []


class TestRetryPolicy:
    def test_persistent_network_failure_makes_n_plus_one_attempts(
        self, transport, server, sleeps
    ):
        server.default = httpx.ConnectError("connection refused")

        with pytest.raises(ConnectionError) as exc_info:
            transport.get("/instance/fetchInstances")

        assert len(server.requests) == 3
        assert sleeps == [0.1, 0.1]
        assert exc_info.value.attempts == 3
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.status_code is None

    def test_recovers_after_transient_failure(self, transport, server, sleeps):
        server.fail(httpx.ConnectError("reset")).reply(200, {"ok": True})

        assert transport.get("/x") == {"ok": True}
        assert len(server.requests) == 2
        assert sleeps == [0.1]

    def test_zero_retries_means_single_attempt(self, http_client, server, sleeps):
        config = EvolutionConfig(retry_attempts=0, retry_delay=0.5)
        transport = HttpTransport(config, http_client=http_client, sleep=sleeps.append)
        server.default = httpx.ConnectError("dns failure")

        with pytest.raises(ConnectionError) as exc_info:
            transport.get("/x")

        assert len(server.requests) == 1
        assert sleeps == []
        assert exc_info.value.attempts == 1

    @pytest.mark.parametrize(
        "timeout_error",
        [httpx.ReadTimeout("read timed out"), httpx.ConnectTimeout("open timed out")],
    )
    def test_timeout_raises_immediately(self, transport, server, sleeps, timeout_error):
        server.default = timeout_error

        with pytest.raises(TimeoutError) as exc_info:
            transport.get("/x")

        assert len(server.requests) == 1
        assert sleeps == []
        assert isinstance(exc_info.value, builtins.TimeoutError)
        assert exc_info.value.__cause__ is timeout_error

    def test_connection_error_is_builtin_connection_error(self, transport, server):
        server.default = httpx.ConnectError("refused")

        with pytest.raises(builtins.ConnectionError):
            transport.get("/x")

    def test_undecodable_body_is_not_retried(self, transport, server, sleeps):
        server.reply(200, b"not-gzip", headers={"Content-Encoding": "gzip"})

        with pytest.raises(ProtocolError) as exc_info:
            transport.get("/x")

        assert len(server.requests) == 1
        assert sleeps == []
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
        assert exc_info.value.status_code is None

    def test_redirect_loop_is_typed(self, transport, server, sleeps):
        server.default = httpx.TooManyRedirects("Exceeded maximum allowed redirects.")

        with pytest.raises(EvolutionAPIError) as exc_info:
            transport.get("/x")

        assert isinstance(exc_info.value, ProtocolError)
        assert len(server.requests) == 1
        assert sleeps == []


class TestLifecycle:
    def test_injected_client_is_not_closed(self, config, http_client):
        with HttpTransport(config, http_client=http_client):
            pass

        assert not http_client.is_closed

    def test_owned_client_is_closed(self, config):
        transport = HttpTransport(config)
        transport.close()

        assert transport._http.is_closed
