"""Test HttpTransport request shapes and response interpretation."""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from scorm_runtime.commit.transport import HttpTransport, parse_commit_response
from scorm_runtime.core.interfaces import ITransport
from scorm_runtime.core.models import CommitResult

URL = "https://lms.test/commit"


def _make_transport(handler, **kwargs) -> HttpTransport:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpTransport(client=client, **kwargs)


class TestParseCommitResponse:
    @pytest.mark.parametrize("raw", [True, "true", "TRUE"])
    def test_truthy_result(self, raw):
        assert parse_commit_response({"result": raw, "errorCode": 0}, 101) == CommitResult(
            result=True, error_code=0
        )

    def test_error_code_string(self):
        result = parse_commit_response({"result": "false", "errorCode": "301"}, 101)
        assert result.result is False
        assert result.error_code == 301

    def test_missing_error_code(self):
        assert parse_commit_response({"result": True}, 101).error_code == 0

    def test_unparseable_error_code(self):
        assert parse_commit_response({"result": True, "errorCode": "x"}, 101).error_code == 101

    def test_non_object_body(self):
        assert parse_commit_response(["true"], 101) == CommitResult(result=False, error_code=101)


class TestHttpTransport:
    def test_satisfies_protocol(self):
        transport = HttpTransport()
        try:
            assert isinstance(transport, ITransport)
        finally:
            transport.close()

    def test_structured_payload_posted_as_json(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"result": True, "errorCode": 0})

        transport = _make_transport(handler)
        result = transport.send(URL, {"cmi": {"core": {"score": {"raw": "80"}}}})

        assert result == CommitResult(result=True, error_code=0)
        assert seen[0].method == "POST"
        assert seen[0].headers["content-type"] == "application/json"
        assert json.loads(seen[0].content)["cmi"]["core"]["score"]["raw"] == "80"
        assert transport.sent_count == 1

    def test_params_payload_posted_as_form(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"result": "true", "errorCode": 0})

        transport = _make_transport(handler)
        transport.send(URL, ["cmi.core.score.raw=80", "cmi.objectives="])

        assert seen[0].headers["content-type"] == "application/x-www-form-urlencoded"
        assert seen[0].content == b"cmi.core.score.raw=80&cmi.objectives="

    def test_params_values_are_percent_encoded(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"result": True, "errorCode": 0})

        transport = _make_transport(handler)
        transport.send(
            URL,
            [
                "cmi.suspend_data=a&cmi.core.lesson_status=passed",
                "cmi.core.lesson_location=p=3 #top",
                "cmi.core.lesson_status=not attempted",
            ],
        )

        fields = parse_qs(seen[0].content.decode(), keep_blank_values=True)
        assert fields == {
            "cmi.suspend_data": ["a&cmi.core.lesson_status=passed"],
            "cmi.core.lesson_location": ["p=3 #top"],
            "cmi.core.lesson_status": ["not attempted"],
        }

    def test_lms_reported_error(self):
        transport = _make_transport(
            lambda request: httpx.Response(200, json={"result": False, "errorCode": 101})
        )
        assert transport.send(URL, {}) == CommitResult(result=False, error_code=101)

    def test_http_error_maps_to_general(self):
        transport = _make_transport(
            lambda request: httpx.Response(500, text="boom"), general_error_code=101
        )
        assert transport.send(URL, {}) == CommitResult(result=False, error_code=101)
        assert transport.error_count == 1

    def test_non_json_body_maps_to_general(self):
        transport = _make_transport(
            lambda request: httpx.Response(200, text="<html>ok</html>"),
            general_error_code=555,
        )
        assert transport.send(URL, {}).error_code == 555

    def test_network_error_maps_to_general(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        transport = _make_transport(handler)
        result = transport.send(URL, {})
        assert result.result is False
        assert result.error_code == 101

    def test_context_manager_closes_owned_client(self):
        with HttpTransport(timeout_seconds=1.0) as transport:
            client = transport._client
        assert client.is_closed
