"""Tests for the handler stack, middleware, formatter, serializer and URL helpers."""

from __future__ import annotations

import asyncio
import json
import logging
import re

import httpx
import pytest

from opencloud.common.api import Operation
from opencloud.common.error import BadResponseError
from opencloud.common.transport import (
    AuthHandler,
    HandlerStack,
    MessageFormatter,
    Middleware,
    Serializer,
    append_path,
    flatten_json,
    json_decode,
    log,
    normalize_url,
)

from conftest import FakeToken


def client_for(stack: HandlerStack, handler) -> httpx.Client:
    return httpx.Client(
        base_url="http://api.test/",
        transport=httpx.MockTransport(handler),
        event_hooks=stack.event_hooks(),
    )


class Tracker(Middleware):
    def __init__(self, name: str, events: list[str]) -> None:
        self.name = name
        self.events = events

    def on_request(self, request):
        self.events.append(f"{self.name}:request")

    def on_response(self, response):
        self.events.append(f"{self.name}:response")


class TestUtils:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("example.com", "http://example.com/"),
            ("https://example.com/v3", "https://example.com/v3/"),
            ("https://example.com/v3///", "https://example.com/v3/"),
        ],
    )
    def test_normalize_url(self, url, expected):
        assert normalize_url(url) == expected

    def test_append_path(self):
        assert append_path("http://a.test/v2/", "/servers/", "abc") == "http://a.test/v2/servers/abc"
        assert append_path("http://a.test", "") == "http://a.test"

    def test_flatten_json(self):
        assert flatten_json({"server": {"id": 1}}, "server") == {"id": 1}
        assert flatten_json({"id": 1}, "server") == {"id": 1}
        assert flatten_json({"server": 1}) == {"server": 1}
        assert flatten_json([], "server") == []

    def test_json_decode_empty_body(self):
        assert json_decode(httpx.Response(204)) == {}
        assert json_decode(httpx.Response(200, json={"a": 1})) == {"a": 1}


class TestHandlerStack:
    def test_create_seeds_http_errors(self):
        stack = HandlerStack.create()
        assert len(stack) == 1
        assert stack.has("http_errors")

    def test_requests_in_push_order_responses_reversed(self):
        events: list[str] = []
        stack = HandlerStack()
        stack.push(Tracker("outer", events))
        stack.push(Tracker("inner", events))

        client_for(stack, lambda request: httpx.Response(200)).get("x")

        assert events == ["outer:request", "inner:request", "inner:response", "outer:response"]

    def test_unshift_and_remove(self):
        events: list[str] = []
        stack = HandlerStack()
        stack.push(Tracker("b", events), "b")
        stack.unshift(Tracker("a", events), "a")
        stack.push(Tracker("c", events), "c")
        stack.remove("c")

        client_for(stack, lambda request: httpx.Response(200)).get("x")

        assert events == ["a:request", "b:request", "b:response", "a:response"]
        assert not stack.has("c")

    def test_middleware_pushed_after_client_creation_applies(self):
        events: list[str] = []
        stack = HandlerStack()
        client = client_for(stack, lambda request: httpx.Response(200))
        stack.push(Tracker("late", events))

        client.get("x")

        assert events == ["late:request", "late:response"]

    def test_async_hooks(self):
        events: list[str] = []
        stack = HandlerStack()
        stack.push(Tracker("only", events))

        async def _test():
            async with httpx.AsyncClient(
                base_url="http://api.test/",
                transport=httpx.MockTransport(lambda request: httpx.Response(200)),
                event_hooks=stack.async_event_hooks(),
            ) as client:
                await client.get("x")

        asyncio.run(_test())
        assert events == ["only:request", "only:response"]


class TestHttpErrors:
    def test_error_responses_raise(self):
        client = client_for(
            HandlerStack.create(),
            lambda request: httpx.Response(404, json={"itemNotFound": {"message": "gone"}}),
        )

        with pytest.raises(BadResponseError) as excinfo:
            client.get("servers/abc")

        error = excinfo.value
        assert error.status_code == 404
        assert error.request.url.path == "/servers/abc"
        message = str(error)
        assert '"404 Not Found"' in message
        assert "GET /servers/abc HTTP/1.1" in message
        assert "itemNotFound" in message
        assert "resource you are trying to access exists" in message

    def test_success_passes_through(self):
        client = client_for(HandlerStack.create(), lambda request: httpx.Response(204))
        assert client.delete("servers/abc").status_code == 204

    def test_async_error_responses_raise(self):
        async def _test():
            async with httpx.AsyncClient(
                base_url="http://api.test/",
                transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")),
                event_hooks=HandlerStack.create().async_event_hooks(),
            ) as client:
                await client.get("x")

        with pytest.raises(BadResponseError, match="boom"):
            asyncio.run(_test())


class TestAuthHandler:
    def test_token_is_generated_once_and_reused(self):
        generated: list[str] = []

        def generator():
            generated.append("x")
            return FakeToken(f"tok-{len(generated)}")

        seen: list[str] = []
        stack = HandlerStack()
        stack.push(AuthHandler(generator))
        client = client_for(
            stack, lambda request: seen.append(request.headers["X-Auth-Token"]) or httpx.Response(200)
        )

        client.get("a")
        client.get("b")

        assert seen == ["tok-1", "tok-1"]
        assert len(generated) == 1

    def test_expired_token_is_regenerated(self):
        stack = HandlerStack()
        stack.push(AuthHandler(lambda: FakeToken("new"), FakeToken("old", expired=True)))
        seen: list[str] = []
        client = client_for(
            stack, lambda request: seen.append(request.headers["X-Auth-Token"]) or httpx.Response(200)
        )

        client.get("a")

        assert seen == ["new"]

    def test_token_requests_are_ignored(self):
        def generator():
            raise AssertionError("token generation must not recurse")

        stack = HandlerStack()
        stack.push(AuthHandler(generator))
        seen: list[bool] = []
        client = client_for(
            stack, lambda request: seen.append("X-Auth-Token" in request.headers) or httpx.Response(201)
        )

        client.post("auth/tokens", json={})

        assert seen == [False]

    def test_async_refresh(self):
        handler = AuthHandler(lambda: FakeToken("async-tok"))
        request = httpx.Request("GET", "http://api.test/servers")

        asyncio.run(handler.on_request_async(request))

        assert request.headers["X-Auth-Token"] == "async-tok"


class TestLogMiddleware:
    def test_logs_completed_transactions(self, caplog):
        stack = HandlerStack()
        stack.push(log(logging.getLogger("opencloud.tests.log"), MessageFormatter(MessageFormatter.SHORT)))
        client = client_for(stack, lambda request: httpx.Response(202))

        with caplog.at_level(logging.INFO, logger="opencloud.tests.log"):
            client.post("servers", json={"a": 1})

        assert re.fullmatch(r"POST http://api\.test/servers -> 202 \(\d+ ms\)", caplog.messages[0])

    def test_reads_body_when_template_needs_it(self, caplog):
        stack = HandlerStack()
        stack.push(log(logging.getLogger("opencloud.tests.log"), MessageFormatter("{res_body}"), logging.WARNING))
        client = client_for(stack, lambda request: httpx.Response(200, text="hello"))

        with caplog.at_level(logging.WARNING, logger="opencloud.tests.log"):
            client.get("x")

        assert caplog.messages == ["hello"]


class TestMessageFormatter:
    def test_clf(self):
        request = httpx.Request("GET", "http://api.test/servers?limit=1")
        response = httpx.Response(200, request=request)
        assert MessageFormatter().format(request, response) == 'api.test "GET /servers?limit=1 HTTP/1.1" 200'

    def test_without_response(self):
        request = httpx.Request("DELETE", "http://api.test/x")
        assert MessageFormatter("{method} {code}").format(request) == "DELETE NULL"

    def test_unknown_placeholders_are_kept(self):
        request = httpx.Request("GET", "http://api.test/x")
        assert MessageFormatter("{method} {nope}").format(request) == "GET {nope}"

    def test_debug_template_includes_bodies(self):
        request = httpx.Request("POST", "http://api.test/x", json={"a": 1})
        response = httpx.Response(201, text="created", request=request)
        output = MessageFormatter(MessageFormatter.DEBUG).format(request, response)
        assert '{"a":1}' in output.replace(" ", "")
        assert "created" in output
        assert "201 Created" in output


class TestSerializer:
    def test_url_query_and_header_locations(self):
        operation = Operation({
            "method": "PUT",
            "path": "servers/{id}/metadata",
            "params": {
                "id": {"type": "string", "location": "url"},
                "dryRun": {"type": "boolean", "location": "query", "sentAs": "dry_run"},
                "meta": {"type": "object", "location": "header", "prefix": "X-Meta-"},
                "reason": {"type": "string", "location": "header", "sentAs": "X-Reason"},
            },
        })

        options = Serializer().serialize_request(
            operation,
            {"id": "a b", "dryRun": True, "meta": {"Color": "red"}, "reason": "test"},
        )

        assert options["url"] == "servers/a%20b/metadata"
        assert options["params"] == {"dry_run": "true"}
        assert options["headers"] == {"X-Meta-Color": "red", "X-Reason": "test"}
        assert "json" not in options

    def test_nested_json_paths_and_renames(self):
        operation = Operation({
            "method": "POST",
            "path": "auth/tokens",
            "params": {
                "methods": {"type": "array", "path": "auth.identity"},
                "tokenId": {"type": "string", "path": "auth.identity.token", "sentAs": "id"},
                "items": {
                    "type": "array",
                    "items": {"type": "object", "properties": {"imageId": {"sentAs": "imageRef"}}},
                },
            },
        })

        options = Serializer().serialize_request(
            operation,
            {"methods": ["token"], "tokenId": "abc", "items": [{"imageId": "i-1", "other": 2}]},
        )

        assert options["json"] == {
            "auth": {"identity": {"methods": ["token"], "token": {"id": "abc"}}},
            "items": [{"imageRef": "i-1", "other": 2}],
        }

    def test_json_key_wraps_body(self):
        operation = Operation({
            "method": "POST",
            "path": "servers",
            "jsonKey": "server",
            "params": {"name": {"type": "string"}},
        })
        options = Serializer().serialize_request(operation, {"name": "web"})
        assert json.dumps(options["json"]) == '{"server": {"name": "web"}}'

    def test_raw_content(self):
        operation = Operation({
            "method": "PUT",
            "path": "objects/x",
            "params": {"content": {"location": "raw"}},
        })
        options = Serializer().serialize_request(operation, {"content": b"bytes"})
        assert options["content"] == b"bytes"
