"""Unit tests for the agent module."""
import json

import httpx
import pytest

from chabby.agent import (
    CHAT_AGENT_ID,
    DEFAULT_RESPONSE_TEXT,
    AgentClient,
    AgentResult,
    create_agent_client,
    extract_response_text,
)
from chabby.agent.providers import HttpAgentClient, OpenAIAgentClient

AGENT_URL = "http://agent.test/api/agent"


def http_client(handler, **kwargs) -> HttpAgentClient:
    return HttpAgentClient(url=AGENT_URL, transport=httpx.MockTransport(handler), **kwargs)


def completion(content: str | None) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


class TestAgentClient:
    """Tests for AgentClient interface."""

    def test_agent_client_is_abstract(self):
        """Test that AgentClient cannot be instantiated directly."""
        with pytest.raises(TypeError):
            AgentClient()  # type: ignore


class TestAgentResult:
    """Tests for AgentResult model."""

    def test_ok(self):
        """Test building a successful result."""
        result = AgentResult.ok("hi")

        assert result.success
        assert result.response.result == "hi"

    def test_failed(self):
        """Test building a failed result."""
        result = AgentResult.failed("nope")

        assert not result.success
        assert result.error == "nope"

    def test_extra_fields_allowed(self):
        """Test that unknown backend fields are tolerated."""
        result = AgentResult.model_validate({"success": True, "request_id": "r1"})

        assert result.success

    def test_text_fields_are_coerced(self):
        """Test that non-string message fields become text and empty ones are dropped."""
        result = AgentResult.model_validate(
            {"success": False, "message": 7, "error": 0, "response": {"result": 42, "message": True}}
        )

        assert result.message == "7"
        assert result.error is None
        assert result.response.message == "True"
        assert result.response.result == 42

    def test_non_object_response_is_dropped(self):
        """Test that a scalar response field is ignored rather than rejected."""
        result = AgentResult.model_validate({"success": True, "response": "plain"})

        assert result.success
        assert result.response is None


class TestAgentFactory:
    """Tests for create_agent_client."""

    @pytest.mark.asyncio
    async def test_create_http_client(self):
        """Test creating the HTTP backend."""
        client = create_agent_client("http", url=AGENT_URL)

        assert isinstance(client, HttpAgentClient)
        assert client.backend_type == "http"
        assert client.url == AGENT_URL
        await client.close()

    @pytest.mark.asyncio
    async def test_backend_name_is_case_insensitive(self):
        """Test that backend names ignore case."""
        client = create_agent_client("HTTP")

        assert isinstance(client, HttpAgentClient)
        await client.close()

    @pytest.mark.asyncio
    async def test_create_openai_client(self):
        """Test creating the OpenAI backend."""
        client = create_agent_client("openai", api_key="sk-test", model="gpt-4o")

        assert isinstance(client, OpenAIAgentClient)
        assert client.backend_type == "openai"
        assert client.model == "gpt-4o"
        await client.close()

    def test_openai_requires_api_key(self):
        """Test that the OpenAI backend needs a key."""
        with pytest.raises(TypeError):
            create_agent_client("openai")

    def test_unknown_backend(self):
        """Test that unknown backends are rejected."""
        with pytest.raises(ValueError, match="Unsupported agent backend"):
            create_agent_client("carrier-pigeon")


class TestHttpAgentClient:
    """Tests for the HTTP backend."""

    @pytest.mark.asyncio
    async def test_request_shape(self):
        """Test the request body and headers."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True, "response": {"result": "hi"}})

        async with http_client(handler, api_key="secret") as client:
            result = await client.call_agent("hello", CHAT_AGENT_ID)

        assert result.success
        assert result.response.result == "hi"
        [request] = seen
        assert request.method == "POST"
        assert str(request.url) == AGENT_URL
        assert json.loads(request.content) == {"message": "hello", "agent_id": CHAT_AGENT_ID}
        assert request.headers["x-api-key"] == "secret"

    @pytest.mark.asyncio
    async def test_no_api_key_header_by_default(self):
        """Test that the key header is omitted when no key is configured."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True})

        async with http_client(handler) as client:
            await client.call_agent("hello", CHAT_AGENT_ID)

        assert "x-api-key" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_agent_reported_failure_passes_through(self):
        """Test a 2xx body with success false."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": False, "error": "Agent unavailable"})

        async with http_client(handler) as client:
            result = await client.call_agent("hello", CHAT_AGENT_ID)

        assert not result.success
        assert result.error == "Agent unavailable"

    @pytest.mark.asyncio
    async def test_error_status_with_body(self):
        """Test that an error status keeps the agent's error text."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"success": True, "error": "Internal failure"})

        async with http_client(handler) as client:
            result = await client.call_agent("hello", CHAT_AGENT_ID)

        assert not result.success
        assert result.error == "Internal failure"

    @pytest.mark.asyncio
    async def test_error_status_without_body(self):
        """Test that an error status without a usable body names the status."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        async with http_client(handler) as client:
            result = await client.call_agent("hello", CHAT_AGENT_ID)

        assert not result.success
        assert result.error == "Agent request failed with status 502"

    @pytest.mark.asyncio
    async def test_unreadable_success_body(self):
        """Test a 2xx response that is not a JSON object."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        async with http_client(handler) as client:
            result = await client.call_agent("hello", CHAT_AGENT_ID)

        assert not result.success
        assert result.error == "The agent returned an unreadable response."

    @pytest.mark.asyncio
    async def test_mistyped_success_fields_stay_successful(self):
        """Test that a success body with wrongly typed content fields is still a success."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": True, "response": {"result": 42}, "message": "hi"})

        async with http_client(handler) as client:
            result = await client.call_agent("hello", CHAT_AGENT_ID)

        assert result.success
        assert result.response.result == 42
        assert extract_response_text(result) == "hi"

    @pytest.mark.asyncio
    async def test_non_object_response_field_is_dropped(self):
        """Test a success body whose response field is not an object."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": True, "response": 5})

        async with http_client(handler) as client:
            result = await client.call_agent("hello", CHAT_AGENT_ID)

        assert result.success
        assert result.response is None
        assert extract_response_text(result) == DEFAULT_RESPONSE_TEXT

    @pytest.mark.asyncio
    async def test_mistyped_success_flag(self):
        """Test a 2xx JSON object whose success flag is not a boolean."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": [1], "response": {"result": "hi"}})

        async with http_client(handler) as client:
            result = await client.call_agent("hello", CHAT_AGENT_ID)

        assert not result.success
        assert result.error == "The agent returned an unexpected response."

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        """Test that connection failures are raised, not wrapped."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with http_client(handler) as client:
            with pytest.raises(httpx.ConnectError):
                await client.call_agent("hello", CHAT_AGENT_ID)

    @pytest.mark.asyncio
    async def test_debug_callback(self):
        """Test that requests are logged through the debug callback."""
        entries: list[tuple[str, str, str]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": True})

        async with http_client(handler) as client:
            client.set_debug_callback(lambda *entry: entries.append(entry))
            await client.call_agent("hello", CHAT_AGENT_ID)

        assert {component for _, component, _ in entries} == {"HTTP"}


class TestOpenAIAgentClient:
    """Tests for the OpenAI-compatible backend."""

    def openai_client(self, handler) -> OpenAIAgentClient:
        return OpenAIAgentClient(
            api_key="sk-test",
            base_url="http://llm.test/v1",
            max_retries=0,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

    @pytest.mark.asyncio
    async def test_completion_becomes_result(self):
        """Test that completion content becomes the result payload."""
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json=completion("Hello from the model"))

        async with self.openai_client(handler) as client:
            result = await client.call_agent("hello", CHAT_AGENT_ID)

        assert result.success
        assert result.response.result == "Hello from the model"
        [body] = seen
        assert body["model"] == "gpt-4o-mini"
        assert body["messages"][-1] == {"role": "user", "content": "hello"}
        assert body["user"] == CHAT_AGENT_ID

    @pytest.mark.asyncio
    async def test_empty_completion_is_failure(self):
        """Test that an empty completion is an agent-reported failure."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=completion(None))

        async with self.openai_client(handler) as client:
            result = await client.call_agent("hello", CHAT_AGENT_ID)

        assert not result.success
        assert result.error == "The model returned an empty response."

    @pytest.mark.asyncio
    async def test_api_status_error_is_failure(self):
        """Test that API error statuses become failed results."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": {"message": "Invalid model", "type": "invalid_request_error"}})

        async with self.openai_client(handler) as client:
            result = await client.call_agent("hello", CHAT_AGENT_ID)

        assert not result.success
        assert "Invalid model" in result.error
