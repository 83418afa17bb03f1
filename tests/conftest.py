import json

import httpx
import pytest

from idea_validator.analysis.providers import ChatProvider


class FakeProvider(ChatProvider):
    """In-memory provider: returns a canned reply or raises a canned error."""

    name = "Fake"

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []
        self.closed = False

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply

    async def aclose(self) -> None:
        self.closed = True


def completion_body(content: str | None) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30},
    }


GOOD_REPLY = json.dumps({
    "feasibilityScore": 78,
    "targetAudience": "Remote teams of 10-50 people in North America",
    "competitors": ["Slack", "Microsoft Teams", "Discord", "Zoom"],
    "monetizationStrategies": ["Per-seat subscription", "Enterprise licensing", "Marketplace fees"],
    "suggestedTechStack": ["React", "FastAPI", "PostgreSQL", "AWS", "Redis"],
})


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider(reply=GOOD_REPLY)


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def mock_http(recorded_requests):
    """Build an httpx.AsyncClient whose transport answers with the given handler."""

    def factory(handler) -> httpx.AsyncClient:
        def record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(record))

    return factory
