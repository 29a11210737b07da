"""Pytest fixtures and shared test configuration.

Fixtures:
    - fake_client: Scriptable completion client recording every request
    - registry: SessionRegistry backed by the fake client
    - async_client: HTTPX client for API testing with the registry injected
    - blank_pdf_bytes: Minimal valid PDF generated with pypdf
    - titled_pdf_bytes: Blank PDF carrying title and author metadata
"""

import asyncio
import io
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from quirra.api.app import create_app
from quirra.conversation.registry import SessionRegistry, get_session_registry
from quirra.models.schemas import ProviderRequest


class FakeCompletionClient:
    """Completion client double.

    Replies are taken from ``replies`` in order, then fall back to echoing the
    last turn. Set ``error`` to make every call fail, or ``gate`` to hold
    calls until the event is set.
    """

    def __init__(self, replies: list[str] | None = None) -> None:
        self.replies = list(replies or [])
        self.requests: list[ProviderRequest] = []
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def complete(self, request: ProviderRequest) -> str:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if self.replies:
            return self.replies.pop(0)
        return f"echo: {request.turns[-1].text}"

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def registry(fake_client: FakeCompletionClient) -> SessionRegistry:
    return SessionRegistry(fake_client)


@pytest.fixture
async def async_client(registry: SessionRegistry) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient talking to a fresh app that uses the test registry.
    """
    app = create_app()
    app.dependency_overrides[get_session_registry] = lambda: registry
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def make_pdf(pages: int = 1, metadata: dict[str, str] | None = None) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    if metadata:
        writer.add_metadata(metadata)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    return make_pdf()


@pytest.fixture
def titled_pdf_bytes() -> bytes:
    return make_pdf(metadata={"/Title": "Quarterly Report", "/Author": "Finance"})
