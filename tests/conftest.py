import httpx
import pytest

from gitlab_client import AsyncGitLabClient
from gitlab_client.request_context import request_id_var


@pytest.fixture
async def make_client():
    """Build clients backed by ``httpx.MockTransport``; closed on teardown."""
    clients: list[AsyncGitLabClient] = []

    def factory(handler, host: str = "gitlab.example.com", **kwargs) -> AsyncGitLabClient:
        client = AsyncGitLabClient(
            host,
            "secret-token",
            _transport=httpx.MockTransport(handler),
            **kwargs,
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        await client.close()


@pytest.fixture(autouse=True)
def _clear_request_id():
    """Make sure no correlation ID leaks between tests."""
    token = request_id_var.set("")
    yield
    request_id_var.reset(token)
