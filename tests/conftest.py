"""Shared fixtures for PROOF API client tests."""

from collections.abc import Callable

import httpx
import pytest

from proof_client.proofapi import client

API_URL = "https://proof-api.test"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives."""

    def __init__(self, handler: Handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def make_client():
    """Factory for a ProofApiClient backed by a recording mock transport."""
    created: list[client.ProofApiClient] = []

    def factory(handler: Handler, **kwargs):
        transport = RecordingTransport(handler)
        api_client = client.ProofApiClient(
            base_url=API_URL,
            transport=transport,
            **kwargs,
        )
        created.append(api_client)
        return api_client, transport

    yield factory

    for api_client in created:
        api_client.close()
