"""PROOF API client package.

Provides a lightweight HTTP client for the PROOF job-orchestration API
that returns raw response mappings with minimal processing.

Exports:
    ProofApiClient: HTTP client for the PROOF API and Cromwell version query.
    ApiResponse: Status code and response of a single call.
    ConfigurationError: Raised when a call is missing its URL or token.
    build_auth_header: Bearer header for a PROOF API token.
    types: Module containing Pydantic views of API responses.
    DEFAULT_API_URL: PROOF API base URL.
    DEFAULT_TIMEOUT: Default HTTP request timeout.
    ENGINE_URL_ENV_VAR: Environment variable holding the Cromwell URL.
"""

from . import types
from .client import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT,
    ENGINE_URL_ENV_VAR,
    ApiResponse,
    ConfigurationError,
    ProofApiClient,
    build_auth_header,
)

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT",
    "ENGINE_URL_ENV_VAR",
    "ApiResponse",
    "ConfigurationError",
    "ProofApiClient",
    "build_auth_header",
    "types",
]
