"""PROOF API client.

Provides a synchronous HTTP client for the PROOF job-orchestration API and
the version endpoint of the Cromwell server it launches. Tokens are passed
in by the caller on every call and never stored.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

logger = structlog.get_logger(__name__)

DEFAULT_API_URL = "https://proof-api.fredhutch.org"

DEFAULT_TIMEOUT = 30.0

ENGINE_URL_ENV_VAR = "CROMWELLURL"

AUTHENTICATE_PATH = "/authenticate"
CROMWELL_SERVER_PATH = "/cromwell-server"
ENGINE_VERSION_PATH = "engine/v1/version"


class ConfigurationError(Exception):
    """Raised when a call is missing the URL or token it needs."""


def build_auth_header(token: str) -> dict[str, str]:
    """Build the bearer authorization header for a PROOF API token.

    The token is used verbatim.

    Args:
        token: PROOF API token.

    Returns:
        Header mapping with a single ``Authorization`` entry.
    """
    return {"Authorization": f"Bearer {token}"}


@dataclass(frozen=True)
class ApiResponse:
    """Outcome of a single API round trip."""

    status_code: int
    response: httpx.Response

    @property
    def ok(self) -> bool:
        return self.status_code == httpx.codes.OK

    def parsed(self) -> Any:
        """Decode the response body.

        Returns None for an empty body, the decoded value when the body is
        JSON, and the text otherwise.
        """
        if not self.response.content:
            return None
        try:
            return self.response.json()
        except ValueError:
            return self.response.text


class ProofApiClient:
    """HTTP client for the PROOF API.

    Handles authentication and the Cromwell server lifecycle calls
    (status, start, cancel) against the PROOF control plane, plus the
    version query against a running Cromwell server.

    Control-plane calls return the parsed body on HTTP 200 and None
    for any other status. The engine version call does no status check.

    Thread-safe through thread-local storage of httpx.Client instances.
    Can be used as a context manager for automatic cleanup.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        engine_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the PROOF API client.

        Args:
            base_url: Base URL for the PROOF API.
            engine_url: Base URL of the Cromwell server used by
                get_engine_version when no URL is passed to the call.
            timeout: Request timeout in seconds (default: 30.0).
            transport: Optional httpx transport, e.g. for testing.

        Raises:
            ValueError: If base_url is empty or timeout is not positive.
        """
        if not base_url:
            msg = "base_url cannot be empty"
            raise ValueError(msg)
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)

        self.base_url = base_url.rstrip("/")
        self.engine_url = engine_url
        self._timeout = timeout
        self._transport = transport

        self._headers = {"Accept": "application/json"}

        # Use thread-local storage for httpx.Client (thread safety)
        self._local = threading.local()

    @property
    def client(self) -> httpx.Client:
        """Get or create thread-local httpx client.

        Returns:
            Thread-local httpx.Client instance.
        """
        if not hasattr(self._local, "client") or self._local.client.is_closed:
            self._local.client = httpx.Client(
                base_url=self.base_url,
                headers=self._headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._local.client

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and cleanup resources."""
        self.close()

    def close(self):
        """Close the thread-local HTTP client if open.

        Only the calling thread's client is closed; clients created by other
        threads stay open until those threads close them.
        """
        if hasattr(self._local, "client") and not self._local.client.is_closed:
            self._local.client.close()

    build_auth_header = staticmethod(build_auth_header)

    def _request(
        self,
        method: str,
        url: str,
        token: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> ApiResponse:
        """Make one HTTP request.

        Args:
            method: HTTP method.
            url: Path relative to base_url, or an absolute URL.
            token: PROOF API token; no Authorization header when None.
            json: Optional JSON request body.

        Returns:
            ApiResponse with the status code and raw response.

        Raises:
            httpx.HTTPError: If the request could not be completed.
        """
        start_time = time.time()
        headers = build_auth_header(token) if token is not None else None

        try:
            logger.debug("Making API request", method=method, url=url)
            response = self.client.request(method, url, headers=headers, json=json)
        except httpx.HTTPError:
            duration = time.time() - start_time
            logger.exception(
                "API request failed",
                method=method,
                url=url,
                duration_seconds=round(duration, 3),
            )
            raise

        duration = time.time() - start_time
        logger.debug(
            "API request completed",
            method=method,
            url=url,
            status_code=response.status_code,
            duration_seconds=round(duration, 3),
        )
        return ApiResponse(status_code=response.status_code, response=response)

    def _control_plane_call(
        self,
        method: str,
        path: str,
        token: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any | None:
        """Call a control-plane endpoint; parsed body on 200, else None."""
        result = self._request(method, path, token=token, json=json)
        if not result.ok:
            logger.warning(
                "API returned non-success status",
                method=method,
                path=path,
                status_code=result.status_code,
            )
            return None
        return result.parsed()

    def authenticate(self, username: str, password: str) -> str | None:
        """Exchange HutchNet credentials for a PROOF API token.

        Args:
            username: HutchNet username.
            password: HutchNet password.

        Returns:
            Bearer token, or None if authentication did not succeed.
        """
        data = self._control_plane_call(
            "POST",
            AUTHENTICATE_PATH,
            json={"username": username, "password": password},
        )
        if not isinstance(data, dict):
            return None
        return data.get("token")

    def get_job_status(self, token: str) -> dict[str, Any] | None:
        """Get the caller's Cromwell server job status.

        Args:
            token: PROOF API token.

        Returns:
            Mapping with canJobStart, jobStatus and cromwellUrl, or None.
        """
        return self._control_plane_call("GET", CROMWELL_SERVER_PATH, token=token)

    def start_job(self, token: str, pi_name: str | None = None) -> dict[str, Any] | None:
        """Start a PROOF Cromwell server job.

        Each call starts a new job. The response does not include the
        server URL; poll get_job_status for cromwellUrl.

        Args:
            token: PROOF API token.
            pi_name: PI name in the form last_f; only needed if the user is
                in more than one SLURM account.

        Returns:
            Mapping with job_id and info, or None.
        """
        return self._control_plane_call(
            "POST",
            CROMWELL_SERVER_PATH,
            token=token,
            json={"pi_name": pi_name},
        )

    def cancel_job(self, token: str) -> dict[str, Any] | None:
        """Cancel the caller's running Cromwell server job.

        Args:
            token: PROOF API token.

        Returns:
            Parsed response body, or None.
        """
        return self._control_plane_call("DELETE", CROMWELL_SERVER_PATH, token=token)

    def get_engine_version(self, token: str | None, engine_url: str | None = None) -> Any:
        """Get the version of a Cromwell server.

        The response status is not checked: an error body is returned the
        same way as a version body.

        Args:
            token: PROOF API token.
            engine_url: Cromwell server URL (e.g. http://gizmog10:8000/).
                Defaults to the engine_url the client was built with.

        Returns:
            Parsed response body (JSON-decoded, or text if not JSON).

        Raises:
            ConfigurationError: If no engine URL is available or token is None.
        """
        engine_url = engine_url or self.engine_url
        if not engine_url:
            msg = (
                f"{ENGINE_URL_ENV_VAR} is not set in your environment, "
                "or specify the Cromwell URL to query via engine_url."
            )
            raise ConfigurationError(msg)
        if token is None:
            msg = "token is required"
            raise ConfigurationError(msg)

        url = f"{engine_url.rstrip('/')}/{ENGINE_VERSION_PATH}"
        logger.info("Getting version from Cromwell", engine_url=engine_url)
        # TODO: check status_code like the control-plane calls once callers
        # stop relying on error bodies being passed through.
        return self._request("GET", url, token=token).parsed()
