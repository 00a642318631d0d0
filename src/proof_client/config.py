"""Configuration and construction of the PROOF API client.

This is the only place the process environment is read. Library code
receives its URLs through ProofApiClient's constructor.
"""

import logging
import os
from collections.abc import Mapping

import pydantic
import structlog

from . import proofapi

API_URL_ENV_VAR = "PROOF_API_URL"
TIMEOUT_ENV_VAR = "PROOF_API_TIMEOUT"
LOG_LEVEL_ENV_VAR = "PROOF_LOG_LEVEL"
logger = structlog.get_logger(__name__)


class ClientConfig(pydantic.BaseModel):
    """Configuration for the PROOF API client."""

    api_url: str = pydantic.Field(
        proofapi.DEFAULT_API_URL,
        description="Base URL for the PROOF API",
    )
    engine_url: str | None = pydantic.Field(
        None,
        description="Base URL of the Cromwell server",
    )
    timeout: float = pydantic.Field(
        proofapi.DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")


def configure_logging(log_level_name: str) -> None:
    """Configure structlog for logfmt output.

    Loggers are cached on first use, so calling this again with another
    level does not affect loggers that have already logged.
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=("timestamp", "level", "msg"),
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def load_config(
    environ: Mapping[str, str] | None = None,
    **overrides: object,
) -> ClientConfig:
    """Build client configuration from the environment.

    Keyword overrides that are not None take precedence over environment
    variables, which take precedence over the defaults.

    Args:
        environ: Environment mapping (default: os.environ).
        **overrides: ClientConfig field values.

    Returns:
        Validated client configuration.

    Raises:
        pydantic.ValidationError: If a value is invalid.
    """
    environ = os.environ if environ is None else environ
    env_fields = {
        "api_url": API_URL_ENV_VAR,
        "engine_url": proofapi.ENGINE_URL_ENV_VAR,
        "timeout": TIMEOUT_ENV_VAR,
        "log_level": LOG_LEVEL_ENV_VAR,
    }

    data: dict[str, object] = {
        field: environ[var] for field, var in env_fields.items() if environ.get(var)
    }
    data.update({key: value for key, value in overrides.items() if value is not None})
    return ClientConfig(**data)


def create_client(config: ClientConfig | None = None) -> proofapi.ProofApiClient:
    """Create a PROOF API client from config or the environment.

    Configures structlog process-wide; see configure_logging for why only
    the first configured level reliably applies.
    """
    config = config or load_config()
    configure_logging(config.log_level)
    client = proofapi.ProofApiClient(
        base_url=config.api_url,
        engine_url=config.engine_url,
        timeout=config.timeout,
    )
    logger.info(
        "Created PROOF API client",
        api_url=config.api_url,
        engine_url=config.engine_url,
    )
    return client
