"""PROOF API Client.

Client for the Fred Hutch PROOF API: authenticate with HutchNet
credentials, then start, query and cancel a personal Cromwell server and
check its version.
"""

from .config import ClientConfig, create_client, load_config
from .proofapi import ConfigurationError, ProofApiClient, build_auth_header

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "ProofApiClient",
    "build_auth_header",
    "create_client",
    "load_config",
]
