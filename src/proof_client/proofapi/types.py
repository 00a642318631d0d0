"""Response views for the PROOF API.

The client returns response bodies as plain mappings since the PROOF API
is not versioned. These Pydantic models give typed access to the fields
the client documents while keeping any other keys the server sends.
"""

from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

JsonMapping: TypeAlias = dict[str, Any]


class JobStatusInfo(BaseModel):
    """Cromwell server job status returned by GET /cromwell-server."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    can_job_start: bool | None = Field(None, alias="canJobStart")
    job_status: str | None = Field(None, alias="jobStatus")
    # Ends with a slash when set
    cromwell_url: str | None = Field(None, alias="cromwellUrl")


class JobStartResult(BaseModel):
    """Result of POST /cromwell-server."""

    model_config = ConfigDict(extra="allow")

    job_id: Any = None
    info: Any = None


class EngineVersion(BaseModel):
    """Cromwell version response, e.g. {"cromwell": "84"}."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    version: str | None = Field(None, alias="cromwell")
