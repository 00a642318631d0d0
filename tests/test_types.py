"""Tests for the Pydantic views over PROOF API response mappings."""

from proof_client.proofapi import types


def test_job_status_info_reads_documented_fields():
    """camelCase API keys map onto snake_case accessors."""
    status = types.JobStatusInfo.model_validate(
        {"canJobStart": False, "jobStatus": "RUNNING", "cromwellUrl": "http://gizmog10:8000/"},
    )
    assert status.can_job_start is False
    assert status.job_status == "RUNNING"
    assert status.cromwell_url == "http://gizmog10:8000/"


def test_job_status_info_tolerates_missing_and_extra_fields():
    """Unknown keys are kept and absent documented keys default to None."""
    status = types.JobStatusInfo.model_validate({"jobStatus": "idle", "queue": "campus"})
    assert status.can_job_start is None
    assert status.cromwell_url is None
    assert status.model_extra == {"queue": "campus"}


def test_job_start_result_keeps_info_untyped():
    """job_id and info are taken as sent."""
    result = types.JobStartResult.model_validate(
        {"job_id": 4567, "info": {"partition": "campus-new"}},
    )
    assert result.job_id == 4567
    assert result.info == {"partition": "campus-new"}


def test_engine_version_reads_cromwell_key():
    """The Cromwell version body exposes its version string."""
    version = types.EngineVersion.model_validate({"cromwell": "84"})
    assert version.version == "84"
