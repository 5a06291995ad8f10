"""Inputs of the API stack, resolved once by the CDK app entry point."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from template_api.models.verifier import Verifier


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class StackParameters(BaseModel):
    """Deployment parameters for ApiStack."""

    model_config = ConfigDict(frozen=True)

    hosted_zone_domain: Annotated[str, Field(
        description='Route 53 hosted zone for the vanity domain'
    )]

    service_data_bucket_name: Annotated[str, Field(
        description='Name of the service data bucket',
        min_length=3,
        max_length=63
    )]

    verifiers: Annotated[List[Verifier], Field(
        default_factory=list,
        description='Accepted identity token verifiers'
    )]

    create_cname_record: Annotated[bool, Field(
        description='Register the vanity domain for the API'
    )] = False

    step_summary_path: Annotated[Optional[Path], Field(
        description='Markdown job summary file for the route report'
    )] = None

    deployment_time: Annotated[str, Field(
        default_factory=utc_now,
        description='Timestamp reported by GET /status'
    )]
