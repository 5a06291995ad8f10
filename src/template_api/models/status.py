"""
Status payload returned by GET /status.

The payload is rendered once at definition time into the STATUS_INFO
environment variable of the status function, and returned verbatim at
request time.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StatusInfo(BaseModel):
    """Deployment status information."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    deployment_time: Annotated[str, Field(
        min_length=1,
        description='The UTC timestamp representing the last time the server was updated',
        examples=['2024-01-01T12:00:00+00:00'],
    )]

    def to_env_value(self) -> str:
        return self.model_dump_json(by_alias=True)
