"""
Configuration models for the OpenAPI REST API composite.

Configuration is passed explicitly into OpenAPIRestAPI; nothing in the
construct library reads process environment variables.
"""

from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from template_api.models.verifier import Verifier

# Lambda code asset: the src/ directory holding the template_api package
SOURCE_ROOT = Path(__file__).resolve().parents[2]

# Produced by scripts/build.py
DEFAULT_LAYER_PATH = SOURCE_ROOT.parent / 'build' / 'layer'

DEFAULT_AUTHORIZER_ENTRY_POINT = 'template_api.handlers.authorizer_handler.lambda_handler'


class FunctionDefaults(BaseModel):
    """Defaults applied to every endpoint function before route overrides."""

    model_config = ConfigDict(frozen=True)

    memory_size: Annotated[int, Field(
        description='Lambda function memory allocation in MB',
        ge=128,
        le=10240
    )] = 512

    timeout_seconds: Annotated[int, Field(
        description='Lambda function timeout in seconds',
        ge=1,
        le=900
    )] = 30

    log_level: Annotated[str, Field(
        description='Log level for the Powertools logger',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    code_path: Annotated[Path, Field(
        description='Directory packaged as the function code asset'
    )] = SOURCE_ROOT

    layer_path: Annotated[Optional[Path], Field(
        description='Dependency layer directory; skipped when missing'
    )] = DEFAULT_LAYER_PATH


class RestApiConfig(BaseModel):
    """Configuration for an OpenAPIRestAPI."""

    model_config = ConfigDict(frozen=True)

    description: Annotated[str, Field(
        description='Description of the REST API'
    )] = 'No description provided'

    sub_domain: Annotated[str, Field(
        description='Sub domain for the vanity URL, e.g. template-api'
    )]

    hosted_zone_domain: Annotated[str, Field(
        description='Route 53 hosted zone domain for the vanity URL'
    )]

    verifiers: Annotated[List[Verifier], Field(
        default_factory=list,
        description='Identity token verifiers for the default authorizer'
    )]

    authorizer_entry_point: Annotated[Optional[str], Field(
        description='Alternative handler for the default authorizer function'
    )] = None

    authorizer_arn: Annotated[Optional[str], Field(
        description='ARN of an existing authorizer function to use as-is'
    )] = None

    create_cname_record: Annotated[bool, Field(
        description='Register the vanity domain, certificate and CNAME record'
    )] = False

    step_summary_path: Annotated[Optional[Path], Field(
        description='Markdown job summary file to append the route report to'
    )] = None

    function_defaults: Annotated[FunctionDefaults, Field(
        default_factory=FunctionDefaults,
        description='Defaults for endpoint functions'
    )]

    @property
    def vanity_domain(self) -> str:
        return f'{self.sub_domain}.{self.hosted_zone_domain}'
