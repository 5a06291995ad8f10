"""
Deployment environment variables.

The CDK app entry point is the only place that reads process environment;
everything below it receives explicit StackParameters.
"""

from pathlib import Path
from typing import Annotated, Optional

from aws_lambda_env_modeler import BaseModel, get_environment_variables
from pydantic import Field, field_validator

from template_api.models.verifier import load_verifiers
from template_api.stack.parameters import StackParameters


class DeploymentEnvVars(BaseModel):
    """Environment variables read by app.py at synth time."""

    # "true" registers the vanity domain, certificate and CNAME record
    CREATE_CNAME_RECORD: Annotated[bool, Field(
        description='Create the custom domain for the API'
    )] = False

    # Set by GitHub Actions; the route report is appended here
    GITHUB_STEP_SUMMARY: Annotated[Optional[Path], Field(
        description='Path of the job summary Markdown file'
    )] = None

    SERVICE_BUCKET_NAME: Annotated[str, Field(
        description='Name of the service data bucket',
        min_length=3,
        max_length=63
    )] = 'template-api-service-data-bucket'

    # Fixed deployment time for repeatable synth output in tests
    USE_MOCK_TIME: Annotated[Optional[str], Field(
        description='Override for the deployment time reported by GET /status'
    )] = None

    HOSTED_ZONE_DOMAIN: Annotated[str, Field(
        description='Route 53 hosted zone for the vanity domain'
    )] = 'example.com'

    AUTH_VERIFIERS_JSON: Annotated[str, Field(
        description='JSON list of accepted token verifiers'
    )] = '[]'

    CDK_DEFAULT_ACCOUNT: Annotated[Optional[str], Field(
        description='Target AWS account, set by the CDK CLI'
    )] = None

    CDK_DEFAULT_REGION: Annotated[str, Field(
        description='Target AWS region, set by the CDK CLI'
    )] = 'eu-west-2'

    @field_validator('GITHUB_STEP_SUMMARY', 'USE_MOCK_TIME', mode='before')
    @classmethod
    def empty_as_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_stack_parameters(self) -> StackParameters:
        parameters = {
            'hosted_zone_domain': self.HOSTED_ZONE_DOMAIN,
            'service_data_bucket_name': self.SERVICE_BUCKET_NAME,
            'verifiers': load_verifiers(self.AUTH_VERIFIERS_JSON),
            'create_cname_record': self.CREATE_CNAME_RECORD,
            'step_summary_path': self.GITHUB_STEP_SUMMARY,
        }
        if self.USE_MOCK_TIME is not None:
            parameters['deployment_time'] = self.USE_MOCK_TIME
        return StackParameters(**parameters)


def get_deployment_env_vars() -> DeploymentEnvVars:
    return get_environment_variables(model=DeploymentEnvVars)
