"""
Environment variable models for type-safe handler configuration.

One model per handler; values are set on each function by the CDK stack.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import BaseModel, get_environment_variables
from pydantic import Field


class StatusHandlerEnvVars(BaseModel):
    """Environment variables for the status handler."""

    # JSON status payload rendered at deployment time
    STATUS_INFO: Annotated[Optional[str], Field(
        description='JSON encoded status information returned by GET /status'
    )] = None


class OpenAPIHandlerEnvVars(BaseModel):
    """Environment variables for the OpenAPI export handler."""

    AWS_REGION: Annotated[str, Field(
        description='AWS region of the REST API to export'
    )] = 'eu-west-2'

    OPENAPI_EXPORT_TYPE: Annotated[str, Field(
        description='API Gateway export type',
        pattern=r'^(oas30|swagger)$'
    )] = 'oas30'


class AuthorizerEnvVars(BaseModel):
    """Environment variables for the default request authorizer."""

    AUTH_VERIFIERS_JSON: Annotated[str, Field(
        description='JSON list of accepted token verifiers'
    )] = '[]'


def get_status_env_vars() -> StatusHandlerEnvVars:
    return get_environment_variables(model=StatusHandlerEnvVars)


def get_openapi_env_vars() -> OpenAPIHandlerEnvVars:
    return get_environment_variables(model=OpenAPIHandlerEnvVars)


def get_authorizer_env_vars() -> AuthorizerEnvVars:
    return get_environment_variables(model=AuthorizerEnvVars)
