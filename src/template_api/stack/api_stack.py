"""
The Template API stack.

Composes the shared resources, the OpenAPI REST API and its endpoints. Add
new endpoints to the list in ApiStack and their handlers to
template_api.handlers.
"""

from aws_cdk import Stack
from constructs import Construct

from template_api.openapi import BASIC_MODELS, OpenAPIRestAPI, RestApiConfig
from template_api.stack.endpoints import openapi_spec_endpoint, status_endpoint
from template_api.stack.parameters import StackParameters
from template_api.stack.resources import Resources
from template_api.stack.schemas import STATUS_RESPONSE

API_NAME = 'Template API'
API_DESCRIPTION = 'Template API - https://github.com/connected-web/template-api'
API_SUB_DOMAIN = 'template-api'


class ApiStack(Stack):
    """CloudFormation stack for the Template API."""

    def __init__(self, scope: Construct, construct_id: str, parameters: StackParameters, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.parameters = parameters
        self.shared_resources = Resources(self, parameters.service_data_bucket_name)

        self.api = OpenAPIRestAPI(self, API_NAME, RestApiConfig(
            description=API_DESCRIPTION,
            sub_domain=API_SUB_DOMAIN,
            hosted_zone_domain=parameters.hosted_zone_domain,
            verifiers=parameters.verifiers,
            create_cname_record=parameters.create_cname_record,
            step_summary_path=parameters.step_summary_path,
        ), self.shared_resources)

        self.api.register_models([*BASIC_MODELS, STATUS_RESPONSE])
        self.api.register_endpoints([
            status_endpoint(parameters.deployment_time),
            openapi_spec_endpoint(),
        ]).report()
