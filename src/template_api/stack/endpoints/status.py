"""GET /status - deployment status of the API."""

from http import HTTPStatus

from aws_cdk import aws_lambda as lambda_
from constructs import Construct

from template_api.models.status import StatusInfo
from template_api.openapi.routes import ResponseDefinition, RouteMetadata
from template_api.stack.resources import Resources
from template_api.stack.schemas import STATUS_RESPONSE


def grant_status_permissions(scope: Construct, function: lambda_.Function, resources: Resources) -> None:
    service_bucket = resources.service_bucket
    service_bucket.grant_read(function)
    function.add_environment('SERVICE_BUCKET_NAME', service_bucket.bucket_name)


def status_endpoint(deployment_time: str) -> RouteMetadata[Resources]:
    status_info = StatusInfo(deployment_time=deployment_time)
    return RouteMetadata(
        operation_id='getStatus',
        rest_signature='GET /status',
        route_entry_point='template_api.handlers.status_handler.lambda_handler',
        grant_permissions=grant_status_permissions,
        lambda_config={
            'environment': {
                'STATUS_INFO': status_info.to_env_value(),
            },
        },
        method_responses=[
            ResponseDefinition(
                status_code=HTTPStatus.OK,
                response_models={'application/json': STATUS_RESPONSE},
            ),
        ],
    )
