"""
OpenAPI Lambda Function - GET /openapi.

Exports the OpenAPI document of the stage that invoked the function, using
the API Gateway export API. Failures are reported as a JSON envelope with a
200 status so clients always receive a well-formed body.
"""

import json
from functools import lru_cache
from http import HTTPStatus
from typing import Any, Dict

import boto3
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent, event_source
from aws_lambda_powertools.utilities.typing import LambdaContext
from botocore.exceptions import BotoCoreError, ClientError

from template_api.exceptions import HandlerRuntimeError
from template_api.handlers.models.env_vars import get_openapi_env_vars
from template_api.handlers.utils.observability import logger, metrics, tracer
from template_api.handlers.utils.response import lambda_response


@lru_cache(maxsize=1)
def get_apigateway_client(region_name: str):
    return boto3.client('apigateway', region_name=region_name)


@tracer.capture_method
def export_openapi_spec(rest_api_id: str, stage_name: str) -> Dict[str, Any]:
    """
    Export and decode the OpenAPI document for a deployed stage.

    Args:
        rest_api_id: API Gateway REST API id
        stage_name: Deployed stage name

    Returns:
        Decoded OpenAPI document

    Raises:
        HandlerRuntimeError: the export call failed or returned invalid JSON
    """
    env_vars = get_openapi_env_vars()
    try:
        client = get_apigateway_client(env_vars.AWS_REGION)
        response = client.get_export(
            restApiId=rest_api_id,
            stageName=stage_name,
            exportType=env_vars.OPENAPI_EXPORT_TYPE,
            accepts='application/json',
        )
        return json.loads(response['body'].read())
    except (BotoCoreError, ClientError) as exc:
        raise HandlerRuntimeError(f'Unable to export OpenAPI spec: {exc}') from exc
    except ValueError as exc:
        raise HandlerRuntimeError(f'Unable to decode OpenAPI spec: {exc}') from exc


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> Dict[str, Any]:
    request_context = event.request_context
    try:
        response_data = export_openapi_spec(request_context.api_id, request_context.stage)
        logger.info('Successfully generated Open API spec')
        metrics.add_metric(name='OpenAPIExportSuccess', unit=MetricUnit.Count, value=1)
    except HandlerRuntimeError as exc:
        logger.exception('Unable to generate Open API spec', extra={'error': str(exc)})
        metrics.add_metric(name='OpenAPIExportFailure', unit=MetricUnit.Count, value=1)
        response_data = {
            'message': 'Unable to retrieve or decode OpenAPI Spec',
            'openapiSpec': None,
            'error': str(exc),
            'event': event.raw_event,
        }

    return lambda_response(HTTPStatus.OK, json.dumps(response_data, default=str))
