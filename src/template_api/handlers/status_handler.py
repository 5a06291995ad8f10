"""
Status Lambda Function - GET /status.

Returns the status payload rendered into STATUS_INFO at deployment time.
"""

import json
from http import HTTPStatus
from typing import Any, Dict

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from template_api.handlers.models.env_vars import get_status_env_vars
from template_api.handlers.utils.observability import logger, metrics, tracer
from template_api.handlers.utils.response import lambda_response

MISSING_STATUS_INFO = json.dumps({'message': 'No STATUS_INFO found on env'})


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    status_info = get_status_env_vars().STATUS_INFO
    if status_info is None:
        logger.warning('STATUS_INFO is not set on the function environment')
        status_info = MISSING_STATUS_INFO

    metrics.add_metric(name='StatusRequestCount', unit=MetricUnit.Count, value=1)
    return lambda_response(HTTPStatus.OK, status_info)
