"""
AWS Lambda Handlers Module.

Entry points executed by API Gateway at request time. Each handler is
referenced from the CDK stack by its dotted path, e.g.
template_api.handlers.status_handler.lambda_handler.

- status_handler: GET /status
- openapi_handler: GET /openapi
- authorizer_handler: default request authorizer for every route

Handlers use AWS Lambda Powertools for structured logging with correlation
ids, tracing and metrics, and never import the CDK.
"""

from template_api.handlers.utils.observability import logger, metrics, tracer
from template_api.handlers.utils.response import CORS_HEADERS, lambda_response

__all__ = [
    "logger",
    "tracer",
    "metrics",
    "CORS_HEADERS",
    "lambda_response",
]
