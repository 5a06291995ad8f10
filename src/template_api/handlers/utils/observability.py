"""
Centralized observability utilities for the API handlers.

Configured instances of AWS Lambda Powertools for logging, tracing and
metrics collection, shared by every handler module.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

METRICS_NAMESPACE = 'TemplateApi'

# JSON output format, service name is set per function through "POWERTOOLS_SERVICE_NAME"
logger: Logger = Logger()

# Disabled outside Lambda or by setting POWERTOOLS_TRACE_DISABLED to "true"
tracer: Tracer = Tracer()

# Namespace can be overridden by "POWERTOOLS_METRICS_NAMESPACE"
metrics: Metrics = Metrics(namespace=METRICS_NAMESPACE)
