"""
Template API - OpenAPI REST API scaffold for AWS.

This package declares an API Gateway REST API, its Lambda backed endpoints,
request authorizer and response models with the AWS CDK, and contains the
Lambda handlers that serve those endpoints:

- openapi: route registration, model factory and REST API composite (CDK)
- stack: composition root wiring shared resources and concrete endpoints (CDK)
- handlers: Lambda entry points executed by API Gateway at request time
- security: token verification for the default request authorizer
- models: Pydantic models shared by both halves

Only the openapi and stack packages import aws_cdk; handlers stay deployable
without the CDK installed.
"""

__version__ = "1.0.0"
__description__ = "OpenAPI REST API template for API Gateway and AWS Lambda"

__all__ = [
    "__version__",
    "__description__",
]
