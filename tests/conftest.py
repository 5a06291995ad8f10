"""
Pytest configuration and shared fixtures for the Template API.

This module provides common test fixtures and configuration used across
unit and end-to-end tests.
"""

import os
from typing import Any, Dict
from unittest.mock import Mock

import pytest

# Handlers build their Powertools utilities at import time
os.environ.update({
    "AWS_DEFAULT_REGION": "eu-west-2",
    "AWS_REGION": "eu-west-2",
    "AWS_ACCESS_KEY_ID": "test",
    "AWS_SECRET_ACCESS_KEY": "test",
    "POWERTOOLS_SERVICE_NAME": "test-template-api",
    "POWERTOOLS_METRICS_NAMESPACE": "TestTemplateApi",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    "LOG_LEVEL": "DEBUG",
})

from aws_cdk import App, Stack  # noqa: E402

from template_api.models.verifier import Verifier  # noqa: E402
from template_api.openapi.config import FunctionDefaults, RestApiConfig  # noqa: E402


@pytest.fixture
def sample_verifier() -> Verifier:
    """A verifier for access tokens from a test user pool."""
    return Verifier(
        name="TestUserPool",
        user_pool_id="eu-west-2_TestPool1",
        token_use="access",
        client_id="test-client-id",
        oauth_url="https://test.auth.eu-west-2.amazoncognito.com",
    )

@pytest.fixture
def stack() -> Stack:
    """An empty stack without account or region."""
    return Stack(App(), "TestStack")

@pytest.fixture
def missing_layer_defaults(tmp_path) -> FunctionDefaults:
    """Function defaults pointing at a layer directory that does not exist."""
    return FunctionDefaults(layer_path=tmp_path / "no-layer")

@pytest.fixture
def rest_api_config(missing_layer_defaults) -> RestApiConfig:
    """Minimal REST API configuration without vanity domain."""
    return RestApiConfig(
        description="Test API - created by the test suite",
        sub_domain="test-api",
        hosted_zone_domain="example.com",
        function_defaults=missing_layer_defaults,
    )

@pytest.fixture
def api_gateway_event() -> Dict[str, Any]:
    """Create a sample API Gateway proxy event for testing."""
    return {
        "resource": "/status",
        "httpMethod": "GET",
        "path": "/status",
        "headers": {
            "Authorization": "Bearer test-token",
            "User-Agent": "test-agent/1.0",
        },
        "requestContext": {
            "requestId": "test-request-id-123",
            "accountId": "123456789012",
            "apiId": "abcdef1234",
            "stage": "v1",
            "resourcePath": "/status",
            "httpMethod": "GET",
            "path": "/v1/status",
            "protocol": "HTTP/1.1",
            "requestTime": "01/Jan/2024:12:00:00 +0000",
            "requestTimeEpoch": 1704110400000,
            "identity": {
                "sourceIp": "127.0.0.1",
                "userAgent": "test-agent/1.0",
            },
        },
        "pathParameters": None,
        "queryStringParameters": None,
        "multiValueQueryStringParameters": None,
        "stageVariables": None,
        "body": None,
        "isBase64Encoded": False,
    }

@pytest.fixture
def authorizer_event() -> Dict[str, Any]:
    """Create a sample API Gateway REQUEST authorizer event."""
    return {
        "type": "REQUEST",
        "methodArn": "arn:aws:execute-api:eu-west-2:123456789012:abcdef1234/v1/GET/status",
        "resource": "/status",
        "path": "/status",
        "httpMethod": "GET",
        "headers": {
            "Authorization": "Bearer test-token",
        },
        "queryStringParameters": {},
        "pathParameters": {},
        "stageVariables": {},
        "requestContext": {
            "accountId": "123456789012",
            "apiId": "abcdef1234",
            "httpMethod": "GET",
            "requestId": "test-request-id-123",
            "resourcePath": "/status",
            "stage": "v1",
            "identity": {
                "sourceIp": "127.0.0.1",
            },
        },
    }

@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-lambda-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:eu-west-2:123456789012:function:test-lambda-function"
    context.memory_limit_in_mb = "512"
    context.get_remaining_time_in_millis = lambda: 30000
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-lambda-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    return context

# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")

def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "e2e" in str(item.fspath):
            item.add_marker(pytest.mark.e2e)
