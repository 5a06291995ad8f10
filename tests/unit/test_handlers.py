"""
Unit tests for the Lambda handlers.

Environment models and AWS clients are patched at the handler module so each
test controls exactly what the handler sees.
"""

import io
import json
from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError

from template_api.exceptions import InvalidTokenError
from template_api.handlers import authorizer_handler, openapi_handler, status_handler
from template_api.handlers.models.env_vars import AuthorizerEnvVars, OpenAPIHandlerEnvVars, StatusHandlerEnvVars
from template_api.handlers.utils.response import CORS_HEADERS, lambda_response
from template_api.security.auth import UserClaims

OPENAPI_DOCUMENT = {
    "openapi": "3.0.1",
    "info": {"title": "Template API"},
    "paths": {"/status": {}, "/openapi": {}},
}


@pytest.fixture
def openapi_env_vars():
    with patch.object(openapi_handler, "get_openapi_env_vars") as get_env_vars:
        get_env_vars.return_value = OpenAPIHandlerEnvVars(AWS_REGION="eu-west-2")
        yield get_env_vars


@pytest.fixture
def apigateway_client(openapi_env_vars):
    with patch.object(openapi_handler, "get_apigateway_client") as get_client:
        client = Mock()
        get_client.return_value = client
        yield client


class TestLambdaResponse:
    """Test cases for the response envelope."""

    def test_headers(self):
        response = lambda_response(200, '{"ok": true}')

        assert response == {
            "statusCode": 200,
            "body": '{"ok": true}',
            "headers": {
                "content-type": "application/json",
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Headers": "Authorization, content-type",
                "Access-Control-Allow-Methods": "*",
            },
        }


class TestStatusHandler:
    """Test cases for GET /status."""

    def test_returns_status_info(self, api_gateway_event, lambda_context):
        status_info = '{"deploymentTime":"2024-01-01T12:00:00+00:00"}'
        with patch.object(status_handler, "get_status_env_vars") as get_env_vars:
            get_env_vars.return_value = StatusHandlerEnvVars(STATUS_INFO=status_info)

            response = status_handler.lambda_handler(api_gateway_event, lambda_context)

        assert response["statusCode"] == 200
        assert response["body"] == status_info
        for header, value in CORS_HEADERS.items():
            assert response["headers"][header] == value

    def test_missing_status_info(self, api_gateway_event, lambda_context):
        with patch.object(status_handler, "get_status_env_vars") as get_env_vars:
            get_env_vars.return_value = StatusHandlerEnvVars()

            response = status_handler.lambda_handler(api_gateway_event, lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {"message": "No STATUS_INFO found on env"}


class TestOpenAPIHandler:
    """Test cases for GET /openapi."""

    def test_exports_stage(self, api_gateway_event, lambda_context, apigateway_client):
        apigateway_client.get_export.return_value = {
            "body": io.BytesIO(json.dumps(OPENAPI_DOCUMENT).encode("utf-8")),
        }

        response = openapi_handler.lambda_handler(api_gateway_event, lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == OPENAPI_DOCUMENT
        apigateway_client.get_export.assert_called_once_with(
            restApiId="abcdef1234",
            stageName="v1",
            exportType="oas30",
            accepts="application/json",
        )

    def test_export_failure(self, api_gateway_event, lambda_context, apigateway_client):
        apigateway_client.get_export.side_effect = ClientError(
            error_response={"Error": {"Code": "NotFoundException", "Message": "Invalid stage"}},
            operation_name="GetExport",
        )

        response = openapi_handler.lambda_handler(api_gateway_event, lambda_context)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["message"] == "Unable to retrieve or decode OpenAPI Spec"
        assert body["openapiSpec"] is None
        assert "Invalid stage" in body["error"]
        assert body["event"]["requestContext"]["apiId"] == "abcdef1234"

    def test_invalid_export_body(self, api_gateway_event, lambda_context, apigateway_client):
        apigateway_client.get_export.return_value = {"body": io.BytesIO(b"<html>not json</html>")}

        response = openapi_handler.lambda_handler(api_gateway_event, lambda_context)

        body = json.loads(response["body"])
        assert body["openapiSpec"] is None
        assert body["error"].startswith("Unable to decode OpenAPI spec")


class TestAuthorizerHandler:
    """Test cases for the default request authorizer."""

    @staticmethod
    def effect(response):
        return response["policyDocument"]["Statement"][0]["Effect"]

    def test_allows_verified_token(self, authorizer_event, lambda_context):
        claims = UserClaims(sub="user-123", verifier="TestUserPool", token_use="access", client_id="test-client-id")
        with patch.object(authorizer_handler, "get_verifier_chain") as get_chain:
            get_chain.return_value.verify.return_value = claims

            response = authorizer_handler.lambda_handler(authorizer_event, lambda_context)

        get_chain.return_value.verify.assert_called_once_with("test-token")
        assert self.effect(response) == "Allow"
        assert response["principalId"] == "user-123"
        assert response["context"] == claims.authorizer_context()

    def test_denies_rejected_token(self, authorizer_event, lambda_context):
        with patch.object(authorizer_handler, "get_verifier_chain") as get_chain:
            get_chain.return_value.verify.side_effect = InvalidTokenError("Token has expired")

            response = authorizer_handler.lambda_handler(authorizer_event, lambda_context)

        assert self.effect(response) == "Deny"
        assert response["principalId"] == "anonymous"

    def test_denies_missing_token(self, authorizer_event, lambda_context):
        authorizer_event["headers"] = {}
        with patch.object(authorizer_handler, "get_verifier_chain") as get_chain:
            response = authorizer_handler.lambda_handler(authorizer_event, lambda_context)

        get_chain.assert_not_called()
        assert self.effect(response) == "Deny"

    def test_denies_without_verifiers(self, authorizer_event, lambda_context):
        # AUTH_VERIFIERS_JSON is unset in the test environment
        response = authorizer_handler.lambda_handler(authorizer_event, lambda_context)

        assert self.effect(response) == "Deny"

    def test_denies_with_malformed_verifier_list(self, authorizer_event, lambda_context):
        with patch.object(authorizer_handler, "get_authorizer_env_vars") as get_env_vars:
            get_env_vars.return_value = AuthorizerEnvVars(AUTH_VERIFIERS_JSON="not json")

            response = authorizer_handler.lambda_handler(authorizer_event, lambda_context)

        assert self.effect(response) == "Deny"
        assert response["principalId"] == "anonymous"

    def test_denies_with_invalid_verifier(self, authorizer_event, lambda_context):
        with patch.object(authorizer_handler, "get_authorizer_env_vars") as get_env_vars:
            get_env_vars.return_value = AuthorizerEnvVars(AUTH_VERIFIERS_JSON='[{"name": "NoPool"}]')

            response = authorizer_handler.lambda_handler(authorizer_event, lambda_context)

        assert self.effect(response) == "Deny"

    def test_policy_covers_all_routes(self, authorizer_event, lambda_context):
        authorizer_event["headers"] = {}

        response = authorizer_handler.lambda_handler(authorizer_event, lambda_context)

        resources = response["policyDocument"]["Statement"][0]["Resource"]
        assert resources == ["arn:aws:execute-api:eu-west-2:123456789012:abcdef1234/v1/*/*"]
