"""
Unit tests for the Template API stack.
"""

from unittest.mock import patch

import pytest
from aws_cdk import App
from aws_cdk.assertions import Match, Template

from template_api.stack import ApiStack, StackParameters
from template_api.stack.api_stack import API_DESCRIPTION, API_NAME
from template_api.stack.endpoints.openapi_spec import EXPORTS_RESOURCE_ARN

MOCK_DEPLOYMENT_TIME = "2024-01-01T12:00:00+00:00"


@pytest.fixture(scope="module")
def api_stack() -> ApiStack:
    parameters = StackParameters(
        hosted_zone_domain="example.com",
        service_data_bucket_name="test-service-data-bucket",
        deployment_time=MOCK_DEPLOYMENT_TIME,
    )
    with patch("template_api.openapi.rest_api.logger"):
        return ApiStack(App(), "TemplateApiStack", parameters)


@pytest.fixture(scope="module")
def template(api_stack) -> Template:
    return Template.from_stack(api_stack)


class TestApiStack:
    """Test cases for the synthesized stack."""

    def test_rest_api(self, template):
        template.resource_count_is("AWS::ApiGateway::RestApi", 1)
        template.has_resource_properties("AWS::ApiGateway::RestApi", {
            "Name": API_NAME,
            "Description": API_DESCRIPTION,
        })

    def test_endpoints(self, api_stack, template):
        assert [(e.operation_id, e.http_method.value, e.path) for e in api_stack.api.endpoints] == [
            ("getStatus", "GET", "/status"),
            ("getOpenAPISpec", "GET", "/openapi"),
        ]
        assert api_stack.api.route_tree.paths == ["/", "/status", "/openapi"]

        template.has_resource_properties("AWS::ApiGateway::Method", {
            "HttpMethod": "GET",
            "OperationName": "getStatus",
        })
        template.has_resource_properties("AWS::ApiGateway::Method", {
            "HttpMethod": "GET",
            "OperationName": "getOpenAPISpec",
        })

    def test_models(self, template):
        template.resource_count_is("AWS::ApiGateway::Model", 4)
        template.has_resource_properties("AWS::ApiGateway::Model", {"Name": "StatusResponseModel"})

    def test_status_function(self, template):
        template.has_resource_properties("AWS::Lambda::Function", {
            "Handler": "template_api.handlers.status_handler.lambda_handler",
            "Environment": {
                "Variables": Match.object_like({
                    "STATUS_INFO": f'{{"deploymentTime":"{MOCK_DEPLOYMENT_TIME}"}}',
                    "SERVICE_BUCKET_NAME": Match.any_value(),
                }),
            },
        })

    def test_service_bucket(self, template):
        template.resource_count_is("AWS::S3::Bucket", 1)
        template.has_resource_properties("AWS::S3::Bucket", {
            "BucketName": "test-service-data-bucket",
            "VersioningConfiguration": {"Status": "Enabled"},
        })

    def test_openapi_export_permission(self, template):
        template.has_resource_properties("AWS::IAM::Policy", {
            "PolicyDocument": {
                "Statement": Match.array_with([
                    Match.object_like({
                        "Action": "apigateway:GET",
                        "Effect": "Allow",
                        "Resource": EXPORTS_RESOURCE_ARN,
                    }),
                ]),
            },
        })

    def test_default_authorizer(self, template):
        template.has_resource_properties("AWS::Lambda::Function", {
            "Handler": "template_api.handlers.authorizer_handler.lambda_handler",
            "Environment": {"Variables": Match.object_like({"AUTH_VERIFIERS_JSON": "[]"})},
        })

    def test_no_vanity_domain(self, api_stack, template):
        assert api_stack.api.vanity_domain is None
        template.resource_count_is("AWS::Route53::RecordSet", 0)

    def test_report_table(self, api_stack):
        summary = api_stack.api.summary_markdown()

        rows = [line for line in summary.splitlines() if line.startswith("| get")]
        assert rows == [
            "| getStatus | GET | /status |",
            "| getOpenAPISpec | GET | /openapi |",
        ]
