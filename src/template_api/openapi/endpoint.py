"""
Deployable units for OpenAPI endpoints.

An OpenAPIFunction owns the Lambda function behind one operation together
with the method options that document it; an Endpoint pairs it with the HTTP
method and path it is bound to.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from aws_cdk import Duration
from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_lambda as lambda_
from constructs import Construct

from template_api.openapi.config import FunctionDefaults
from template_api.openapi.routes import HttpMethod

RUNTIME = lambda_.Runtime.PYTHON_3_12

ASSET_EXCLUDES = [
    '**/__pycache__',
    '**/*.pyc',
    '*.egg-info',
]


def source_code(defaults: FunctionDefaults) -> lambda_.Code:
    """Code asset shared by every function of one REST API."""
    return lambda_.Code.from_asset(str(defaults.code_path), exclude=ASSET_EXCLUDES)


class OpenAPIFunction:
    """A Lambda function and the API Gateway method options that describe it."""

    def __init__(self, operation_id: str, function: Optional[lambda_.IFunction] = None):
        self.operation_id = operation_id
        self.function = function
        self.method_responses: List[apigw.MethodResponse] = []
        self.request_models: Dict[str, apigw.IModel] = {}
        self.request_parameters: Dict[str, bool] = {}

    def create_lambda(
        self,
        scope: Construct,
        entry_point: str,
        lambda_config: Mapping[str, Any],
        defaults: FunctionDefaults,
        code: lambda_.Code,
        layers: Sequence[lambda_.ILayerVersion] = (),
    ) -> lambda_.Function:
        """
        Create the Lambda function for this operation.

        Route level lambda_config keys override the defaults; its environment
        is merged over the Powertools settings rather than replacing them.

        Args:
            scope: Construct scope for the function
            entry_point: Dotted handler path inside the code asset
            lambda_config: aws_lambda.Function keyword overrides
            defaults: Memory, timeout and log level defaults
            code: Code asset containing the handler
            layers: Dependency layers

        Returns:
            The created function
        """
        overrides = dict(lambda_config)
        environment = {
            'POWERTOOLS_SERVICE_NAME': self.operation_id,
            'LOG_LEVEL': defaults.log_level,
            **overrides.pop('environment', {}),
        }

        props: Dict[str, Any] = {
            'runtime': RUNTIME,
            'handler': entry_point,
            'code': code,
            'memory_size': defaults.memory_size,
            'timeout': Duration.seconds(defaults.timeout_seconds),
            'layers': list(layers),
        }
        props.update(overrides)

        function = lambda_.Function(scope, self.operation_id, environment=environment, **props)
        self.function = function
        return function

    def add_method_response(self, method_response: apigw.MethodResponse) -> None:
        self.method_responses.append(method_response)

    def add_request_model(self, model: apigw.IModel, content_type: str = 'application/json') -> None:
        self.request_models[content_type] = model

    def add_request_parameter(self, parameter: str, required: bool) -> None:
        self.request_parameters[parameter] = required

    def method_options(self) -> Dict[str, Any]:
        """Keyword arguments for IResource.add_method."""
        options: Dict[str, Any] = {'operation_name': self.operation_id}
        if self.method_responses:
            options['method_responses'] = list(self.method_responses)
        if self.request_models:
            options['request_models'] = dict(self.request_models)
        if self.request_parameters:
            options['request_parameters'] = dict(self.request_parameters)
        return options


@dataclass
class Endpoint:
    """An HTTP method and path bound to an OpenAPIFunction."""

    http_method: HttpMethod
    path: str
    function: OpenAPIFunction

    @property
    def operation_id(self) -> str:
        return self.function.operation_id
