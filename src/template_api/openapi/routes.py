"""
Route metadata for OpenAPI endpoints.

Every endpoint in the API is described by one RouteMetadata value: the REST
signature it answers to, the Lambda handler that serves it, the IAM grants the
handler needs and the request/response models that document it in the
exported OpenAPI spec.

Bringing all the route metadata into one place makes the whole API visible at
a glance, and keeps adding a route down to writing one metadata value and one
handler.
"""

from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Any, Callable, Dict, Generic, List, Mapping, Tuple, TypeVar, Union

from aws_cdk import aws_lambda as lambda_
from aws_cdk.aws_apigateway import JsonSchema
from constructs import Construct

from template_api.exceptions import InvalidPathError, UnsupportedMethodError

# Shared resources object handed to grant_permissions callbacks
R = TypeVar('R')

GrantPermissions = Callable[[Construct, lambda_.Function, Any], None]

DEFAULT_RESPONSE_PARAMETERS: Dict[str, bool] = {
    'method.response.header.Content-Type': True,
    'method.response.header.Access-Control-Allow-Origin': True,
    'method.response.header.Access-Control-Allow-Credentials': True,
}


class HttpMethod(str, Enum):
    """HTTP methods accepted in a REST signature."""

    GET = 'GET'
    POST = 'POST'
    PUT = 'PUT'
    DELETE = 'DELETE'


def parse_rest_signature(signature: str) -> Tuple[HttpMethod, str]:
    """
    Split a REST signature into its HTTP method and path.

    The format is always '{httpMethod} {path}', split on the first space, e.g.
    'GET /status' or 'POST /users/{userId}/profile'.

    Args:
        signature: REST signature string

    Returns:
        Tuple of the HTTP method and the path

    Raises:
        UnsupportedMethodError: method is not one of GET, POST, PUT, DELETE
        InvalidPathError: path is missing or does not start with '/'
    """
    method_key, _, path = signature.partition(' ')
    try:
        method = HttpMethod(method_key)
    except ValueError:
        supported = ', '.join(m.value for m in HttpMethod)
        raise UnsupportedMethodError(
            f'Unsupported HTTP method: {method_key}; supported keys are: {supported}'
        ) from None

    path = path.strip()
    if not path.startswith('/'):
        raise InvalidPathError(f'REST signature path must start with "/": {signature!r}')

    return method, path


def no_permissions(scope: Construct, function: lambda_.Function, resources: Any) -> None:
    """Grant callback for routes that need no access beyond invocation."""
    return None


@dataclass(frozen=True)
class ModelDefinition:
    """A JSON schema to be registered once as an API Gateway model."""

    schema_id: str
    schema: JsonSchema


@dataclass(frozen=True)
class ResponseDefinition:
    """
    Method response documented in the OpenAPI spec.

    Response models are declared by definition and resolved through the
    ModelFactory when the route is bound, so routes sharing a schema id share
    one model resource.
    """

    status_code: Union[HTTPStatus, int, str] = HTTPStatus.OK
    response_models: Mapping[str, ModelDefinition] = field(default_factory=dict)
    response_parameters: Mapping[str, bool] = field(
        default_factory=lambda: dict(DEFAULT_RESPONSE_PARAMETERS)
    )

    @property
    def status_code_key(self) -> str:
        return str(int(self.status_code))


@dataclass(frozen=True)
class RouteMetadata(Generic[R]):
    """
    Declarative description of one endpoint.

    Attributes:
        operation_id: Identifies the endpoint in the OpenAPI spec; unique across the API
        rest_signature: '{httpMethod} {path}', e.g. 'GET /status' or 'DELETE /record/{recordId}'
        route_entry_point: Dotted path of the Lambda handler, e.g. 'template_api.handlers.status_handler.lambda_handler'
        grant_permissions: Called with (scope, function, shared resources) to attach per route IAM grants
        lambda_config: aws_lambda.Function keyword overrides; may be empty to trust the defaults
        request_parameters: 'method.request.{querystring|path|header}.{name}' -> required
        method_request_models: Content type -> request body model
        method_responses: Documented responses
    """

    operation_id: str
    rest_signature: str
    route_entry_point: str
    grant_permissions: GrantPermissions = no_permissions
    lambda_config: Mapping[str, Any] = field(default_factory=dict)
    request_parameters: Mapping[str, bool] = field(default_factory=dict)
    method_request_models: Mapping[str, ModelDefinition] = field(default_factory=dict)
    method_responses: List[ResponseDefinition] = field(default_factory=list)

    def parse_signature(self) -> Tuple[HttpMethod, str]:
        return parse_rest_signature(self.rest_signature)
