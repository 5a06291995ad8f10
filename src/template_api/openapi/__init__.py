"""
OpenAPI REST API construct library.

Definition-time building blocks for an OpenAPI compliant REST API on API
Gateway and AWS Lambda:

- routes: RouteMetadata, ModelDefinition, ResponseDefinition, REST signatures
- endpoint: OpenAPIFunction and Endpoint
- model_factory: ModelFactory, at most one model per schema id
- route_tree: RouteTree, memoized path to resource map
- rest_api: OpenAPIRestAPI composite
"""

from template_api.openapi.basic_models import BASIC_ARRAY, BASIC_MODELS, BASIC_OBJECT, BASIC_STRING_ARRAY
from template_api.openapi.config import FunctionDefaults, RestApiConfig
from template_api.openapi.endpoint import Endpoint, OpenAPIFunction
from template_api.openapi.model_factory import ModelFactory
from template_api.openapi.rest_api import OpenAPIRestAPI
from template_api.openapi.route_tree import RouteTree
from template_api.openapi.routes import (
    HttpMethod,
    ModelDefinition,
    ResponseDefinition,
    RouteMetadata,
    no_permissions,
    parse_rest_signature,
)

__all__ = [
    "BASIC_ARRAY",
    "BASIC_MODELS",
    "BASIC_OBJECT",
    "BASIC_STRING_ARRAY",
    "Endpoint",
    "FunctionDefaults",
    "HttpMethod",
    "ModelDefinition",
    "ModelFactory",
    "OpenAPIFunction",
    "OpenAPIRestAPI",
    "ResponseDefinition",
    "RestApiConfig",
    "RouteMetadata",
    "RouteTree",
    "no_permissions",
    "parse_rest_signature",
]
