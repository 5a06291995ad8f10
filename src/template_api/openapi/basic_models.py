"""
Basic OpenAPI models shared between endpoints.

These cover the most common shapes of JSON responses. Define models that
reflect your own API next to the endpoints that use them, as ModelDefinition
values, and they will be registered through the same ModelFactory.
"""

from aws_cdk.aws_apigateway import JsonSchema, JsonSchemaType, JsonSchemaVersion

from template_api.openapi.routes import ModelDefinition

BASIC_OBJECT = ModelDefinition(
    schema_id='BasicObject',
    schema=JsonSchema(
        schema=JsonSchemaVersion.DRAFT7,
        title='Basic Object',
        description='A basic JSON object with key value pairs',
        type=JsonSchemaType.OBJECT,
        properties={},
        additional_properties=True,
    ),
)

BASIC_ARRAY = ModelDefinition(
    schema_id='BasicArray',
    schema=JsonSchema(
        schema=JsonSchemaVersion.DRAFT7,
        title='Basic Array of Objects',
        type=JsonSchemaType.ARRAY,
        items=JsonSchema(
            type=JsonSchemaType.OBJECT,
            properties={},
            additional_properties=True,
        ),
    ),
)

BASIC_STRING_ARRAY = ModelDefinition(
    schema_id='BasicStringArray',
    schema=JsonSchema(
        schema=JsonSchemaVersion.DRAFT7,
        title='Basic Array of Strings',
        type=JsonSchemaType.ARRAY,
        items=JsonSchema(type=JsonSchemaType.STRING),
    ),
)

BASIC_MODELS = (BASIC_OBJECT, BASIC_ARRAY, BASIC_STRING_ARRAY)
