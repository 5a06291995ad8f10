"""Response models specific to this API."""

from aws_cdk.aws_apigateway import JsonSchema, JsonSchemaType, JsonSchemaVersion

from template_api.openapi.routes import ModelDefinition

STATUS_RESPONSE = ModelDefinition(
    schema_id='StatusResponse',
    schema=JsonSchema(
        schema=JsonSchemaVersion.DRAFT7,
        title='Status',
        type=JsonSchemaType.OBJECT,
        properties={
            'deploymentTime': JsonSchema(
                type=JsonSchemaType.STRING,
                description='The UTC timestamp representing the last time the server was updated',
            ),
        },
        required=['deploymentTime'],
    ),
)
