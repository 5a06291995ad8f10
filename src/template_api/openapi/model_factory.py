"""
Model factory for OpenAPI request and response models.

API Gateway models are registered on the REST API and shared between
endpoints. CloudFormation forbids two models with the same name in one stack,
so the factory keeps at most one model per schema id and hands the cached
model back on every later request.
"""

from typing import Dict

from aws_cdk import aws_apigateway as apigw
from constructs import Construct

from template_api.exceptions import ConfigurationError
from template_api.openapi.routes import ModelDefinition

MODEL_SUFFIX = 'Model'


class ModelFactory:
    """Creates or reuses JSON schema models on one REST API."""

    def __init__(self, scope: Construct, rest_api: apigw.IRestApi):
        self.scope = scope
        self.rest_api = rest_api
        self._model_cache: Dict[str, apigw.Model] = {}

    def create(self, schema_id: str, schema: apigw.JsonSchema) -> apigw.Model:
        """
        Return the model for schema_id, creating it on first use.

        The model is named '{schema_id}Model'.

        Raises:
            ConfigurationError: schema_id is empty or already contains 'Model'
        """
        model_name = f'{schema_id}{MODEL_SUFFIX}'
        if not schema_id:
            raise ConfigurationError('Model schema id must not be empty')
        if MODEL_SUFFIX in schema_id:
            raise ConfigurationError(
                f'Ambiguous model name; avoid the use of {MODEL_SUFFIX} in schema id, '
                f'model names are suffixed with {MODEL_SUFFIX}: {schema_id} becomes {model_name}'
            )

        model = self._model_cache.get(schema_id)
        if model is None:
            model = apigw.Model(
                self.scope,
                model_name,
                rest_api=self.rest_api,
                content_type='application/json',
                model_name=model_name,
                schema=schema,
            )
            self._model_cache[schema_id] = model

        return model

    def create_from(self, definition: ModelDefinition) -> apigw.Model:
        return self.create(definition.schema_id, definition.schema)

    def __contains__(self, schema_id: str) -> bool:
        return schema_id in self._model_cache

    def __len__(self) -> int:
        return len(self._model_cache)
