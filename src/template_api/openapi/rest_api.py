"""
OpenAPI REST API composite.

A composite construct for an API Gateway RestApi, its request authorizer, its
execution role and its Lambda backed endpoints, for use with an OpenAPI
compliant REST API.

Example:
    api = OpenAPIRestAPI(stack, 'Example API', RestApiConfig(
        description='Example API - created via AWS CDK',
        sub_domain='my-api',
        hosted_zone_domain='example.com',
        verifiers=[Verifier(
            name='ExampleCognitoUserPool',
            user_pool_id='us-east-1_123456789',
            token_use='access',
            client_id='abcd1234ghij5678klmn9012',
            oauth_url='https://example.auth.us-east-1.amazoncognito.com',
        )],
    ), shared_resources)
    api.register_endpoints([status_endpoint(...)]).report()
"""

from typing import Any, Iterable, List, Optional, Sequence

from aws_cdk import CfnOutput, Duration
from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_
from aws_cdk import aws_route53 as route53
from aws_lambda_powertools import Logger
from constructs import Construct

from template_api.exceptions import ConfigurationError, ExternalProviderError
from template_api.models.verifier import dump_verifiers
from template_api.openapi.config import DEFAULT_AUTHORIZER_ENTRY_POINT, FunctionDefaults, RestApiConfig
from template_api.openapi.endpoint import RUNTIME, Endpoint, OpenAPIFunction, source_code
from template_api.openapi.model_factory import ModelFactory
from template_api.openapi.route_tree import RouteTree
from template_api.openapi.routes import HttpMethod, ModelDefinition, ResponseDefinition, RouteMetadata

logger = Logger(service='openapi-rest-api')

AUTHORIZER_MEMORY_MB = 256
AUTHORIZER_TIMEOUT_SECONDS = 5
STAGE_NAME = 'v1'


class OpenAPIRestAPI(Construct):
    """
    RestApi, authorizer, execution role and endpoints for one API.

    shared_resources is handed to every route's grant_permissions callback;
    it can be any object, and acts as simple dependency injection for
    constructs shared between routes.
    """

    def __init__(self, scope: Construct, construct_id: str, config: RestApiConfig, shared_resources: Any):
        self._validate_config(config)
        super().__init__(scope, construct_id)

        self.config = config
        self.name = construct_id
        self.description = config.description
        self.shared_resources = shared_resources
        self.endpoints: List[Endpoint] = []
        self.vanity_domain: Optional[str] = None
        self.cname_record: Optional[route53.CnameRecord] = None

        self._code = source_code(config.function_defaults)
        self._layers = self._create_layers(config.function_defaults)

        self.authorizer_function = self._create_authorizer_function(config)
        self.rest_api = self._create_rest_api(construct_id, config)
        self.execution_role = iam.Role(
            self,
            'ApiExecutionRole',
            assumed_by=iam.ServicePrincipal('apigateway.amazonaws.com'),
        )
        self.model_factory = ModelFactory(self, self.rest_api)
        self.route_tree = RouteTree(self.rest_api.root)

        if config.create_cname_record:
            self.cname_record = self._create_vanity_url(config)
            api_url = CfnOutput(
                self,
                'ApiUrl',
                value=f'https://{self.vanity_domain}',
                description='The registered URL of the API',
            )
            logger.info('Registered URL of the API', extra={'url': api_url.value})

    @staticmethod
    def _validate_config(config: RestApiConfig) -> None:
        if config.authorizer_arn is not None and config.authorizer_entry_point is not None:
            raise ConfigurationError(
                'OpenAPIRestAPI: authorizer_arn and authorizer_entry_point are mutually exclusive; '
                'please specify only one.'
            )
        if config.authorizer_arn is not None and config.verifiers:
            raise ConfigurationError(
                'OpenAPIRestAPI: authorizer_arn and configurable verifiers are mutually exclusive; '
                'please exclude verifiers from your config or switch to the default authorizer '
                'by clearing authorizer_arn.'
            )

    def _create_layers(self, defaults: FunctionDefaults) -> List[lambda_.ILayerVersion]:
        layer_path = defaults.layer_path
        if layer_path is None or not layer_path.is_dir():
            logger.warning(
                'Dependency layer not found; run scripts/build.py before deploying',
                extra={'layer_path': str(layer_path)},
            )
            return []

        layer = lambda_.LayerVersion(
            self,
            'DependenciesLayer',
            code=lambda_.Code.from_asset(str(layer_path)),
            compatible_runtimes=[RUNTIME],
            description='Runtime dependencies for the API functions',
        )
        return [layer]

    def _create_authorizer_function(self, config: RestApiConfig) -> lambda_.IFunction:
        if config.authorizer_arn is not None:
            return lambda_.Function.from_function_arn(self, 'ExistingAPIAuthorizer', config.authorizer_arn)

        return lambda_.Function(
            self,
            'PrivateAPIAuthorizer',
            runtime=RUNTIME,
            handler=config.authorizer_entry_point or DEFAULT_AUTHORIZER_ENTRY_POINT,
            code=self._code,
            layers=self._layers,
            memory_size=AUTHORIZER_MEMORY_MB,
            timeout=Duration.seconds(AUTHORIZER_TIMEOUT_SECONDS),
            environment={
                'AUTH_VERIFIERS_JSON': dump_verifiers(config.verifiers),
                'POWERTOOLS_SERVICE_NAME': 'api-authorizer',
                'LOG_LEVEL': config.function_defaults.log_level,
            },
        )

    def _create_rest_api(self, construct_id: str, config: RestApiConfig) -> apigw.RestApi:
        request_authorizer = apigw.RequestAuthorizer(
            self,
            'PrivateApiRequestAuthorizer',
            handler=self.authorizer_function,
            identity_sources=[apigw.IdentitySource.header('Authorization')],
        )

        return apigw.RestApi(
            self,
            construct_id,
            rest_api_name=construct_id,
            description=config.description,
            deploy_options=apigw.StageOptions(stage_name=STAGE_NAME),
            default_method_options=apigw.MethodOptions(authorizer=request_authorizer),
            default_cors_preflight_options=apigw.CorsOptions(
                allow_origins=apigw.Cors.ALL_ORIGINS,
                allow_methods=apigw.Cors.ALL_METHODS,
                allow_credentials=True,
                allow_headers=['Authorization', 'content-type'],
            ),
        )

    def _create_vanity_url(self, config: RestApiConfig) -> route53.CnameRecord:
        vanity_domain = config.vanity_domain
        try:
            hosted_zone = route53.HostedZone.from_lookup(
                self,
                'HostedZone',
                domain_name=config.hosted_zone_domain,
            )
            certificate = acm.Certificate(
                self,
                'VanityDomainCertificate',
                domain_name=vanity_domain,
                validation=acm.CertificateValidation.from_dns(hosted_zone),
            )
            domain = self.rest_api.add_domain_name(
                f'{config.sub_domain}-domain-name',
                domain_name=vanity_domain,
                certificate=certificate,
            )
            cname_record = route53.CnameRecord(
                self,
                'cname-record',
                domain_name=domain.domain_name_alias_domain_name,
                zone=hosted_zone,
                record_name=vanity_domain,
                ttl=Duration.minutes(5),
            )
        except RuntimeError as exc:
            raise ExternalProviderError(f'Unable to register vanity domain {vanity_domain}: {exc}') from exc

        self.vanity_domain = vanity_domain
        return cname_record

    def get(self, path: str, function: OpenAPIFunction) -> 'OpenAPIRestAPI':
        return self._add_endpoint(Endpoint(HttpMethod.GET, path, function))

    def post(self, path: str, function: OpenAPIFunction) -> 'OpenAPIRestAPI':
        return self._add_endpoint(Endpoint(HttpMethod.POST, path, function))

    def put(self, path: str, function: OpenAPIFunction) -> 'OpenAPIRestAPI':
        return self._add_endpoint(Endpoint(HttpMethod.PUT, path, function))

    def delete(self, path: str, function: OpenAPIFunction) -> 'OpenAPIRestAPI':
        return self._add_endpoint(Endpoint(HttpMethod.DELETE, path, function))

    def _add_endpoint(self, endpoint: Endpoint) -> 'OpenAPIRestAPI':
        function = endpoint.function.function
        if function is None:
            logger.warning(
                'Supplied endpoint does not have a lambda associated; skipping',
                extra={'http_method': endpoint.http_method.value, 'path': endpoint.path},
            )
            return self

        resource = self.route_tree.ensure_resource(endpoint.path)

        self.execution_role.add_to_policy(iam.PolicyStatement(
            effect=iam.Effect.ALLOW,
            resources=[function.function_arn],
            actions=['lambda:InvokeFunction'],
        ))

        resource.add_method(
            endpoint.http_method.value,
            apigw.LambdaIntegration(function, proxy=True, credentials_role=self.execution_role),
            **endpoint.function.method_options(),
        )
        self.endpoints.append(endpoint)
        return self

    def _method_response(self, response: ResponseDefinition) -> apigw.MethodResponse:
        response_models = {
            content_type: self.model_factory.create_from(definition)
            for content_type, definition in response.response_models.items()
        }
        return apigw.MethodResponse(
            status_code=response.status_code_key,
            response_parameters=dict(response.response_parameters),
            response_models=response_models or None,
        )

    def register_endpoint(self, metadata: RouteMetadata) -> None:
        """
        Materialize one route: resource, models, function, grants and method binding.

        Models and the path are resolved before the function is created, and
        a function whose grants fail is removed again, so a failed route
        leaves no Lambda behind.

        Raises:
            UnsupportedMethodError: the REST signature uses an unsupported verb
            InvalidPathError: the path cannot be placed in the resource tree
            ConfigurationError: a model schema id is ambiguous
        """
        http_method, path = metadata.parse_signature()

        method_responses = [self._method_response(response) for response in metadata.method_responses]
        request_models = {
            content_type: self.model_factory.create_from(definition)
            for content_type, definition in metadata.method_request_models.items()
        }
        self.route_tree.ensure_resource(path)

        function = OpenAPIFunction(metadata.operation_id)
        handler = function.create_lambda(
            self,
            metadata.route_entry_point,
            metadata.lambda_config,
            self.config.function_defaults,
            self._code,
            self._layers,
        )
        try:
            metadata.grant_permissions(self, handler, self.shared_resources)
        except Exception:
            self.node.try_remove_child(metadata.operation_id)
            raise

        for method_response in method_responses:
            function.add_method_response(method_response)

        for content_type, model in request_models.items():
            function.add_request_model(model, content_type)

        for parameter, required in metadata.request_parameters.items():
            function.add_request_parameter(parameter, required)

        self._add_endpoint(Endpoint(http_method, path, function))

    def register_endpoints(self, endpoints: Iterable[RouteMetadata]) -> 'OpenAPIRestAPI':
        """
        Register every route; a failing route is logged and skipped.

        Inspect the logs (or self.endpoints) to find routes that could not be
        registered; no exception reaches the caller for a single bad route.

        Raises:
            ConfigurationError: routes were supplied but the API still has no endpoint
        """
        endpoints = list(endpoints)
        for metadata in endpoints:
            try:
                self.register_endpoint(metadata)
            except Exception as exc:
                logger.exception(
                    f'Unable to create endpoint for {metadata.operation_id} at {metadata.rest_signature}; Error: {exc}',
                    extra={
                        'operation_id': metadata.operation_id,
                        'rest_signature': metadata.rest_signature,
                        'error': str(exc),
                    },
                )
        if endpoints and not self.endpoints:
            raise ConfigurationError(
                f'OpenAPIRestAPI: none of the {len(endpoints)} supplied routes could be registered; '
                'the API has no methods for its authorizer to protect. See the logged errors above.'
            )
        return self

    def register_models(self, definitions: Sequence[ModelDefinition]) -> 'OpenAPIRestAPI':
        """Register shared models up front so they appear in the OpenAPI export."""
        for definition in definitions:
            self.model_factory.create_from(definition)
        return self

    def summary_markdown(self) -> str:
        registered_url = f'https://{self.vanity_domain}' if self.vanity_domain else 'no-vanity-url-registered'
        lines = [
            f'# {self.name}',
            '',
            self.description,
            '',
            f'Registered URL: {registered_url}',
            '',
            '## Endpoints',
            '',
            '| Operation ID | HTTP Method | Path |',
            '| --- | --- | --- |',
            *[
                f'| {endpoint.operation_id} | {endpoint.http_method.value} | {endpoint.path} |'
                for endpoint in self.endpoints
            ],
            '',
        ]
        return '\n'.join(lines)

    def report(self) -> None:
        """Log the resolved routes and append the job summary when configured."""
        logger.info('OpenAPIRestAPI Routes', extra={'routes': self.route_tree.paths})

        summary_path = self.config.step_summary_path
        if summary_path is None:
            return

        summary = self.summary_markdown()
        logger.info('Markdown for Github job summary', extra={'summary': summary})
        try:
            with open(summary_path, 'a', encoding='utf-8') as summary_file:
                summary_file.write(summary)
        except OSError as exc:
            logger.error('Unable to produce Github step summary', extra={'error': str(exc), 'path': str(summary_path)})
