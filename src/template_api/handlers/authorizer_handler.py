"""
Default request authorizer.

Verifies the bearer token in the Authorization header against the verifiers
listed in AUTH_VERIFIERS_JSON and answers API Gateway with an IAM policy:
allow every route for a verified caller, deny every route otherwise.
"""

from functools import lru_cache
from typing import Any, Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import event_source
from aws_lambda_powertools.utilities.data_classes.api_gateway_authorizer_event import (
    APIGatewayAuthorizerRequestEvent,
    APIGatewayAuthorizerResponse,
    APIGatewayRouteArn,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from template_api.exceptions import AuthenticationError
from template_api.handlers.models.env_vars import get_authorizer_env_vars
from template_api.handlers.utils.observability import logger, metrics, tracer
from template_api.models.verifier import load_verifiers
from template_api.security.auth import VerifierChain, extract_bearer_token

ANONYMOUS_PRINCIPAL = 'anonymous'


@lru_cache(maxsize=4)
def get_verifier_chain(verifiers_json: str) -> VerifierChain:
    # one chain per verifier list keeps the JWKS caches warm across invocations
    return VerifierChain(load_verifiers(verifiers_json))


def build_policy(
    arn: APIGatewayRouteArn,
    principal_id: str,
    allow: bool,
    authorizer_context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    policy = APIGatewayAuthorizerResponse(
        principal_id=principal_id,
        region=arn.region,
        aws_account_id=arn.aws_account_id,
        api_id=arn.api_id,
        stage=arn.stage,
        context=authorizer_context,
    )
    if allow:
        policy.allow_all_routes()
    else:
        policy.deny_all_routes()
    return policy.asdict()


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context
@event_source(data_class=APIGatewayAuthorizerRequestEvent)
def lambda_handler(event: APIGatewayAuthorizerRequestEvent, context: LambdaContext) -> Dict[str, Any]:
    arn = event.parsed_arn

    token = extract_bearer_token(event.headers)
    if token is None:
        logger.warning('Request has no Authorization token', extra={'method_arn': event.method_arn})
        metrics.add_metric(name='AuthorizationDenied', unit=MetricUnit.Count, value=1)
        return build_policy(arn, ANONYMOUS_PRINCIPAL, allow=False)

    verifiers_json = get_authorizer_env_vars().AUTH_VERIFIERS_JSON
    try:
        verifier_chain = get_verifier_chain(verifiers_json)
    except ValueError as exc:
        # pydantic ValidationError is a ValueError
        logger.exception('AUTH_VERIFIERS_JSON is not a valid verifier list', extra={'error': str(exc)})
        metrics.add_metric(name='AuthorizationDenied', unit=MetricUnit.Count, value=1)
        return build_policy(arn, ANONYMOUS_PRINCIPAL, allow=False)

    try:
        claims = verifier_chain.verify(token)
    except AuthenticationError as exc:
        logger.warning('Token rejected', extra={'error': str(exc), 'method_arn': event.method_arn})
        metrics.add_metric(name='AuthorizationDenied', unit=MetricUnit.Count, value=1)
        return build_policy(arn, ANONYMOUS_PRINCIPAL, allow=False)

    metrics.add_metric(name='AuthorizationAllowed', unit=MetricUnit.Count, value=1)
    return build_policy(arn, claims.sub, allow=True, authorizer_context=claims.authorizer_context())
