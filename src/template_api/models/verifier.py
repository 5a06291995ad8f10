"""
Identity token verifier model.

A verifier names one accepted Cognito user pool and app client. A list of
verifiers configures the default request authorizer; the list travels to the
authorizer function as JSON in its AUTH_VERIFIERS_JSON environment variable,
using camelCase keys.
"""

from typing import Annotated, List, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class Verifier(BaseModel):
    """One accepted identity token issuer."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: Annotated[str, Field(
        min_length=1,
        description='Human readable name for the verifier',
        examples=['ConnectedWebDev'],
    )]

    user_pool_id: Annotated[str, Field(
        pattern=r'^[a-z0-9-]+_[0-9A-Za-z]+$',
        description='Cognito user pool id, prefixed with its region',
        examples=['us-east-1_123456789'],
    )]

    token_use: Annotated[Literal['id', 'access'], Field(
        description='Which class of token the verifier accepts',
    )]

    client_id: Annotated[str, Field(
        min_length=1,
        description='Cognito app client id the token must be issued to',
        examples=['abcd1234ghij5678klmn9012'],
    )]

    oauth_url: Annotated[str, Field(
        description='Base URL of the hosted OAuth domain for the user pool',
        examples=['https://connected-web.auth.us-east-1.amazoncognito.com'],
    )]

    @property
    def region(self) -> str:
        return self.user_pool_id.split('_', 1)[0]

    @property
    def issuer(self) -> str:
        return f'https://cognito-idp.{self.region}.amazonaws.com/{self.user_pool_id}'

    @property
    def jwks_url(self) -> str:
        return f'{self.issuer}/.well-known/jwks.json'


VerifierList = TypeAdapter(List[Verifier])


def dump_verifiers(verifiers: List[Verifier]) -> str:
    """Serialize verifiers to the JSON passed into the authorizer environment."""
    return VerifierList.dump_json(list(verifiers), by_alias=True).decode('utf-8')


def load_verifiers(raw: str) -> List[Verifier]:
    """Parse verifiers from AUTH_VERIFIERS_JSON; an empty string means none."""
    if not raw.strip():
        return []
    return VerifierList.validate_json(raw)
