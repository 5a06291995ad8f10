"""
Error taxonomy for the Template API.

Definition-time errors are raised while the CDK app builds the stack:

- ConfigurationError: unsatisfiable or ambiguous setup; aborts the build
- UnsupportedMethodError: unknown HTTP verb in a REST signature; fatal to one endpoint
- InvalidPathError: malformed route path; fatal to one endpoint
- ExternalProviderError: DNS, certificate or lookup declaration failures

Runtime errors are raised inside deployed handlers and converted into JSON
responses before they leave the handler.
"""


class TemplateApiError(Exception):
    """Base error for the Template API."""
    pass


class ConfigurationError(TemplateApiError):
    """Mutually exclusive or ambiguous configuration."""
    pass


class UnsupportedMethodError(TemplateApiError):
    """REST signature uses an HTTP method that is not supported."""
    pass


class InvalidPathError(TemplateApiError):
    """Route path cannot be placed in the resource tree."""
    pass


class ExternalProviderError(TemplateApiError):
    """A provider level declaration (hosted zone, certificate, domain) failed."""
    pass


class HandlerRuntimeError(TemplateApiError):
    """Failure inside a deployed handler, reported back as a JSON envelope."""
    pass


class AuthenticationError(TemplateApiError):
    """Base authentication error."""
    pass


class InvalidTokenError(AuthenticationError):
    """Token is invalid, expired or was not issued for a configured verifier."""
    pass
