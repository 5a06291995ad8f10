"""
Route metadata for the concrete endpoints of this API.

Create a module per endpoint returning a RouteMetadata, point its
route_entry_point at a handler in template_api.handlers, and add it to
ApiStack.
"""

from template_api.stack.endpoints.openapi_spec import openapi_spec_endpoint
from template_api.stack.endpoints.status import status_endpoint

__all__ = [
    "openapi_spec_endpoint",
    "status_endpoint",
]
