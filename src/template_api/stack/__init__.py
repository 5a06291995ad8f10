"""
CDK composition root: deployment parameters, shared resources, the concrete
endpoints and the ApiStack that wires them into an OpenAPIRestAPI.
"""

from template_api.stack.api_stack import ApiStack
from template_api.stack.parameters import StackParameters
from template_api.stack.resources import Resources

__all__ = [
    "ApiStack",
    "Resources",
    "StackParameters",
]
