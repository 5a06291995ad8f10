"""
Shared Models Package

Pydantic models used both at definition time (by the CDK stack) and at request
time (by the Lambda handlers). Nothing in this package imports aws_cdk.
"""

from .status import StatusInfo
from .verifier import Verifier, VerifierList, dump_verifiers, load_verifiers

__all__ = [
    "StatusInfo",
    "Verifier",
    "VerifierList",
    "dump_verifiers",
    "load_verifiers",
]
