"""
Shared resources for the API.

Add the resources your routes share to this class; it is handed to every
route's grant_permissions callback, which makes it a simple form of
dependency injection. Properties are created on first access so a stack only
contains the resources its routes actually use.
"""

from functools import cached_property

from aws_cdk import RemovalPolicy, Stack
from aws_cdk import aws_s3 as s3


class Resources:
    """Constructs shared between routes."""

    def __init__(self, stack: Stack, service_bucket_name: str):
        self.stack = stack
        self.service_bucket_name = service_bucket_name

    @cached_property
    def service_bucket(self) -> s3.Bucket:
        return s3.Bucket(
            self.stack,
            'ServiceDataBucket',
            bucket_name=self.service_bucket_name,
            removal_policy=RemovalPolicy.DESTROY,
            versioned=True,
        )
