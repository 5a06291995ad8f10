#!/usr/bin/env python3
"""CDK app entry point: `cdk synth` / `cdk deploy`."""

import aws_cdk as cdk

from template_api.stack import ApiStack
from template_api.stack.env_vars import get_deployment_env_vars

env_vars = get_deployment_env_vars()

app = cdk.App()
ApiStack(
    app,
    'TemplateApiStack',
    env_vars.to_stack_parameters(),
    env=cdk.Environment(
        account=env_vars.CDK_DEFAULT_ACCOUNT,
        region=env_vars.CDK_DEFAULT_REGION,
    ),
)
app.synth()
