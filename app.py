"""Entry point for the container web application infrastructure.

This module synthesizes the AWS CDK stack that hosts a containerized web
application on Lambda behind API Gateway, an ACM certificate and a Route53
custom domain.

Environment Configuration Options:
    1. AWS Named Profile:
       WEBAPP_AWS_PROFILE: Named profile from AWS credentials file

    2. Direct Environment Variables:
       CDK_DEFAULT_REGION: Target AWS region for deployment
       CDK_DEFAULT_ACCOUNT: Target AWS account for deployment

Any ``WebAppSettings`` field can also be overridden with CDK context, e.g.
``cdk deploy -c host_name=app -c stage=prod``.
"""

import logging
import os
from pathlib import Path
from typing import Any

import boto3
from aws_cdk import App, Environment

from stacks.configs.settings import WebAppSettings  # type: ignore
from stacks.web_app import (  # type: ignore
    ContainerWebAppStack,
    ContainerWebAppStackProps,
    resolve_build_context,
)

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent


def create_deployment_environment(settings: WebAppSettings) -> Environment:
    """Creates CDK Environment from settings.

    The hosted zone lookup needs a concrete account and region, so both are
    resolved here rather than left environment-agnostic.

    Args:
        settings: Settings containing profile and region details.

    Returns:
        CDK Environment with account and region resolved.
    """
    if settings.aws_profile:
        session = boto3.Session(profile_name=settings.aws_profile)
        sts = session.client("sts")
        account = sts.get_caller_identity()["Account"]
        return Environment(
            account=account,
            region=session.region_name or settings.aws_region,
        )

    account = os.environ.get("CDK_DEFAULT_ACCOUNT")
    if not account:
        logger.warning(
            "CDK_DEFAULT_ACCOUNT is not set; the hosted zone lookup will fail",
        )
    return Environment(
        account=account,
        region=os.environ.get("CDK_DEFAULT_REGION", settings.aws_region),
    )


def resolve_settings(app: App) -> WebAppSettings:
    """Merge CDK context overrides on top of environment-based settings."""
    overrides = {
        field: app.node.try_get_context(field) for field in WebAppSettings.model_fields
    }
    return WebAppSettings.load(**overrides)


def add_web_app_stack(app: App, settings: WebAppSettings) -> ContainerWebAppStack:
    """Adds the web application stack to ``app``.

    Args:
        app: CDK application receiving the stack.
        settings: Resolved deployment settings.

    Returns:
        The declared stack.

    Raises:
        BuildContextError: If the configured build context is unusable.
        pydantic.ValidationError: If the domain settings are invalid.
    """
    env = create_deployment_environment(settings)
    build_context = resolve_build_context(
        settings.build_context,
        dockerfile=settings.dockerfile,
        base_dir=PROJECT_ROOT,
    )

    return ContainerWebAppStack(
        app,
        settings.stack_name,
        props=ContainerWebAppStackProps(
            domain=settings.domain_config(),
            build_context=build_context,
            dockerfile=settings.dockerfile,
            image_tag=settings.image_tag,
            function_memory_mb=settings.function_memory_mb,
            function_timeout_seconds=settings.function_timeout_seconds,
            enable_nag_checks=settings.enable_nag_checks,
        ),
        env=env,
        description=(
            "Containerized web application on Lambda behind a custom API Gateway domain"
        ),
        tags={
            "Environment": settings.stage,
            "Application": settings.app_name,
            "ManagedBy": "AWS-CDK",
        },
    )


def initialize_app(
    settings: WebAppSettings | None = None,
    context: dict[str, Any] | None = None,
) -> App:
    """Initializes and configures the CDK application.

    Args:
        settings: Optional pre-built settings; read from context and
            environment when omitted.
        context: Optional CDK context, e.g. cached lookup values.

    Returns:
        Configured CDK App instance ready for synthesis.
    """
    app = App(context=context)
    add_web_app_stack(app, settings or resolve_settings(app))
    return app


def main() -> None:
    """Main execution entry point."""
    app = App()
    settings = resolve_settings(app)
    logging.basicConfig(level=settings.log_level, format=settings.log_format)

    add_web_app_stack(app, settings)
    app.synth()


if __name__ == "__main__":
    main()
