"""Container web application infrastructure.

Declares the registry, image deployment, Lambda function, API Gateway, ACM
certificate and Route53 records that serve a containerized web application
under a custom domain.
"""

from .build_context import BuildContextError, resolve_build_context
from .outputs import OutputManager
from .web_app_stack import ContainerWebAppStack, ContainerWebAppStackProps

__all__ = [
    "BuildContextError",
    "ContainerWebAppStack",
    "ContainerWebAppStackProps",
    "OutputManager",
    "resolve_build_context",
]
