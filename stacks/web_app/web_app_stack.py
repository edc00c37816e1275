"""Serverless hosting for a containerized web application on a custom domain.

This module declares the complete resource graph for serving a container
image through API Gateway and Lambda behind an ACM-secured custom domain:

    - Route53 hosted zone lookup for the existing apex domain
    - ACM certificate for the fully-qualified name, validated through DNS
    - ECR repository emptied and removed together with the stack
    - Docker image asset built from the local build context
    - Copy of that image into the stack repository under a fixed tag
    - Lambda function running the pushed image tag
    - API Gateway REST API with Lambda proxy integration and custom domain
    - Route53 A alias record and HTTPS service-binding record

The Lambda function references the image by tag rather than by asset, so
CloudFormation cannot infer that the copy has to finish first. The stack adds
that ordering edge explicitly.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import cdk_nag
from aws_cdk import Aspects, Duration, RemovalPolicy, Stack
from aws_cdk import aws_apigateway as apigateway
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_ecr as ecr
from aws_cdk import aws_ecr_assets as ecr_assets
from aws_cdk import aws_lambda as lambda_
from aws_cdk import aws_route53 as route53
from aws_cdk import aws_route53_targets as route53_targets
from cdk_ecr_deployment import DockerImageName, ECRDeployment
from cdk_nag import NagSuppressions
from constructs import Construct

from stacks.configs.domain_config import DomainConfig  # type: ignore

from .constants import (
    BINARY_MEDIA_TYPES,
    DEFAULT_DOCKERFILE,
    DEFAULT_IMAGE_TAG,
    HTTPS_RECORD_VALUES,
    MAX_FUNCTION_TIMEOUT_SECONDS,
)
from .outputs import OutputManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerWebAppStackProps:
    """Configuration properties for the container web application stack.

    Attributes:
        domain: Apex domain and host label served by the application.
        build_context: Resolved directory holding the application Dockerfile.
        dockerfile: Dockerfile name inside the build context.
        image_tag: Tag pushed to the repository and referenced by the function.
        function_memory_mb: Memory size of the Lambda function.
        function_timeout_seconds: Lambda timeout in seconds.
        binary_media_types: Media types API Gateway treats as binary.
        https_record_values: Values of the HTTPS service-binding record.
        enable_nag_checks: Whether to attach AWS Solutions cdk-nag checks.
    """

    domain: DomainConfig
    build_context: Path
    dockerfile: str = DEFAULT_DOCKERFILE
    image_tag: str = DEFAULT_IMAGE_TAG
    function_memory_mb: int = 128
    function_timeout_seconds: int = 3
    binary_media_types: tuple[str, ...] = BINARY_MEDIA_TYPES
    https_record_values: tuple[str, ...] = HTTPS_RECORD_VALUES
    enable_nag_checks: bool = True

    def __post_init__(self):
        """Reject timeouts API Gateway would cut off anyway."""
        if not 1 <= self.function_timeout_seconds <= MAX_FUNCTION_TIMEOUT_SECONDS:
            raise ValueError(
                f"function_timeout_seconds must be between 1 and "
                f"{MAX_FUNCTION_TIMEOUT_SECONDS}, got {self.function_timeout_seconds}",
            )


class ContainerWebAppStack(Stack):
    """AWS CDK stack serving a container image under a custom domain.

    Attributes:
        props: Stack configuration.
        hosted_zone: Existing Route53 zone for the apex domain.
        certificate: ACM certificate for the fully-qualified name.
        repository: ECR repository receiving the application image.
        image_asset: Image built from the build context into the CDK asset repository.
        image_deployment: Copy of the asset image into the repository under the tag.
        function: Lambda function running the pushed image.
        rest_api: API Gateway REST API proxying to the function.
        alias_record: A record aliasing the host name to the API domain.
        https_record: HTTPS record advertising HTTP/2 support.
        output_manager: Manager for consistent output creation.
    """

    props: ContainerWebAppStackProps
    hosted_zone: route53.IHostedZone
    certificate: acm.Certificate
    repository: ecr.Repository
    image_asset: ecr_assets.DockerImageAsset
    image_deployment: ECRDeployment
    function: lambda_.DockerImageFunction
    rest_api: apigateway.LambdaRestApi
    alias_record: route53.ARecord
    https_record: route53.RecordSet
    output_manager: OutputManager

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        props: ContainerWebAppStackProps,
        **kwargs: Any,
    ) -> None:
        """Declares the web application resources in dependency order.

        Args:
            scope: Parent construct scope.
            construct_id: Unique identifier for this stack.
            props: Domain, image and function configuration.
            **kwargs: Additional keyword arguments passed to the Stack.
        """
        super().__init__(scope, construct_id, **kwargs)

        self.props = props
        self.output_manager = OutputManager(self, self.stack_name)

        logger.info(
            "Declaring %s for %s with image tag '%s' from %s",
            self.stack_name,
            props.domain.fqdn,
            props.image_tag,
            props.build_context,
        )

        self._lookup_hosted_zone()
        self._create_certificate()
        self._create_repository()
        self._create_image_deployment()
        self._create_function()
        self._create_rest_api()
        self._create_dns_records()
        self._create_outputs()

        if props.enable_nag_checks:
            self._configure_security_checks()

    def _lookup_hosted_zone(self) -> None:
        """Look up the pre-existing hosted zone of the apex domain.

        The zone is referenced, never owned, so stack deletion leaves it in place.
        """
        self.hosted_zone = route53.HostedZone.from_lookup(
            self,
            "HostedZone",
            domain_name=self.props.domain.apex_domain,
        )

    def _create_certificate(self) -> None:
        self.certificate = acm.Certificate(
            self,
            "Certificate",
            domain_name=self.props.domain.fqdn,
            validation=acm.CertificateValidation.from_dns(self.hosted_zone),
        )

    def _create_repository(self) -> None:
        """Create the ECR repository for the application image.

        Tags stay mutable so a redeploy can move the fixed tag to a new
        image. Deleting the stack removes the repository with all its images.
        """
        self.repository = ecr.Repository(
            self,
            "Repository",
            image_tag_mutability=ecr.TagMutability.MUTABLE,
            removal_policy=RemovalPolicy.DESTROY,
            empty_on_delete=True,
        )

    def _create_image_deployment(self) -> None:
        """Build the build context and copy the image into the repository.

        The asset lands in the CDK bootstrap repository under a content hash.
        The deployment copies it to the stack repository under the fixed tag
        on every deploy where the hash changes.
        """
        self.image_asset = ecr_assets.DockerImageAsset(
            self,
            "ImageAsset",
            directory=str(self.props.build_context),
            file=self.props.dockerfile,
            platform=ecr_assets.Platform.LINUX_AMD64,
        )
        self.image_deployment = ECRDeployment(
            self,
            "ImageDeployment",
            src=DockerImageName(self.image_asset.image_uri),
            dest=DockerImageName(
                f"{self.repository.repository_uri}:{self.props.image_tag}",
            ),
        )

    def _create_function(self) -> None:
        """Create the Lambda function from the pushed image tag.

        Creating the function fails if the tag is not in the repository yet,
        so it has to wait for the image deployment to finish.
        """
        self.function = lambda_.DockerImageFunction(
            self,
            "ImageFunction",
            code=lambda_.DockerImageCode.from_ecr(
                self.repository,
                tag_or_digest=self.props.image_tag,
            ),
            memory_size=self.props.function_memory_mb,
            timeout=Duration.seconds(self.props.function_timeout_seconds),
            description=f"Web application served at {self.props.domain.fqdn}",
        )
        self.function.node.add_dependency(self.image_deployment)

    def _create_rest_api(self) -> None:
        """Create the REST API proxying every request to the function."""
        self.rest_api = apigateway.LambdaRestApi(
            self,
            "RestApi",
            handler=self.function,
            domain_name=apigateway.DomainNameOptions(
                domain_name=self.props.domain.fqdn,
                certificate=self.certificate,
            ),
            binary_media_types=list(self.props.binary_media_types),
            cloud_watch_role=False,
        )

    def _create_dns_records(self) -> None:
        """Point the host name at the API and advertise HTTP/2 support."""
        self.alias_record = route53.ARecord(
            self,
            "AliasRecord",
            zone=self.hosted_zone,
            record_name=self.props.domain.host_name,
            target=route53.RecordTarget.from_alias(
                route53_targets.ApiGateway(self.rest_api),
            ),
        )
        self.https_record = route53.RecordSet(
            self,
            "HttpsRecord",
            zone=self.hosted_zone,
            record_name=self.props.domain.host_name,
            record_type=route53.RecordType.HTTPS,
            target=route53.RecordTarget.from_values(*self.props.https_record_values),
        )

    def _create_outputs(self) -> None:
        self.output_manager.add_output(
            "SiteUrl",
            value=self.props.domain.site_url,
            description="Public URL of the web application",
            export_name=f"{self.stack_name}-SiteUrl",
        )
        self.output_manager.add_output(
            "RestApiUrl",
            value=self.rest_api.url,
            description="Default execute-api endpoint of the REST API",
        )
        self.output_manager.add_output_with_ssm(
            "RepositoryUri",
            value=self.repository.repository_uri,
            description="ECR repository holding the application image",
            export_name=f"{self.stack_name}-RepositoryUri",
        )
        self.output_manager.add_output_with_ssm(
            "FunctionName",
            value=self.function.function_name,
            description="Lambda function serving the application",
            export_name=f"{self.stack_name}-FunctionName",
        )

    def _configure_security_checks(self) -> None:
        """Configures security analysis and compliance rules for the stack.

        Implements AWS Solutions security checks with suppressions for:

        1. IAM grants generated by CDK and the ECR deployment handler
        2. The intentionally public, unauthenticated proxy API
        """
        Aspects.of(self).add(cdk_nag.AwsSolutionsChecks())
        NagSuppressions.add_stack_suppressions(
            stack=self,
            suppressions=[
                {
                    "id": "AwsSolutions-IAM4",
                    "reason": "AWSLambdaBasicExecutionRole is the standard Lambda logging policy",
                },
                {
                    "id": "AwsSolutions-IAM5",
                    "reason": "ECR deployment handler pulls from the asset repository with wildcard ECR actions",
                },
                {
                    "id": "AwsSolutions-L1",
                    "reason": "ECR deployment handler runtime is pinned by cdk-ecr-deployment",
                },
                {
                    "id": "AwsSolutions-APIG1",
                    "reason": "Access logging is handled by the application inside the container",
                },
                {
                    "id": "AwsSolutions-APIG2",
                    "reason": "Proxy integration forwards every request to the application unvalidated",
                },
                {
                    "id": "AwsSolutions-APIG3",
                    "reason": "Public web application does not use a WAF",
                },
                {
                    "id": "AwsSolutions-APIG4",
                    "reason": "Public web application handles its own authentication",
                },
                {
                    "id": "AwsSolutions-APIG6",
                    "reason": "Stage execution logging is not enabled for the public site",
                },
                {
                    "id": "AwsSolutions-COG4",
                    "reason": "Public web application does not use a Cognito authorizer",
                },
            ],
        )
