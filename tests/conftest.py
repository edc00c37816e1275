"""Global pytest configuration and fixtures for CDK testing."""

import os
import sys
from pathlib import Path

import pytest
from aws_cdk import App, Environment

# Add the project root to Python path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from stacks.configs.domain_config import DomainConfig  # noqa: E402
from stacks.configs.settings import reset_settings  # noqa: E402

TEST_ACCOUNT = "123456789012"
TEST_REGION = "us-east-1"
TEST_HOSTED_ZONE_ID = "Z0123456789ABCDEFGHIJ"


@pytest.fixture(scope="session", autouse=True)
def configure_test_environment():
    """Configure environment variables for consistent testing."""
    test_env = {
        "AWS_DEFAULT_REGION": TEST_REGION,
        "AWS_REGION": TEST_REGION,
        "CDK_DEFAULT_REGION": TEST_REGION,
        "CDK_DEFAULT_ACCOUNT": TEST_ACCOUNT,
        "CDK_DISABLE_VERSION_CHECK": "true",
        # Prevent actual AWS API calls during testing
        "AWS_ACCESS_KEY_ID": "testing",
        "AWS_SECRET_ACCESS_KEY": "testing",
        "AWS_SECURITY_TOKEN": "testing",
        "AWS_SESSION_TOKEN": "testing",
    }

    for key, value in test_env.items():
        if key not in os.environ:
            os.environ[key] = value


@pytest.fixture(autouse=True)
def clean_webapp_settings(monkeypatch):
    """Isolate tests from WEBAPP_* variables and the cached settings singleton."""
    for key in list(os.environ):
        if key.startswith("WEBAPP_"):
            monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(scope="session")
def aws_environment():
    """Provide AWS environment configuration for testing."""
    return Environment(account=TEST_ACCOUNT, region=TEST_REGION)


def hosted_zone_context(domain_name: str) -> dict[str, dict[str, str]]:
    """Cached hosted-zone lookup result, as `cdk.context.json` stores it."""
    key = (
        f"hosted-zone:account={TEST_ACCOUNT}:domainName={domain_name}"
        f":region={TEST_REGION}"
    )
    return {key: {"Id": f"/hostedzone/{TEST_HOSTED_ZONE_ID}", "Name": f"{domain_name}."}}


@pytest.fixture
def lookup_context():
    """CDK context with the example.com hosted zone lookup cached."""
    return hosted_zone_context("example.com")


@pytest.fixture
def domain_config():
    return DomainConfig(apex_domain="example.com", host_name="www")


@pytest.fixture
def cdk_app(domain_config):
    """Create a fresh CDK App with the hosted zone lookup pre-populated."""
    return App(context=hosted_zone_context(domain_config.apex_domain))


@pytest.fixture
def build_context(tmp_path):
    """Minimal Docker build context."""
    context_dir = tmp_path / "webapp"
    context_dir.mkdir()
    (context_dir / "Dockerfile").write_text(
        "FROM public.ecr.aws/lambda/python:3.12\nCMD [\"index.handler\"]\n",
    )
    return context_dir
