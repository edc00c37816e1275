"""Domain configuration for the container web application.

The public hostname is always derived from a host label and an apex domain
whose hosted zone already exists in Route53. The same derived name is used
for the ACM certificate, the API Gateway custom domain and the DNS records.
"""

import re
from typing import Final

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

DNS_LABEL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")
MAX_FQDN_LENGTH: Final[int] = 253


def _normalize(value: object) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {type(value).__name__}")
    return value.strip().lower().rstrip(".")


class DomainConfig(BaseModel):
    """Hostname settings for the public endpoint.

    Attributes:
        apex_domain: Domain of the existing Route53 hosted zone, e.g. ``example.com``.
        host_name: Single DNS label placed in front of the apex domain, e.g. ``www``.
    """

    model_config = ConfigDict(frozen=True)

    apex_domain: str
    host_name: str

    @field_validator("host_name", mode="before")
    @classmethod
    def validate_host_name(cls, value: str) -> str:
        """Ensure the host name is exactly one valid DNS label."""
        label = _normalize(value)
        if not DNS_LABEL_PATTERN.match(label):
            raise ValueError(f"'{value}' is not a valid DNS label")
        return label

    @field_validator("apex_domain", mode="before")
    @classmethod
    def validate_apex_domain(cls, value: str) -> str:
        """Ensure the apex domain has at least two valid labels."""
        domain = _normalize(value)
        labels = domain.split(".")
        if len(labels) < 2:
            raise ValueError(f"apex domain '{value}' must contain at least two labels")
        for label in labels:
            if not DNS_LABEL_PATTERN.match(label):
                raise ValueError(f"apex domain '{value}' has invalid label '{label}'")
        return domain

    @model_validator(mode="after")
    def validate_fqdn_length(self) -> "DomainConfig":
        if len(self.fqdn) > MAX_FQDN_LENGTH:
            raise ValueError(
                f"fully-qualified name exceeds {MAX_FQDN_LENGTH} characters",
            )
        return self

    @property
    def fqdn(self) -> str:
        """Fully-qualified domain name served by the application."""
        return f"{self.host_name}.{self.apex_domain}"

    @property
    def site_url(self) -> str:
        return f"https://{self.fqdn}"
