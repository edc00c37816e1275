"""Constants shared by the container web application stack."""

from typing import Final

DEFAULT_IMAGE_TAG: Final[str] = "code-server-custom"
DEFAULT_DOCKERFILE: Final[str] = "Dockerfile"

# API Gateway passes every payload through to the container untouched.
BINARY_MEDIA_TYPES: Final[tuple[str, ...]] = ("*/*",)

# SVCB-style HTTPS record advertising HTTP/2 so clients skip plaintext HTTP.
HTTPS_RECORD_VALUES: Final[tuple[str, ...]] = ("1 . alpn=h2",)

# API Gateway REST integrations time out after 29 seconds.
MAX_FUNCTION_TIMEOUT_SECONDS: Final[int] = 29

SSM_PARAMETER_PREFIX: Final[str] = "/infrastructure"
