"""Validation of the local Docker build context.

The image deployment only uploads the build context when the stack is
deployed, so a missing directory or Dockerfile is checked during synthesis
instead of surfacing later as a failed CodeBuild run.
"""

import logging
from pathlib import Path

from .constants import DEFAULT_DOCKERFILE

logger = logging.getLogger(__name__)


class BuildContextError(ValueError):
    """Raised when the Docker build context cannot be used for an image build."""


def resolve_build_context(
    path: str | Path,
    dockerfile: str = DEFAULT_DOCKERFILE,
    base_dir: Path | None = None,
) -> Path:
    """Resolve and validate the Docker build context directory.

    Args:
        path: Build context directory, absolute or relative to ``base_dir``.
        dockerfile: Dockerfile name expected inside the build context.
        base_dir: Directory relative paths are resolved against. Defaults to
            the current working directory, which is where the CDK CLI runs
            ``app.py``.

    Returns:
        Absolute path of the build context directory.

    Raises:
        BuildContextError: If the directory or its Dockerfile does not exist.
    """
    context_dir = Path(path)
    if not context_dir.is_absolute():
        context_dir = (base_dir or Path.cwd()) / context_dir
    context_dir = context_dir.resolve()

    if not context_dir.exists():
        raise BuildContextError(f"Build context {context_dir} does not exist")
    if not context_dir.is_dir():
        raise BuildContextError(f"Build context {context_dir} is not a directory")
    if not (context_dir / dockerfile).is_file():
        raise BuildContextError(f"No {dockerfile} found in build context {context_dir}")

    logger.debug("Resolved build context %s", context_dir)
    return context_dir
