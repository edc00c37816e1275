"""Tests for Docker build context validation."""

import pytest

from stacks.web_app.build_context import BuildContextError, resolve_build_context


def test_absolute_context_resolved(build_context):
    assert resolve_build_context(build_context) == build_context.resolve()


def test_relative_context_resolved_against_base_dir(build_context):
    resolved = resolve_build_context("webapp", base_dir=build_context.parent)

    assert resolved == build_context.resolve()
    assert resolved.is_absolute()


def test_custom_dockerfile_name(build_context):
    (build_context / "Dockerfile.lambda").write_text("FROM scratch\n")

    assert resolve_build_context(build_context, dockerfile="Dockerfile.lambda")


def test_missing_directory(tmp_path):
    with pytest.raises(BuildContextError, match="does not exist"):
        resolve_build_context(tmp_path / "missing")


def test_file_instead_of_directory(tmp_path):
    not_a_dir = tmp_path / "Dockerfile"
    not_a_dir.write_text("FROM scratch\n")

    with pytest.raises(BuildContextError, match="is not a directory"):
        resolve_build_context(not_a_dir)


def test_missing_dockerfile(tmp_path):
    with pytest.raises(BuildContextError, match="No Dockerfile found"):
        resolve_build_context(tmp_path)


def test_error_is_value_error(tmp_path):
    with pytest.raises(ValueError):
        resolve_build_context(tmp_path / "missing")


def test_repository_build_context_is_valid():
    from app import PROJECT_ROOT

    resolved = resolve_build_context("webapp", base_dir=PROJECT_ROOT)

    assert (resolved / "index.py").is_file()
