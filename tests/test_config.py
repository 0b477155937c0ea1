"""
Tests for reading export settings from the environment.
"""

from pathlib import Path

import pytest

from dynexport.config import ExportSettings
from dynexport.errors import ConfigError


def test_from_env(settings_env):
    settings = ExportSettings.from_env(settings_env)

    assert settings.region == "eu-west-1"
    assert settings.table_name == "customers"
    assert settings.batch_size == 100
    assert settings.role_arn.endswith("role/export-upload")
    assert settings.bucket == "exports-bucket"
    assert settings.export_path == Path(settings_env["EXPORT_PATH"])
    assert settings.key_prefix == "dynamo"
    assert settings.file_prefix == "TT"
    assert settings.scan_max_retries == 0


def test_default_export_path(settings_env):
    del settings_env["EXPORT_PATH"]
    assert ExportSettings.from_env(settings_env).export_path == Path("/tmp/dynamo.csv")


@pytest.mark.parametrize(
    "name", ["VT_REGION", "AWS_TABLE", "AWS_ACCESS", "AWS_SECRET", "AWS_ROLE", "AWS_BUCKET", "BATCH_SIZE"]
)
def test_missing_required(settings_env, name):
    del settings_env[name]
    with pytest.raises(ConfigError):
        ExportSettings.from_env(settings_env)


@pytest.mark.parametrize("raw", ["0", "-5", "abc", "1.5", "  "])
def test_invalid_batch_size(settings_env, raw):
    settings_env["BATCH_SIZE"] = raw
    with pytest.raises(ConfigError, match="BATCH_SIZE|Batch size"):
        ExportSettings.from_env(settings_env)


def test_invalid_retries(settings_env):
    settings_env["SCAN_MAX_RETRIES"] = "-1"
    with pytest.raises(ConfigError):
        ExportSettings.from_env(settings_env)


def test_secret_not_in_repr(settings_env):
    assert "primary-secret" not in repr(ExportSettings.from_env(settings_env))


def test_file_prefix_with_slash_rejected(settings_env):
    settings_env["EXPORT_FILE_PREFIX"] = "a/b"
    with pytest.raises(ConfigError, match="file_prefix"):
        ExportSettings.from_env(settings_env)
