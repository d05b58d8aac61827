import pytest
from pydantic import ValidationError

from social_api.settings import Settings


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("S3_BUCKET_NAME", "env-bucket")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://cdn.example.com/")

    settings = Settings()

    assert settings.s3_bucket_name == "env-bucket"
    assert settings.aws_region == "eu-west-1"
    assert settings.log_level == "DEBUG"
    assert settings.public_base_url == "https://cdn.example.com"


def test_invalid_log_level_is_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")
