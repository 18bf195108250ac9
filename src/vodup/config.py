"""Configuration loading and validation."""

import configparser
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

ACCESS_KEY_NAME = "VOLC_ACCESSKEY"
SECRET_KEY_NAME = "VOLC_SECRETKEY"
CREDENTIALS_SECTION = "default"
CREDENTIALS_FILE = "config.ini"


class ConfigError(Exception):
    """Raised when credentials or upload settings cannot be loaded."""


class Credentials(BaseModel):
    """Access key pair for the VOD service."""

    access_key: str
    secret_key: str

    @field_validator("access_key", "secret_key")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Strip whitespace and reject empty keys."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class UploadConfig(BaseModel):
    """Upload pipeline configuration."""

    region: str = "cn-north-1"
    video_extensions: list[str] = [".mp4", ".avi", ".mov", ".mkv"]
    results_file: str = "results.ini"
    publish_status: str = "Published"

    @field_validator("video_extensions")
    @classmethod
    def dotted(cls, v: list[str]) -> list[str]:
        """Extensions are matched exactly, so require the leading dot."""
        for ext in v:
            if not ext.startswith("."):
                raise ValueError(f"extension must start with '.': {ext!r}")
        return v


def _credentials(access_key: str | None, secret_key: str | None, source: str) -> Credentials:
    try:
        return Credentials(access_key=access_key or "", secret_key=secret_key or "")
    except ValidationError as e:
        missing = [
            name
            for name, value in ((ACCESS_KEY_NAME, access_key), (SECRET_KEY_NAME, secret_key))
            if not (value or "").strip()
        ]
        raise ConfigError(f"Missing {', '.join(missing)} in {source}") from e


def load_env_credentials(env_file: Path | None = None) -> Credentials:
    """
    Load credentials from VOLC_ACCESSKEY / VOLC_SECRETKEY.

    A .env file (the given one, or one found from the working directory) is
    loaded first. Variables already set in the environment take precedence.
    """
    if env_file is not None:
        load_dotenv(env_file, override=False)
    else:
        load_dotenv(override=False)

    return _credentials(
        os.getenv(ACCESS_KEY_NAME),
        os.getenv(SECRET_KEY_NAME),
        "environment",
    )


def default_credentials_path() -> Path:
    """Path of config.ini in the working directory."""
    try:
        return Path.cwd() / CREDENTIALS_FILE
    except OSError as e:
        raise ConfigError(f"Cannot read working directory: {e}") from e


def load_credentials_file(config_path: Path | None = None) -> Credentials:
    """Load credentials from the [default] section of an INI file."""
    if config_path is None:
        config_path = default_credentials_path()

    parser = configparser.ConfigParser(interpolation=None)
    # keep key names as written (VOLC_ACCESSKEY, not volc_accesskey)
    parser.optionxform = str
    try:
        with open(config_path, encoding="utf-8") as f:
            parser.read_file(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e
    except configparser.Error as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    if not parser.has_section(CREDENTIALS_SECTION):
        raise ConfigError(f"Section '{CREDENTIALS_SECTION}' not found in {config_path}")

    section = parser[CREDENTIALS_SECTION]
    return _credentials(
        section.get(ACCESS_KEY_NAME),
        section.get(SECRET_KEY_NAME),
        str(config_path),
    )


def load_upload_config(config_path: Path | None = None) -> UploadConfig:
    """Load upload pipeline configuration, or defaults when no path is given."""
    if config_path is None:
        return UploadConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    try:
        return UploadConfig(**(data or {}))
    except (TypeError, ValidationError) as e:
        raise ConfigError(f"Invalid upload config {config_path}: {e}") from e
