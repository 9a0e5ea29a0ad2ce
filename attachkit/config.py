"""
Configuration for attachkit.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class StoreConfig(BaseModel):
    """Content store selection."""

    backend: str = "memory"  # memory, filesystem, s3
    root_path: str = "data/attachments"


class S3Config(BaseModel):
    """S3 / S3-compatible object storage configuration."""

    endpoint: str | None = None
    region: str = "us-east-1"
    access_key: str | None = None
    secret_key: str | None = None
    bucket: str = "attachments"
    prefix: str = "attachments"
    use_ssl: bool = False
    force_path_style: bool = True


class AnalysisConfig(BaseModel):
    """Analyser configuration."""

    use_file_command: bool = False
    # Defaults to `which file` when unset
    file_command: str | None = None


class UrlConfig(BaseModel):
    """URL generation for persisted content."""

    host: str = ""
    path_prefix: str = "/media"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class Config(BaseModel):
    """Main configuration."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    s3: S3Config = Field(default_factory=S3Config)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    url: UrlConfig = Field(default_factory=UrlConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in working directory)

        Returns:
            Config instance

        Environment variables:
            ATTACHKIT_STORE_BACKEND: Store backend (memory, filesystem, s3)
            ATTACHKIT_STORE_ROOT_PATH: Root directory for the filesystem backend
            ATTACHKIT_S3_ENDPOINT: S3 endpoint URL
            ATTACHKIT_S3_REGION: S3 region
            ATTACHKIT_S3_ACCESS_KEY: S3 access key
            ATTACHKIT_S3_SECRET_KEY: S3 secret key
            ATTACHKIT_S3_BUCKET: S3 bucket
            ATTACHKIT_S3_PREFIX: Object key prefix
            ATTACHKIT_ANALYSIS_USE_FILE_COMMAND: Register the `file` mime type analyser
            ATTACHKIT_ANALYSIS_FILE_COMMAND: Path to the `file` binary
            ATTACHKIT_URL_HOST: Host prepended to generated URLs
            ATTACHKIT_URL_PATH_PREFIX: Path prefix for generated URLs
            ATTACHKIT_LOG_LEVEL: Log level
        """
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None or value == "":
                return default
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
            return value

        return cls(
            store=StoreConfig(
                backend=get_env("ATTACHKIT_STORE_BACKEND", "memory"),
                root_path=get_env("ATTACHKIT_STORE_ROOT_PATH", "data/attachments"),
            ),
            s3=S3Config(
                endpoint=get_env("ATTACHKIT_S3_ENDPOINT"),
                region=get_env("ATTACHKIT_S3_REGION", "us-east-1"),
                access_key=get_env("ATTACHKIT_S3_ACCESS_KEY"),
                secret_key=get_env("ATTACHKIT_S3_SECRET_KEY"),
                bucket=get_env("ATTACHKIT_S3_BUCKET", "attachments"),
                prefix=get_env("ATTACHKIT_S3_PREFIX", "attachments"),
                use_ssl=get_env("ATTACHKIT_S3_USE_SSL", False),
                force_path_style=get_env("ATTACHKIT_S3_FORCE_PATH_STYLE", True),
            ),
            analysis=AnalysisConfig(
                use_file_command=get_env("ATTACHKIT_ANALYSIS_USE_FILE_COMMAND", False),
                file_command=get_env("ATTACHKIT_ANALYSIS_FILE_COMMAND"),
            ),
            url=UrlConfig(
                host=get_env("ATTACHKIT_URL_HOST", ""),
                path_prefix=get_env("ATTACHKIT_URL_PATH_PREFIX", "/media"),
            ),
            logging=LoggingConfig(
                level=get_env("ATTACHKIT_LOG_LEVEL", "INFO"),
                log_to_file=get_env("ATTACHKIT_LOG_TO_FILE", False),
                log_dir=get_env("ATTACHKIT_LOG_DIR", "logs"),
                file_rotation=get_env("ATTACHKIT_LOG_FILE_ROTATION", "10 MB"),
                file_retention=get_env("ATTACHKIT_LOG_FILE_RETENTION", "7 days"),
                compression=get_env("ATTACHKIT_LOG_COMPRESSION", "zip"),
                serialize=get_env("ATTACHKIT_LOG_SERIALIZE", True),
            ),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)

        # Env sections that differ from defaults override YAML
        final_dict = {**config_dict}
        default = cls()
        for section in ("store", "s3", "analysis", "url", "logging"):
            env_section = getattr(env_config, section)
            if env_section != getattr(default, section):
                final_dict[section] = env_section.model_dump()

        return cls(**final_dict) if final_dict else env_config
