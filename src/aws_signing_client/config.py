"""
Configuration management for the AWS signing client

Settings can be given directly, loaded from a dict, a JSON string or file, or
read from environment variables.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import botocore.session
import requests

from .client import new_client
from .exceptions import MissingRegionError, MissingServiceError, ValidationError
from .logger import ContextLogger, LoggingContextLogger
from .signer import BotocoreSigner, RequestSigner

log = logging.getLogger(__name__)


ENV_SERVICE = "AWS_SIGNING_SERVICE"
ENV_REGION = "AWS_REGION"
ENV_DEFAULT_REGION = "AWS_DEFAULT_REGION"
ENV_PROFILE = "AWS_PROFILE"
ENV_LOG_LEVEL = "AWS_SIGNING_LOG_LEVEL"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class SigningClientConfig:
    """
    Settings for a signing session.

    log_level is the level per-request diagnostics are logged at.
    """
    service: str
    region: str
    profile: Optional[str] = None
    log_level: str = "DEBUG"

    def __post_init__(self):
        """Validate configuration."""
        for name in ("service", "region"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValidationError(
                    f"Configuration value '{name}' must be a string, got {type(value).__name__}",
                    {"field": name}
                )

        if self.profile is not None and not isinstance(self.profile, str):
            raise ValidationError(
                f"Configuration value 'profile' must be a string, got {type(self.profile).__name__}",
                {"field": "profile"}
            )

        if not self.service:
            raise MissingServiceError()

        if not self.region:
            raise MissingRegionError()

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValidationError(
                f"Invalid log level: {self.log_level}",
                {"allowed": list(LOG_LEVELS)}
            )

    @property
    def level(self) -> int:
        """Numeric logging level."""
        return getattr(logging, self.log_level)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SigningClientConfig':
        """Create configuration from a dictionary"""
        if not isinstance(data, Mapping):
            raise ValidationError(f"Configuration must be a mapping, got {type(data).__name__}")

        unknown = set(data) - {"service", "region", "profile", "log_level"}
        if unknown:
            raise ValidationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                {"unknown_keys": sorted(unknown)}
            )

        return cls(
            service=data.get("service", ""),
            region=data.get("region", ""),
            profile=data.get("profile"),
            log_level=data.get("log_level", "DEBUG"),
        )

    @classmethod
    def from_json(cls, json_string: str) -> 'SigningClientConfig':
        """Load configuration from a JSON string"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Failed to parse configuration JSON: {e}")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'SigningClientConfig':
        """Load configuration from a JSON file"""
        path = Path(file_path)
        try:
            json_string = path.read_text(encoding='utf-8')
        except OSError as e:
            raise ValidationError(f"Failed to read configuration file {path}: {e}", {"path": str(path)})
        return cls.from_json(json_string)

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> 'SigningClientConfig':
        """
        Load configuration from environment variables.

        AWS_SIGNING_SERVICE and AWS_REGION (or AWS_DEFAULT_REGION) are
        required; AWS_PROFILE and AWS_SIGNING_LOG_LEVEL are optional.
        """
        env = os.environ if environ is None else environ
        return cls(
            service=env.get(ENV_SERVICE, ""),
            region=env.get(ENV_REGION) or env.get(ENV_DEFAULT_REGION, ""),
            profile=env.get(ENV_PROFILE) or None,
            log_level=env.get(ENV_LOG_LEVEL, "DEBUG"),
        )


def create_signing_session(
    config: SigningClientConfig,
    signer: Optional[RequestSigner] = None,
    session: Optional[requests.Session] = None,
    logger: Optional[ContextLogger] = None,
) -> requests.Session:
    """
    Create a signing session from configuration.

    Args:
        config: Signing configuration
        signer: Optional signer, a BotocoreSigner for config.profile if None
        session: Optional existing session to wrap, modified in place
        logger: Optional context logger, logs to the
            ``aws_signing_client.adapter`` logger at config.log_level if None

    Returns:
        requests.Session: Session that signs its requests
    """
    if signer is None:
        signer = BotocoreSigner(botocore_session=botocore.session.Session(profile=config.profile))
        log.info(f"Using botocore credentials for profile: {config.profile or 'default'}")

    if logger is None:
        logger = LoggingContextLogger(logging.getLogger("aws_signing_client.adapter"), config.level)

    return new_client(signer, session, config.service, config.region, logger)
