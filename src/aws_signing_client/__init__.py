"""
AWS signing client
Signs outgoing requests made through a requests.Session with AWS Signature Version 4
"""

from .version import __version__
from .adapter import SigningAdapter
from .client import new_client, DEFAULT_PREFIXES
from .config import SigningClientConfig, create_signing_session
from .exceptions import (
    ErrorCodes,
    SigningClientError,
    ConfigurationError,
    MissingSignerError,
    MissingServiceError,
    MissingRegionError,
    ValidationError,
    SigningError,
)
from .logger import (
    ContextLogger,
    DefaultLogger,
    LoggingContextLogger,
)
from .signer import (
    RequestSigner,
    BotocoreSigner,
    SIGNATURE_SCHEME_PREFIX,
)
from .utils import (
    escape_path,
    normalize_url,
    read_body,
    buffer_body,
    format_rfc3339_timestamp,
    parse_rfc3339_timestamp,
)

# Public API exports
__all__ = [
    '__version__',
    # Client
    'new_client',
    'DEFAULT_PREFIXES',
    'SigningAdapter',
    # Configuration
    'SigningClientConfig',
    'create_signing_session',
    # Exceptions
    'ErrorCodes',
    'SigningClientError',
    'ConfigurationError',
    'MissingSignerError',
    'MissingServiceError',
    'MissingRegionError',
    'ValidationError',
    'SigningError',
    # Logging
    'ContextLogger',
    'DefaultLogger',
    'LoggingContextLogger',
    # Signing
    'RequestSigner',
    'BotocoreSigner',
    'SIGNATURE_SCHEME_PREFIX',
    # Utilities
    'escape_path',
    'normalize_url',
    'read_body',
    'buffer_body',
    'format_rfc3339_timestamp',
    'parse_rfc3339_timestamp',
]
