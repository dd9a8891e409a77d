"""
Exception classes for the AWS signing client

Configuration errors are raised while a client is being built. Errors raised
while a request is being read, signed or sent are passed through unchanged.
"""

from typing import Optional, Dict, Any


class ErrorCodes:
    """Error code constants carried by SigningClientError.error_code"""
    MISSING_SIGNER = "MISSING_SIGNER"
    MISSING_SERVICE = "MISSING_SERVICE"
    MISSING_REGION = "MISSING_REGION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NO_CREDENTIALS = "NO_CREDENTIALS"
    SIGNING_FAILED = "SIGNING_FAILED"


class SigningClientError(Exception):
    """Base exception for all signing client errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(SigningClientError):
    """Exception raised when a signing client cannot be created"""
    pass


class MissingSignerError(ConfigurationError):
    """No signer was provided in order to create a client"""
    
    def __init__(self, message: str = "No signer was provided. Cannot create client."):
        super().__init__(message, ErrorCodes.MISSING_SIGNER)


class MissingServiceError(ConfigurationError):
    """No AWS service was provided in order to create a client"""
    
    def __init__(self, message: str = "No AWS service abbreviation was provided. Cannot create client."):
        super().__init__(message, ErrorCodes.MISSING_SERVICE)


class MissingRegionError(ConfigurationError):
    """No AWS region was provided in order to create a client"""
    
    def __init__(self, message: str = "No AWS region was provided. Cannot create client."):
        super().__init__(message, ErrorCodes.MISSING_REGION)


class ValidationError(SigningClientError):
    """Exception raised for malformed configuration values"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.VALIDATION_ERROR, details)


class SigningError(SigningClientError):
    """Exception raised by the bundled botocore signer"""
    pass
