"""
Signer capability and its botocore-backed implementation

The signing adapter only needs something that can add signature headers to a
request. BotocoreSigner provides that by delegating to botocore's SigV4
implementation.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import IO, Any, Dict, Mapping, Optional, Protocol, runtime_checkable

import botocore.session
from botocore.auth import SIGV4_TIMESTAMP, SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.exceptions import BotoCoreError, NoCredentialsError
from requests.models import PreparedRequest

from .exceptions import ErrorCodes, SigningError

logger = logging.getLogger(__name__)


# Authorization values starting with this prefix are already signed
SIGNATURE_SCHEME_PREFIX = "AWS4"


@runtime_checkable
class RequestSigner(Protocol):
    """Protocol for request signers"""

    def sign(
        self,
        request: PreparedRequest,
        body: Optional[IO[bytes]],
        service: str,
        region: str,
        signing_time: datetime,
    ) -> Mapping[str, str]:
        """
        Add signature headers to a request in place.

        Args:
            request: Request to sign, already normalized
            body: Reader over the buffered body, None if there is no body
            service: Service name used in the credential scope
            region: Region name used in the credential scope
            signing_time: Time the signature is computed for

        Returns:
            Mapping: Signed header set
        """
        ...


class _FixedTimeSigV4Auth(SigV4Auth):
    """SigV4Auth that signs at a caller-supplied time instead of now."""

    def __init__(self, credentials, service_name: str, region_name: str, signing_time: datetime):
        super().__init__(credentials, service_name, region_name)
        self._signing_time = signing_time.astimezone(timezone.utc)

    def add_auth(self, request):
        if self.credentials is None:
            raise NoCredentialsError()
        request.context["timestamp"] = self._signing_time.strftime(SIGV4_TIMESTAMP)
        # Drops any previous Authorization header and rewrites Date from the
        # timestamp above.
        self._modify_request_before_signing(request)
        canonical_request = self.canonical_request(request)
        string_to_sign = self.string_to_sign(request, canonical_request)
        signature = self.signature(string_to_sign, request)
        self._inject_signature_to_request(request, signature)


class BotocoreSigner:
    """
    AWS Signature Version 4 signer backed by botocore.

    Credentials are resolved once, on first use: an explicit credentials
    object wins, otherwise the botocore session's provider chain is consulted
    (environment variables, shared config files, container and instance
    metadata) and the credentials it returns are kept for later signatures.
    Instances hold no per-request state and can be shared between threads.
    """

    def __init__(self, credentials=None, botocore_session: Optional[botocore.session.Session] = None):
        """
        Initialize the signer.

        Args:
            credentials: Optional botocore Credentials to sign with
            botocore_session: Optional botocore session used to resolve credentials
        """
        self._credentials = credentials
        self._botocore_session = botocore_session
        self._lock = threading.Lock()

    def _resolve_credentials(self):
        # The provider chain runs once; refreshable credentials refresh
        # themselves when frozen.
        if self._credentials is None:
            with self._lock:
                if self._credentials is None:
                    session = self._botocore_session or botocore.session.get_session()
                    credentials = session.get_credentials()
                    if credentials is None:
                        raise SigningError(
                            "No AWS credentials found for request signing",
                            ErrorCodes.NO_CREDENTIALS,
                        )
                    logger.debug(f"Resolved AWS credentials via {getattr(credentials, 'method', 'unknown')}")
                    self._credentials = credentials
        return self._credentials.get_frozen_credentials()

    def sign(
        self,
        request: PreparedRequest,
        body: Optional[IO[bytes]],
        service: str,
        region: str,
        signing_time: datetime,
    ) -> Dict[str, str]:
        """
        Sign a prepared request with SigV4.

        All headers botocore adds or rewrites are copied back onto the
        request, so the Date header ends up in the format botocore signed.

        Returns:
            dict: Headers of the signed request

        Raises:
            SigningError: If no credentials are available or signing fails
        """
        credentials = self._resolve_credentials()
        aws_request = AWSRequest(
            method=request.method,
            url=request.url,
            headers=dict(request.headers),
            data=body.read() if body is not None else None,
        )

        try:
            _FixedTimeSigV4Auth(credentials, service, region, signing_time).add_auth(aws_request)
        except BotoCoreError as e:
            raise SigningError(
                f"SigV4 signing failed: {e}",
                ErrorCodes.SIGNING_FAILED,
                {"service": service, "region": region},
            ) from e

        signed_headers = {name: _header_str(value) for name, value in aws_request.headers.items()}
        for name in list(request.headers):
            if name not in aws_request.headers:
                del request.headers[name]
        request.headers.update(signed_headers)
        return signed_headers


def _header_str(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value
