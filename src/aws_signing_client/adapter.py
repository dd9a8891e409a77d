"""
Transport adapter that signs requests before sending them

SigningAdapter wraps another requests adapter. Every request passing through
it is normalized, signed and then handed to the wrapped adapter.
"""

import time
from typing import Optional

from requests.adapters import BaseAdapter
from requests.models import PreparedRequest, Response

from .logger import ContextLogger, DefaultLogger
from .signer import SIGNATURE_SCHEME_PREFIX, RequestSigner
from .utils import buffer_body, format_rfc3339_timestamp, normalize_url, utc_now


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class SigningAdapter(BaseAdapter):
    """
    HTTP adapter that signs requests for AWS API calls.

    The scheme of every signed request is changed to HTTPS. Requests are
    mutated in place: the URL, the Date header and the body (buffered into
    memory) of the PreparedRequest passed to send() are all rewritten before
    it reaches the inner adapter.

    The inner adapter is shared, not owned. The adapter holds no per-request
    state, so one instance can serve concurrent requests as long as the
    signer, the inner adapter and the logger can.
    """

    def __init__(
        self,
        transport: BaseAdapter,
        signer: RequestSigner,
        service: str,
        region: str,
        logger: Optional[ContextLogger] = None,
    ):
        """
        Initialize signing adapter.

        Args:
            transport: Adapter that sends the signed requests
            signer: Signer computing the signature headers
            service: AWS service abbreviation, e.g. "es"
            region: AWS region, e.g. "us-east-1"
            logger: Optional context logger, output is discarded if omitted
        """
        super().__init__()
        self._transport = transport
        self._signer = signer
        self._service = service
        self._region = region
        self._logger = logger or DefaultLogger()

    @property
    def transport(self) -> BaseAdapter:
        return self._transport

    @property
    def signer(self) -> RequestSigner:
        return self._signer

    @property
    def service(self) -> str:
        return self._service

    @property
    def region(self) -> str:
        return self._region

    @property
    def logger(self) -> ContextLogger:
        return self._logger

    def send(self, request: PreparedRequest, **kwargs) -> Response:
        """
        Sign a request and send it through the inner adapter.

        Requests that already carry an AWS4 Authorization header are
        forwarded untouched. Errors from reading the body, signing or the
        inner adapter are logged and re-raised unchanged.

        Args:
            request: Prepared request, mutated in place
            **kwargs: Send options (stream, timeout, verify, cert, proxies)
                passed through to the inner adapter

        Returns:
            Response: Response of the inner adapter
        """
        ctx = request
        authorization = request.headers.get("Authorization")
        if authorization and authorization.startswith(SIGNATURE_SCHEME_PREFIX):
            self._logger.printf(ctx, "Received request to sign that is already signed. Skipping.")
            return self._transport.send(request, **kwargs)

        url = normalize_url(request.url)
        if url != request.url:
            self._logger.printf(ctx, "Normalized request URL '%s' to '%s'", request.url, url)
            request.url = url

        signing_time = utc_now()
        request.headers["Date"] = format_rfc3339_timestamp(signing_time)
        self._logger.printf(ctx, "Request to be signed: %s %s headers=%r", request.method, request.url, dict(request.headers))

        try:
            body = buffer_body(request)
        except Exception as e:
            self._logger.printf(ctx, "Error while attempting to read request body: '%s'", e)
            raise

        if body is None:
            self._logger.printf(ctx, "Signing request with no body...")
        else:
            self._logger.printf(ctx, "Signing request with body...")

        start = time.monotonic()
        try:
            self._signer.sign(request, body, self._service, self._region, signing_time)
        except Exception as e:
            self._logger.printf(ctx, "Error while attempting to sign request: '%s'", e)
            raise
        self._logger.printf(ctx, "Signing successful. Latency: %d ms", _elapsed_ms(start))

        start = time.monotonic()
        try:
            response = self._transport.send(request, **kwargs)
        except Exception as e:
            self._logger.printf(ctx, "Error from transport. Latency: %d ms, Error: %s", _elapsed_ms(start), e)
            raise

        self._logger.printf(ctx, "Successful response from transport. Latency: %d ms", _elapsed_ms(start))
        return response

    def close(self) -> None:
        """Close the inner adapter."""
        self._transport.close()
