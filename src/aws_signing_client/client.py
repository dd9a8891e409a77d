"""
Factory for sessions that sign their requests

new_client() validates the signing settings and mounts a SigningAdapter in
front of the adapters of an existing or freshly created requests session.
"""

import logging
from typing import Callable, Optional

import requests
from requests.adapters import BaseAdapter, HTTPAdapter

from .adapter import SigningAdapter
from .exceptions import MissingRegionError, MissingServiceError, MissingSignerError
from .logger import ContextLogger, DefaultLogger
from .signer import RequestSigner

log = logging.getLogger(__name__)


# Prefixes that always route through a SigningAdapter
DEFAULT_PREFIXES = ("https://", "http://")


def new_client(
    signer: Optional[RequestSigner],
    session: Optional[requests.Session] = None,
    service: str = "",
    region: str = "",
    logger: Optional[ContextLogger] = None,
    *,
    default_session: Callable[[], requests.Session] = requests.Session,
    default_transport: Callable[[], BaseAdapter] = HTTPAdapter,
) -> requests.Session:
    """
    Obtain a session whose adapters sign AWS requests for the given service.

    The session passed in is modified in place: each adapter mounted on it is
    replaced by a SigningAdapter wrapping it, under the same prefix. Other
    holders of the session see the change.

    Args:
        signer: Signer computing the signature headers
        session: Optional existing session, default_session() is used if None
        service: AWS service abbreviation, e.g. "es"
        region: AWS region, e.g. "us-east-1"
        logger: Optional context logger, output is discarded if None
        default_session: Factory for the session used when none is given
        default_transport: Factory for the inner adapter used when the session
            has no adapter for http:// or https://

    Returns:
        requests.Session: Session that signs its requests

    Raises:
        MissingSignerError: If signer is None
        MissingServiceError: If service is empty
        MissingRegionError: If region is empty
    """
    if signer is None:
        raise MissingSignerError()
    if not service:
        raise MissingServiceError()
    if not region:
        raise MissingRegionError()

    if session is None:
        session = default_session()
    context_logger = logger if logger is not None else DefaultLogger()

    def wrap(transport: BaseAdapter) -> SigningAdapter:
        return SigningAdapter(transport, signer, service, region, context_logger)

    # Adapters mounted under several prefixes share one SigningAdapter
    wrapped = {}
    for prefix, transport in list(session.adapters.items()):
        if id(transport) not in wrapped:
            wrapped[id(transport)] = wrap(transport)
        session.mount(prefix, wrapped[id(transport)])

    for prefix in DEFAULT_PREFIXES:
        if prefix not in session.adapters:
            session.mount(prefix, wrap(default_transport()))

    log.debug(f"Mounted request signing for service '{service}' in region '{region}' on {len(session.adapters)} prefixes")
    return session
