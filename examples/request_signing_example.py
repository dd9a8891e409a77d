#!/usr/bin/env python3
"""
AWS signing client - Request Signing Example

This example signs requests to an Amazon OpenSearch Service domain. Credentials
come from the usual botocore sources (environment variables, ~/.aws, instance
metadata).

    AWS_SIGNING_SERVICE=es AWS_REGION=us-east-1 \
        python examples/request_signing_example.py https://search-domain.us-east-1.es.amazonaws.com
"""

import logging
import sys
import os

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from aws_signing_client import (
    BotocoreSigner,
    LoggingContextLogger,
    SigningClientConfig,
    ConfigurationError,
    create_signing_session,
    new_client,
)


def explicit_client_example(endpoint):
    """Build a signing session by hand"""
    print("=== Explicit Client Example ===")

    session = new_client(
        BotocoreSigner(),
        None,
        "es",
        os.environ.get("AWS_REGION", "us-east-1"),
        LoggingContextLogger(logging.getLogger("example.signing")),
    )
    response = session.get(f"{endpoint}/_cluster/health")
    print(f"   Status: {response.status_code}")
    print(f"   Body: {response.text[:200]}")


def configured_client_example(endpoint):
    """Build a signing session from environment variables"""
    print("\n=== Configured Client Example ===")

    try:
        config = SigningClientConfig.from_environment()
    except ConfigurationError as e:
        print(f"   Skipping: {e}")
        return

    with create_signing_session(config) as session:
        response = session.put(
            f"{endpoint}/movies/_doc/1",
            json={"title": "Moneyball", "year": 2011},
        )
        print(f"   Status: {response.status_code}")


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    if len(sys.argv) != 2:
        print(f"usage: {sys.argv[0]} ENDPOINT")
        sys.exit(2)

    endpoint = sys.argv[1].rstrip("/")
    explicit_client_example(endpoint)
    configured_client_example(endpoint)


if __name__ == "__main__":
    main()
