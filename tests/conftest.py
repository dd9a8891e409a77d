"""
Shared stubs for the signing client tests
"""

import pytest
from requests.adapters import BaseAdapter
from requests.models import Response

from aws_signing_client.utils import read_body


class RecordingSigner:
    """Signer stub that records its arguments and adds a fake AWS4 header"""

    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def sign(self, request, body, service, region, signing_time):
        self.calls.append({
            "url": request.url,
            "date": request.headers.get("Date"),
            "body": None if body is None else body.read(),
            "service": service,
            "region": region,
            "signing_time": signing_time,
        })
        if self.error is not None:
            raise self.error

        headers = {
            "Authorization": (
                f"AWS4-HMAC-SHA256 Credential=AKIDEXAMPLE/{signing_time:%Y%m%d}/{region}/{service}/aws4_request, "
                "SignedHeaders=date;host, Signature=deadbeef"
            )
        }
        request.headers.update(headers)
        return headers


class EchoAdapter(BaseAdapter):
    """Adapter stub that records requests and returns a fixed response"""

    def __init__(self, status_code=200, content=b"fixed response", error=None):
        super().__init__()
        self.status_code = status_code
        self.content = content
        self.error = error
        self.requests = []
        self.kwargs = []
        self.bodies = []
        self.closed = False

    def send(self, request, **kwargs):
        self.requests.append(request)
        self.kwargs.append(kwargs)
        # Read twice, as a retrying transport would
        if request.body is not None:
            self.bodies.append((read_body(request.body), read_body(request.body)))
        if self.error is not None:
            raise self.error

        response = Response()
        response.status_code = self.status_code
        response._content = self.content
        response.request = request
        response.url = request.url
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def signer():
    return RecordingSigner()


@pytest.fixture
def transport():
    return EchoAdapter()
