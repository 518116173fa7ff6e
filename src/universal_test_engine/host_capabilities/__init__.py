"""Host capability exports."""

from .host_errors import HostActionError, HostError, HostTimeoutError, HostTransportError
from .http_contracts import HttpClient, HttpClientFactory, HttpRequest, HttpResponse, build_url
from .httpx_client import HttpxClient, HttpxClientFactory
from .page_contracts import Options, PageCapability, PageSessionFactory
from .playwright_page import PlaywrightPage, PlaywrightSessionFactory

__all__ = [
    "HostActionError",
    "HostError",
    "HostTimeoutError",
    "HostTransportError",
    "HttpClient",
    "HttpClientFactory",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "HttpxClientFactory",
    "Options",
    "PageCapability",
    "PageSessionFactory",
    "PlaywrightPage",
    "PlaywrightSessionFactory",
    "build_url",
]
