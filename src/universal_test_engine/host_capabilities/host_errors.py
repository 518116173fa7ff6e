"""Failures raised by host HTTP and page adapters."""

from __future__ import annotations


class HostError(Exception):
    """Base class for failures of the environment rather than the system under test."""


class HostTimeoutError(HostError):
    """Raised when a request, navigation or page action exceeds its time budget."""


class HostTransportError(HostError):
    """Raised when a request could not be delivered or answered."""


class HostActionError(HostError):
    """Raised when the browser rejects an action or cannot be driven at all."""
