"""Per-case diagnostic attachments (request/response logs, screenshots)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Protocol

from universal_test_engine.document_values import to_jsonable

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"
PNG_CONTENT_TYPE = "image/png"

_EXTENSIONS = {
    JSON_CONTENT_TYPE: ".json",
    TEXT_CONTENT_TYPE: ".txt",
    PNG_CONTENT_TYPE: ".png",
}


@dataclass(frozen=True)
class Attachment:
    """Named diagnostic payload captured while a case ran."""

    name: str
    content_type: str
    payload: bytes

    @property
    def file_extension(self) -> str:
        return _EXTENSIONS.get(self.content_type, ".bin")


class DiagnosticSink(Protocol):
    """Accepts named attachments for the case attempt currently running."""

    def attach_json(self, name: str, data: object) -> None: ...

    def attach_text(self, name: str, text: str) -> None: ...

    def attach_binary(
        self, name: str, data: bytes, content_type: str = PNG_CONTENT_TYPE
    ) -> None: ...


class CaseDiagnostics:
    """Collects the attachments of one case attempt, in capture order.

    Each attempt owns its own instance, so no locking is needed.
    """

    def __init__(self) -> None:
        self._attachments: list[Attachment] = []

    def attach_json(self, name: str, data: object) -> None:
        text = json.dumps(to_jsonable(data), ensure_ascii=False, indent=2, default=str)
        self._attachments.append(
            Attachment(name=name, content_type=JSON_CONTENT_TYPE, payload=text.encode("utf-8"))
        )

    def attach_text(self, name: str, text: str) -> None:
        self._attachments.append(
            Attachment(name=name, content_type=TEXT_CONTENT_TYPE, payload=text.encode("utf-8"))
        )

    def attach_binary(self, name: str, data: bytes, content_type: str = PNG_CONTENT_TYPE) -> None:
        self._attachments.append(Attachment(name=name, content_type=content_type, payload=data))

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        return tuple(self._attachments)

    def named(self, name: str) -> Attachment | None:
        """Return the latest attachment with the given name."""
        for attachment in reversed(self._attachments):
            if attachment.name == name:
                return attachment
        return None
