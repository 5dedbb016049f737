from __future__ import annotations

from email.message import EmailMessage
from email.utils import parseaddr
from typing import Any, Mapping, Optional

from outlook_ai.models import EmailText


def _address(value: Any) -> Optional[str]:
    """
    Pull a bare address out of the sender shapes the mail layers produce:
    "Name <a@b>", {"address": ...}, {"emailAddress": {...}} or
    mailparser's {"value": [{"address": ...}], "text": ...}.
    """
    if not value:
        return None
    if isinstance(value, str):
        address = parseaddr(value)[1].strip()
        return address or value.strip() or None
    if isinstance(value, Mapping):
        if value.get("address"):
            return str(value["address"]).strip() or None
        if value.get("emailAddress"):
            return _address(value["emailAddress"])
        for entry in value.get("value") or []:
            found = _address(entry)
            if found:
                return found
        if value.get("text"):
            return _address(value["text"])
    return None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def email_text_from_request(payload: Mapping[str, Any]) -> EmailText:
    """API body shape: {"emailContent", "subject", "from"}."""
    return EmailText(
        subject=_text(payload.get("subject")),
        body=_text(payload.get("emailContent")),
        sender_address=_address(payload.get("from")),
    )


def email_text_from_graph(message: Mapping[str, Any]) -> EmailText:
    """Microsoft Graph message resource."""
    body = (message.get("body") or {}).get("content")
    if not body:
        # List queries only select bodyPreview.
        body = message.get("bodyPreview")
    return EmailText(
        subject=_text(message.get("subject")),
        body=_text(body),
        sender_address=_address(message.get("from")),
    )


def email_text_from_imap(parsed: Mapping[str, Any]) -> EmailText:
    """mailparser-style parsed IMAP message. Plain text wins over HTML."""
    body = parsed.get("text") or parsed.get("html")
    return EmailText(
        subject=_text(parsed.get("subject")),
        body=_text(body),
        sender_address=_address(parsed.get("from")),
    )


def email_text_from_message(msg: EmailMessage) -> EmailText:
    """
    Stdlib EmailMessage (e.g. a parsed .eml file).
    Falls back to HTML if plain text is unavailable.
    """
    part = msg.get_body(preferencelist=("plain", "html"))
    body: Optional[str] = None
    if part is not None:
        body = part.get_content()
    elif msg.get_content_maintype() == "text":
        body = msg.get_content()
    return EmailText(
        subject=_text(msg.get("Subject")),
        body=body,
        sender_address=_address(msg.get("From")),
    )
