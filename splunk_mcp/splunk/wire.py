"""Decoding of Splunk response bodies that may arrive as JSON or XML.

Several management endpoints (job creation, login) answer in JSON when asked
with ``output_mode=json`` but fall back to an XML envelope on some versions
and error paths. The helpers here sniff the body, dispatch to the matching
decoder and return the same plain value either way.
"""

import json
import xml.etree.ElementTree as ET
from enum import Enum
from typing import List, Optional, Union

Body = Union[bytes, str]

# BOM and whitespace allowed before the first significant byte
_LEADING = b"\xef\xbb\xbf \t\r\n"


class WireFormat(str, Enum):
    """Encoding detected from a response body."""

    JSON = "json"
    XML = "xml"


def _as_bytes(body: Body) -> bytes:
    return body.encode("utf-8") if isinstance(body, str) else body


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def sniff_format(body: Body) -> WireFormat:
    """Detect whether a body is XML or JSON from its leading bytes.

    An XML declaration (``<?xml``) or any root tag marks the body as XML;
    everything else is handed to the JSON decoder.
    """
    if _as_bytes(body).lstrip(_LEADING).startswith(b"<"):
        return WireFormat.XML
    return WireFormat.JSON


def extract_from_json(body: Body, key: str) -> Optional[str]:
    """Read a top-level string value from a JSON object body.

    Returns:
        The value as a string, or None when the key is absent or empty

    Raises:
        ValueError: If the body is not a JSON object
    """
    try:
        data = json.loads(_as_bytes(body))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    value = data.get(key)
    if value is None or value == "":
        return None
    return str(value)


def extract_from_xml(body: Body, tag: str) -> Optional[str]:
    """Read the text of the first element named ``tag`` from an XML body.

    Namespaces are ignored so that both plain ``<response>`` envelopes and
    Atom feeds are handled.

    Raises:
        ValueError: If the body is not well-formed XML
    """
    try:
        root = ET.fromstring(_as_bytes(body).lstrip(_LEADING))
    except ET.ParseError as e:
        raise ValueError(f"Invalid XML: {e}") from e
    for element in root.iter():
        if _local_name(element.tag) == tag:
            text = (element.text or "").strip()
            return text or None
    return None


def extract_value(body: Body, key: str) -> str:
    """Extract ``key`` from a body in whichever format it arrived.

    Raises:
        ValueError: If the body cannot be decoded or does not contain ``key``
    """
    fmt = sniff_format(body)
    if fmt is WireFormat.XML:
        value = extract_from_xml(body, key)
    else:
        value = extract_from_json(body, key)
    if value is None:
        raise ValueError(f"No '{key}' in {fmt.value.upper()} response")
    return value


def extract_messages(body: Body) -> List[str]:
    """Collect backend diagnostic messages from an error body.

    Splunk reports failures as ``{"messages": [{"type": ..., "text": ...}]}``
    or ``<response><messages><msg type="...">...</msg></messages></response>``.
    Undecodable bodies yield no messages.
    """
    messages = []
    try:
        if sniff_format(body) is WireFormat.XML:
            root = ET.fromstring(_as_bytes(body).lstrip(_LEADING))
            for element in root.iter():
                if _local_name(element.tag) == "msg" and element.text:
                    messages.append(element.text.strip())
        else:
            data = json.loads(_as_bytes(body))
            entries = data.get("messages") if isinstance(data, dict) else None
            if isinstance(entries, list):
                for msg in entries:
                    if isinstance(msg, dict) and msg.get("text"):
                        messages.append(str(msg["text"]))
    except (ET.ParseError, json.JSONDecodeError, UnicodeDecodeError):
        return []
    return messages


def describe_error(body: Body, limit: int = 200) -> str:
    """Backend messages joined, or a truncated raw body when there are none."""
    messages = extract_messages(body)
    if messages:
        return "; ".join(messages)
    text = _as_bytes(body).decode("utf-8", errors="replace").strip()
    return text[:limit] if text else "empty response"
