# tookan_relay/api/forms.py
from typing import Dict, List, Tuple
from urllib.parse import parse_qsl

from tookan_relay.api.errors import MalformedPayloadError


def parse_form_pairs(body: bytes) -> List[Tuple[str, str]]:
    """Decode an x-www-form-urlencoded body, keeping blank values and key order."""
    try:
        return parse_qsl(body.decode("utf-8"), keep_blank_values=True, errors="strict")
    except UnicodeDecodeError as e:
        raise MalformedPayloadError("Request body is not valid UTF-8") from e


def parse_form(body: bytes) -> Dict[str, str]:
    # repeated keys: last one wins
    return dict(parse_form_pairs(body))
