# tookan_relay/orders/properties.py
"""
Line item properties arrive as flat bracket-notation form keys, e.g.
``properties[Gift note]=Hello``. Labels starting with an uppercase ``Y``
are tax properties and go on the synthetic "Taxes" line instead of the
product line.
"""
import re
from typing import List, Mapping, Optional
from pydantic import BaseModel

_LABEL_RE = re.compile(r"\[([^\]]*)\]")
_STRIP = str.maketrans("", "", "[\"'")


class PropertyEntry(BaseModel):
    name: str
    value: str


def is_tax_label(label: str) -> bool:
    return label.startswith("Y")


def parse_label(key: str) -> Optional[str]:
    """Label between the first ``[`` and its ``]``, without brackets or quotes."""
    m = _LABEL_RE.search(key)
    if not m:
        return None
    return m.group(1).translate(_STRIP)


def extract_properties(fields: Mapping[str, str], want_tax: bool) -> List[PropertyEntry]:
    entries: List[PropertyEntry] = []
    for key, value in fields.items():
        if "properties" not in key or value == "":
            continue
        label = parse_label(key)
        if label is None:
            continue
        if is_tax_label(label) != want_tax:
            continue
        entries.append(PropertyEntry(name=label, value=str(value)))
    return entries
