# tookan_relay/orders/draft.py
from typing import Any, Dict, Mapping

from tookan_relay.orders.properties import extract_properties

TAX_LINE_TITLE = "Taxes"


def build_draft_order(form: Mapping[str, str], tax_field: str) -> Dict[str, Any]:
    """
    Two line items: the ordered variant with its regular properties, and a
    non-taxable "Taxes" line priced from ``tax_field`` carrying the
    Y-prefixed properties. The tax amount itself is not repeated as a property.
    """
    fields = {k: v for k, v in form.items() if k != tax_field}
    return {
        "line_items": [
            {
                "variant_id": form.get("id"),
                "quantity": form.get("quantity"),
                "properties": [p.model_dump() for p in extract_properties(fields, False)],
            },
            {
                "title": TAX_LINE_TITLE,
                "price": form.get(tax_field),
                "taxable": False,
                "quantity": 1,
                "properties": [p.model_dump() for p in extract_properties(fields, True)],
            },
        ]
    }
