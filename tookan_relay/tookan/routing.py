# tookan_relay/tookan/routing.py
"""
Picks the Tookan registration call for a Shopify customer webhook.

Customers tagged ``agent`` become delivery agents; everyone else is added
as a Tookan customer. Missing fields fall back to the defaults tables below.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, field_validator

from tookan_relay.core.config import Settings

AGENT_TAG = "agent"
ADD_AGENT_PATH = "/v2/add_agent"
ADD_CUSTOMER_PATH = "/v2/customer/add"

AGENT_DEFAULTS: Dict[str, str] = {
    "phone": "000",
    "first_name": "First",
    "last_name": "Last",
}

CUSTOMER_DEFAULTS: Dict[str, str] = {
    "name": "Test",
    "phone": "000",
}


class WebhookPayload(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: Optional[Any] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None
    default_address: Optional[Any] = None
    tags: List[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, v: Any) -> List[str]:
        # Shopify sends tags as "a, b, c"; form bodies may send a list
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        return [t.strip() for item in v for t in str(item).split(",") if t.strip()]

    @property
    def is_agent(self) -> bool:
        return AGENT_TAG in self.tags


@dataclass(frozen=True)
class DispatchRequest:
    endpoint: str
    body: Dict[str, Any]


def _with_defaults(values: Dict[str, Any], defaults: Dict[str, str]) -> Dict[str, Any]:
    # falsy values ("" or None) take the default, like the storefront's blanks
    return {k: (v or defaults[k]) if k in defaults else v for k, v in values.items()}


def route_payload(payload: WebhookPayload, settings: Settings) -> DispatchRequest:
    if payload.is_agent:
        body = _with_defaults({
            "username": payload.email,
            "phone": payload.phone,
            "first_name": payload.first_name,
            "last_name": payload.last_name,
        }, AGENT_DEFAULTS)
        body.update({
            "team_id": settings.TOOKAN_TEAM,
            "timezone": settings.TOOKAN_TIMEZONE,
            "color": settings.TOOKAN_COLOR,
        })
        return DispatchRequest(endpoint=ADD_AGENT_PATH, body=body)

    body = _with_defaults({
        "user_type": 0,
        "email": payload.email,
        "name": payload.name,
        "phone": payload.phone,
        "address": payload.default_address,
    }, CUSTOMER_DEFAULTS)
    return DispatchRequest(endpoint=ADD_CUSTOMER_PATH, body=body)
