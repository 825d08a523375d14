from fastapi import Request
from tookan_relay.core.config import Settings

def get_settings(request: Request) -> Settings:
    return request.app.state.settings
