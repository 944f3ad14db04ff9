"""
Server hosts and endpoint paths for the Engage Voice platform.
"""
from typing import Tuple

SERVER = "https://engage.ringcentral.com"

# Deprecated hosts that still speak the username/password login flow
LEGACY_SERVERS: Tuple[str, ...] = (
    "https://portal.vacd.biz",
    "https://portal.virtualacd.biz",
)

RINGCENTRAL_SERVER = "https://platform.ringcentral.com"

DEFAULT_API_PREFIX = "voice"

# Legacy endpoints
LEGACY_LOGIN_PATH = "/api/v1/auth/login"
LEGACY_API_TOKEN_PATH = "/api/v1/admin/token"

# Modern endpoint: RingCentral access token -> Engage Voice token bundle
ACCESS_TOKEN_PATH = "/api/auth/login/rc/accesstoken?includeRefresh=true"

# Identity platform
OAUTH_TOKEN_PATH = "/restapi/oauth/token"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

USER_AGENT_NAME = "ringcentral-engage-voice-python"

VERSION = "0.1.0"
