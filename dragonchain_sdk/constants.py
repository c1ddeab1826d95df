"""
Constants for the Dragonchain SDK.
Header names and resolution sources understood by Dragonchain nodes.
"""

# HTTP Headers
HEADER_DRAGONCHAIN = "dragonchain"
HEADER_AUTHORIZATION = "Authorization"
HEADER_TIMESTAMP = "timestamp"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_CALLBACK_URL = "X-Callback-URL"

CONTENT_TYPE_JSON = "application/json"

# Authorization scheme: DC<version>-HMAC-<algorithm>
AUTH_SCHEME_VERSION = "1"

# Environment variables
ENV_DRAGONCHAIN_ID = "DRAGONCHAIN_ID"
ENV_DRAGONCHAIN_ENDPOINT = "DRAGONCHAIN_ENDPOINT"
ENV_AUTH_KEY = "AUTH_KEY"
ENV_AUTH_KEY_ID = "AUTH_KEY_ID"
ENV_SMART_CONTRACT_ID = "SMART_CONTRACT_ID"
ENV_LOG_LEVEL = "DRAGONCHAIN_LOG_LEVEL"

# Smart contract secret mount (sc-<contract id>-<suffix>)
SECRETS_BASE_DIR = "/var/openfaas/secrets"
SECRET_PREFIX = "sc"
SECRET_AUTH_KEY_ID = "auth-key-id"
SECRET_AUTH_KEY = "secret-key"

# Config file sections/fields
CONFIG_DEFAULT_SECTION = "default"
CONFIG_DRAGONCHAIN_ID = "dragonchain_id"
CONFIG_ENDPOINT = "endpoint"
CONFIG_AUTH_KEY = "auth_key"
CONFIG_AUTH_KEY_ID = "auth_key_id"

# Endpoint discovery
DISCOVERY_URL = "https://matchmaking.api.dragonchain.com/registration/{dragonchain_id}"
DISCOVERY_TIMEOUT = 30

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,              # HTTP timeout in seconds
    'discovery_timeout': DISCOVERY_TIMEOUT,
}

DEFAULT_QUERY_OFFSET = 0
DEFAULT_QUERY_LIMIT = 10
