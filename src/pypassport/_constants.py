"""Internal constants shared across the library."""

BASE_URL = "https://passport.kurtisknodel.com/api/"
DEFAULT_REQUEST_TIMEOUT: float = 30.0

# Two-character prefix marking a hex-encoded wire value (backslash + "x").
HEX_MARKER = "\\x"

# Storage slot names.
CREDENTIAL_SLOT = "session-credential"
ACCOUNT_ID_SLOT = "session-account-id"

# Query parameter carrying the credential on the landing page.
LANDING_PARAM = "key"

# ------------------------------------------------------------------
# Remote endpoints (relative to the base URL)
# ------------------------------------------------------------------

ENDPOINT_ACCOUNT_UID = "account/uid"
ENDPOINT_ACCOUNT_DATA = "account/data"
ENDPOINT_AUTHENTICATION = "authentication"
