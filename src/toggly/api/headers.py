"""HTTP header names of the public protocol."""

AUTH_HEADER = "X-Toggly-Auth"
OWNER_HEADER = "X-Toggly-Owner-Id"
REQUEST_ID_HEADER = "X-Toggly-Request-Id"
SERVICE_NAME_HEADER = "X-Service-Name"
SERVICE_VERSION_HEADER = "X-Service-Version"

SERVICE_NAME = "Toggly"
