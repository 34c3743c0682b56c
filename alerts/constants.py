"""Constants shared across the alerting app."""

REQUEST_ID_HEADER = "X-Request-ID"
API_VERSION_PREFIX = "api/v1/alerting/"
