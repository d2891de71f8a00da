"""Constants for GitHub service."""

API_VERSION = "2022-11-28"
ACCEPT_HEADER = "application/vnd.github+json"

# Contents API returns 200 for updates and 201 for creates
WRITE_OK_STATUSES = (200, 201)

# Client timeouts (seconds)
REQUEST_TIMEOUT = 30.0
CONNECT_TIMEOUT = 5.0
