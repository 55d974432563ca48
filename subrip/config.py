"""Configuration for the subrip library and service"""

import os

# Server configuration
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = int(os.getenv("SUBRIP_PORT", "8769"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "info")

# Documents held in memory by the service at once
MAX_DOCUMENTS = int(os.getenv("SUBRIP_MAX_DOCUMENTS", "100"))

# Files
DEFAULT_ENCODING = os.getenv("SUBRIP_ENCODING", "utf-8")
MIME_TYPE = "application/x-subrip"
