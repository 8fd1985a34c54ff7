"""Application settings."""

import os
from pathlib import Path

# Database
DB_PATH = os.getenv("COUNCIL_DB_PATH", "council.duckdb")

# Logging
LOG_DIR = Path(os.getenv("COUNCIL_LOG_DIR", "logs"))

# Concurrency
LOCK_TIMEOUT = float(os.getenv("COUNCIL_LOCK_TIMEOUT", "10.0"))

# Caller-side retries for transient store errors
STORE_RETRY_ATTEMPTS = int(os.getenv("COUNCIL_STORE_RETRIES", "3"))
