"""
Application constants.

Centralized constants for the application.
"""

# ========================================================================
# APPLICATION
# ========================================================================

APP_NAME = "USDT Rain Backend API"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = (
    "Backend API for managing eligible users and global pool distribution"
)

# ========================================================================
# BLOCKCHAIN CONSTANTS
# ========================================================================

# Blockchain operation timeouts (in seconds)
BLOCKCHAIN_TIMEOUT = 30.0  # Standard read calls
BLOCKCHAIN_EXECUTOR_TIMEOUT = 20.0  # Timeout for run_in_executor operations
BLOCKCHAIN_RPC_TIMEOUT = 30  # RPC provider HTTP timeout
BLOCKCHAIN_RECEIPT_TIMEOUT = 180  # Waiting for a transaction to be mined

# Blockchain retry settings
BLOCKCHAIN_MAX_RETRIES = 3
BLOCKCHAIN_RETRY_DELAY_BASE = 2

# Executor pool size for sync Web3 calls
BLOCKCHAIN_EXECUTOR_WORKERS = 4

# ========================================================================
# GAS
# ========================================================================

# Percent applied on top of estimate_gas()
ELIGIBLE_USER_GAS_BUFFER_PERCENT = 120
DISTRIBUTION_GAS_BUFFER_PERCENT = 130

# ========================================================================
# TOKEN
# ========================================================================

USDT_DECIMALS = 18
NATIVE_DECIMALS = 18

# ========================================================================
# ELIGIBILITY
# ========================================================================

DEFAULT_MIN_REFERRALS_FOR_ELIGIBILITY = 10

# ========================================================================
# HTTP
# ========================================================================

RATE_LIMIT_WINDOW_SECONDS = 15 * 60
RATE_LIMIT_MAX_REQUESTS = 100

API_KEY_HEADER = "X-API-Key"
API_KEY_QUERY_PARAM = "apiKey"
REQUEST_ID_HEADER = "X-Request-ID"

DEFAULT_LOG_QUERY_LIMIT = 50

# ========================================================================
# LOGGING
# ========================================================================

COMBINED_LOG_FILE = "combined.log"
ERROR_LOG_FILE = "error.log"
REQUESTS_LOG_FILE = "requests.log"

COMBINED_LOG_ROTATION = "5 MB"
COMBINED_LOG_RETENTION = 5
REQUESTS_LOG_ROTATION = "10 MB"
REQUESTS_LOG_RETENTION = 10

# Old log cleanup default
LOG_RETENTION_DAYS = 7

# Request body fields never written to disk
SENSITIVE_FIELDS = ("privateKey", "password", "secret", "token", "apiKey")
REDACTED_VALUE = "***REDACTED***"
