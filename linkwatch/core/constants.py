import os
import tempfile

# Load environment variables from .env file
from dotenv import load_dotenv

load_dotenv()

# Monitor defaults (overridable from environment)
DEFAULT_CHECK_INTERVAL_MS = int(os.getenv("LINKWATCH_CHECK_INTERVAL_MS", "30000"))
DEFAULT_PING_URL = os.getenv("LINKWATCH_PING_URL", "/api/health")
DEFAULT_TIMEOUT_MS = int(os.getenv("LINKWATCH_TIMEOUT_MS", "5000"))
DEFAULT_ENABLE_PERIODIC_CHECK = os.getenv("LINKWATCH_ENABLE_PERIODIC_CHECK", "1") not in ("0", "false", "no")
DEFAULT_BASE_URL = os.getenv("LINKWATCH_BASE_URL") or None

# Latency thresholds (ms) for quality tiers, upper bounds are exclusive
EXCELLENT_LATENCY_MS = 200
GOOD_LATENCY_MS = 500
FAIR_LATENCY_MS = 1000

# Headers sent with every probe so proxies and caches never answer for the backend
PROBE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

# How often SystemHost re-reads the OS routing table
HOST_POLL_INTERVAL_S = float(os.getenv("LINKWATCH_HOST_POLL_INTERVAL_S", "5"))

# Temporary directory (cross-platform)
TMPDIR = os.path.join(tempfile.gettempdir(), "linkwatch")

# Log files
LOG_FILE = os.path.join(TMPDIR, "linkwatch.log")
