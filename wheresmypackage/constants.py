"""
Shared constants for Where's My Package.

Defaults only. Runtime values are carried by ``Settings`` and injected
into the session, narrator and client at construction.
"""

from typing import Tuple

# ── Tracking service ──

DEFAULT_API_BASE = "http://localhost:8080"
DEFAULT_TIMEOUT_SECONDS = 30.0
TRACK_PATH = "/track/{tracking_number}/{carrier}"

# ── Deep-link query parameters ──

QUERY_TRACKING_ID = "trackingID"
QUERY_CARRIER = "carrier"

# ── Timeline ──

UNKNOWN_LOCATION = "Unknown"

# ── Flags ──

FLAG_CDN_URL = "https://flagcdn.com/{code}.svg"

# ── Loading narrator ──

NARRATOR_INTERVAL_SECONDS = 3.0

LOADING_MESSAGES: Tuple[str, ...] = (
    "Searching for your package in the multiverse...",
    "Teaching pigeons to track packages...",
    "Consulting with the delivery ninjas...",
    "Asking the delivery gods for guidance...",
    "Bribing the GPS satellites...",
    "Checking under the couch cushions...",
    "Sending carrier pigeons for reconnaissance...",
    "Decoding the secret package language...",
    "Calculating quantum package trajectories...",
    "Summoning the package whisperer...",
)

# ── Environment variables ──

ENV_CONFIG_PATH = "WHERESMYPACKAGE_CONFIG"
ENV_API_HOSTNAME = "WHERESMYPACKAGE_API_HOSTNAME"
ENV_TIMEOUT = "WHERESMYPACKAGE_TIMEOUT"
ENV_HOST = "WHERESMYPACKAGE_HOST"
ENV_PORT = "WHERESMYPACKAGE_PORT"
