"""
Configuration settings for PlateProof.

Centralized configuration for the read-model pipeline and the CLI.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"

# Platform identity that must receive review payments
PLATFORM_PUBKEY = os.getenv(
    "PLATEPROOF_PLATFORM_PUBKEY",
    "plateproof_platform_pubkey_placeholder"
)

# Snapshot file names (inside DATA_ROOT)
LISTINGS_FILE = "listings.json"
REVIEWS_FILE = "reviews.json"
RECEIPTS_FILE = "receipts.json"

# Listing view
OPEN_ONLY = True  # Hide closed/inactive listings from the view
DEFAULT_RADIUS_KM = 10.0
FEATURED_EXCERPT_CHARS = 140

# Featured review selection (None = unseeded)
FEATURED_SEED = os.getenv("PLATEPROOF_FEATURED_SEED")

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "plateproof.log"
