import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths (local JSON exports of the hosted tables)
DATA_DIR = Path(os.getenv("CONNECTWORK_DATA_DIR", "data"))
JOBS_FILE = DATA_DIR / "jobs.json"
WORKERS_FILE = DATA_DIR / "workers.json"

# Geo
EARTH_RADIUS_KM = 6371.0
DEFAULT_WORKER_MAX_DISTANCE_KM = 50.0

# Geocoding (OpenStreetMap Nominatim)
NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
GEOCODER_USER_AGENT = os.getenv("GEOCODER_USER_AGENT", "ConnectWork/1.0")
GEOCODER_LANGUAGE = "en"
GEOCODING_TIMEOUT = float(os.getenv("GEOCODING_TIMEOUT", "10"))
CURRENT_LOCATION_LABEL = "Current location"

# Relevance weights (must sum to 1)
SKILL_WEIGHT = 0.5
EXPERIENCE_WEIGHT = 0.3
RATING_WEIGHT = 0.2
EXPERIENCE_CAP_YEARS = 10
UNRATED_RATING_SCORE = 0.0  # Workers with no reviews yet

# Matching settings
DEFAULT_MIN_MATCH_SCORE = 0.3
SKILL_MATCH_THRESHOLD = 85  # rapidfuzz ratio (0-100) for the fuzzy matcher
