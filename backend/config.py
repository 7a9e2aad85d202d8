# backend/config.py
import os
from dotenv import load_dotenv

# This will load .env from the project root when you run from there
load_dotenv()

TRIALS_DATA_PATH = os.getenv(
    "TRIALS_DATA_PATH", os.path.join("data", "ctg-studies.json")
)

# Resolved relative to backend/nlp/ unless an absolute path is given
SYNONYMS_FILE = os.getenv("SYNONYMS_FILE", "clinical_synonyms.json")

# Canonical page size of the search core; the UI pages with whatever the API reports
SEARCH_PAGE_SIZE = int(os.getenv("SEARCH_PAGE_SIZE", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
