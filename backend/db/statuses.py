# backend/db/statuses.py

# overallStatus values present in the ctg-studies.json export.
# Keep in sync with the dataset snapshot the loader reads.
STATUSES = [
    "RECRUITING",
    "NOT_YET_RECRUITING",
    "ACTIVE_NOT_RECRUITING",
    "COMPLETED",
    "SUSPENDED",
    "TERMINATED",
    "WITHDRAWN",
    "WITHHELD",
]
