import os

from dotenv import load_dotenv

# Load from .env if it exists (useful for local development)
load_dotenv()


def _optional_int(name: str):
    raw = os.getenv(name, "").strip()
    if not raw.isdigit():
        return None
    return int(raw)


LOGGING_LEVEL = os.getenv("LOGGING_LEVEL", "WARNING").upper() or "WARNING"

# Upper bound on the declared tag size honoured by Id3Reader.from_env().
# Unset (or non-numeric) means no limit.
MAX_TAG_SIZE = _optional_int("ID3READ_MAX_TAG_SIZE")
