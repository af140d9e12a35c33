import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./matching.db")

# Seconds the live matching config is reused before re-reading the database
MATCHING_CONFIG_CACHE_TTL_SECONDS = float(os.getenv("MATCHING_CONFIG_CACHE_TTL_SECONDS", "300"))

# Optional fixed seed for reproducible demos; unset means fresh randomness per request
_seed = os.getenv("MATCHING_RANDOM_SEED")
MATCHING_RANDOM_SEED = int(_seed) if _seed else None

CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
