import os
from dotenv import load_dotenv

# load env
load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _default_db_url() -> str:
    # default to ./pastes/pastes.db
    db_path = os.path.abspath(os.path.join(os.getcwd(), "pastes", "pastes.db"))
    return f"sqlite+aiosqlite:///{db_path}"


def normalize_db_url(url: str) -> str:
    """Hosted Postgres hands out postgres:// URLs; SQLAlchemy only knows postgresql://."""
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


DATABASE_URL = normalize_db_url(os.getenv("DATABASE_URL") or _default_db_url())

# LOCAL set -> plain connection, otherwise TLS to the database
LOCAL = bool(os.getenv("LOCAL"))
DATABASE_SSL_VERIFY = os.getenv("DATABASE_SSL_VERIFY") == "1"

PORT = os.getenv("PORT")
HOST = os.getenv("HOST") or "0.0.0.0"

CORS_ORIGINS = [o.strip() for o in (os.getenv("CORS_ORIGINS") or "*").split(",") if o.strip()]

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").upper()

PUBLIC_DIR = os.getenv("PUBLIC_DIR") or os.path.join(BASE_DIR, "public")
