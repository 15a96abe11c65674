from decouple import config
from dotenv import load_dotenv

load_dotenv()

DEBUG = config("DEBUG", cast=bool, default=False)
DOCS = config("DOCS", cast=bool, default=False)
LOG_LEVEL = config("LOG_LEVEL", default="INFO")

UVICORN_HOST = config("UVICORN_HOST", default="0.0.0.0")
UVICORN_PORT = config("UVICORN_PORT", cast=int, default=8000)
UVICORN_UDS = config("UVICORN_UDS", default=None)
UVICORN_SSL_CERTFILE = config("UVICORN_SSL_CERTFILE", default=None)
UVICORN_SSL_KEYFILE = config("UVICORN_SSL_KEYFILE", default=None)

ALLOWED_ORIGINS = config("ALLOWED_ORIGINS", cast=lambda v: [x.strip() for x in v.split(',') if x.strip()], default="")

# sql | firestore
STORE_BACKEND = config("STORE_BACKEND", default="sql")
SQLALCHEMY_DATABASE_URL = config("SQLALCHEMY_DATABASE_URL", default="sqlite:///db.sqlite3")
FIRESTORE_PROJECT_ID = config("FIRESTORE_PROJECT_ID", default=None)
FIRESTORE_CREDENTIALS = config("FIRESTORE_CREDENTIALS", default=None)

LINE_CHANNEL_ID = config("LINE_CHANNEL_ID", default="")
LINE_CHANNEL_SECRET = config("LINE_CHANNEL_SECRET", default="")
LINE_CHANNEL_ACCESS_TOKEN = config("LINE_CHANNEL_ACCESS_TOKEN", default="")

ADMIN_LINE_USER_IDS = config(
    "ADMIN_LINE_USER_IDS",
    cast=lambda v: [x.strip() for x in v.split(',') if x.strip()],
    default=""
)

DEFAULT_CURRENCY = config("DEFAULT_CURRENCY", default="TWD")
