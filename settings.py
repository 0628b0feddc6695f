import os
from core.log import logger

if os.environ.get("ENVIRONTMENT") != "os":
    logger.info("load env from file")
    from dotenv import load_dotenv

    load_dotenv()
else:
    logger.info("load env from os")


def str_to_bool(string: str) -> bool:
    if string in ["true", "TRUE", "True"]:
        return True
    elif string in ["false", "FALSE", "False"]:
        return False
    else:
        raise Exception(
            f"{string} is not boolean, ex input true -> true, True, TRUE, ex input false -> false, False, FALSE"
        )


def str_to_list(string: str) -> list[str]:
    return [item.strip() for item in string.split(",") if item.strip()]


# Environtment
ENVIRONTMENT = os.environ.get("ENVIRONTMENT")

# JWT conf
SECRET_KEY = os.environ.get("SECRET_KEY", "volunteer_hub_secret")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 30))
REFRESH_TOKEN_EXPIRE_MINUTES = int(
    os.environ.get("REFRESH_TOKEN_EXPIRE_MINUTES", 60 * 24)
)

# Password reset
PASSWORD_RESET_EXPIRE_MINUTES = int(
    os.environ.get("PASSWORD_RESET_EXPIRE_MINUTES", 60)
)

# Database conf, DATABASE_URL wins over the POSTGRES_* parts
POSTGRES_USER = os.environ.get("POSTGRES_USER")
POSTGRES_PASSWORD = os.environ.get("POSTGRES_PASSWORD")
POSTGRES_HOST = os.environ.get("POSTGRES_HOST")
POSTGRES_PORT = os.environ.get("POSTGRES_PORT")
POSTGRES_DATABASE = os.environ.get("POSTGRES_DATABASE")
DATABASE_URL = os.environ.get(
    "DATABASE_URL",
    f"postgresql+psycopg://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DATABASE}",
)

FRONTEND_BASE_URL = os.environ.get("FRONTEND_BASE_URL", "http://localhost:3000")

# Pagination
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = int(os.environ.get("DEFAULT_PAGE_SIZE", 10))
MAX_PAGE_SIZE = int(os.environ.get("MAX_PAGE_SIZE", 100))

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# MAIL conf
MAIL_USERNAME = os.environ.get("MAIL_USERNAME", "")
MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD", "")
MAIL_FROM = os.environ.get("MAIL_FROM", "test@example.com")
MAIL_PORT = int(os.environ.get("MAIL_PORT", "465"))
MAIL_SERVER = os.environ.get("MAIL_SERVER", "localhost")
MAIL_FROM_NAME = os.environ.get("MAIL_FROM_NAME", "Volunteer Hub")
MAIL_TLS = str_to_bool(os.environ.get("MAIL_TLS", "False"))
MAIL_SSL = str_to_bool(os.environ.get("MAIL_SSL", "True"))
USE_CREDENTIALS = str_to_bool(os.environ.get("USE_CREDENTIALS", "True"))
MAIL_SUPPRESS_SEND = str_to_bool(os.environ.get("MAIL_SUPPRESS_SEND", "False"))

# Rate limiter conf
RATE_LIMIT_ENABLED = str_to_bool(os.environ.get("RATE_LIMIT_ENABLED", "True"))
RATE_LIMIT_BACKEND = os.environ.get("RATE_LIMIT_BACKEND", "memory")
REDIS_URL = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
RATE_LIMIT_PER_MINUTE = int(os.environ.get("RATE_LIMIT_PER_MINUTE", 100))
RATE_LIMIT_WINDOW = int(os.environ.get("RATE_LIMIT_WINDOW", 60))
RATE_LIMIT_EXCLUDED_PATHS = str_to_list(
    os.environ.get("RATE_LIMIT_EXCLUDED_PATHS", "/health,/docs,/openapi.json")
)
FORGOT_PASSWORD_RATE_LIMIT = int(os.environ.get("FORGOT_PASSWORD_RATE_LIMIT", 3))
FORGOT_PASSWORD_RATE_WINDOW = int(
    os.environ.get("FORGOT_PASSWORD_RATE_WINDOW", 15 * 60)
)
