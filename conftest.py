import os

# settings are read at import time, so the test environment is set up
# before any application module is collected
os.environ.setdefault("ENVIRONTMENT", "os")
os.environ.setdefault("DATABASE_URL", "sqlite:///./volunteer_hub_test.db")
os.environ.setdefault("RATE_LIMIT_ENABLED", "False")
os.environ.setdefault("RATE_LIMIT_BACKEND", "memory")
os.environ.setdefault("MAIL_SUPPRESS_SEND", "True")
os.environ.setdefault("LOG_LEVEL", "WARNING")
