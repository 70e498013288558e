import os
import yaml

ROOT_PATH = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_FILE_PATH = os.environ.get("LOGIN_SERVICE_CONFIG", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    CREDENTIAL_STORE = data.get("CREDENTIAL_STORE", "sql")  # "sql" or "file"
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./users.db")
    USERS_FILE = data.get("USERS_FILE", "./data/users.json")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 10))
    RESET_TOKEN_TTL_SECONDS = int(data.get("RESET_TOKEN_TTL_SECONDS", 3600))
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:3000")
    RESET_PASSWORD_PATH = data.get("RESET_PASSWORD_PATH", "/account/reset-password")
