# Constants
API_PREFIX = "/api/commands"
DEFAULT_COMMANDS_PREFIX = "commands/"

COMMAND_STORE_TYPE = "memory"
STORAGE_PROVIDER_TYPE = "memory"

DEFAULT_S3_ENDPOINT = "storage.googleapis.com"
DEFAULT_S3_BUCKET = "command-api-store"

DEFAULT_CORS_ALLOW_ORIGINS = [
    "http://127.0.0.1:5500",
    "http://localhost:5500",
    "http://localhost:3000",
]

DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 8000
