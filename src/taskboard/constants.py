APP_NAME = "Task Board"
CONFIG_FILE = "taskboard.yaml"
STORE_FORMAT_VERSION = 1
WINDOWS_LOCK_BYTES = 4096

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4000
DEFAULT_API_URL = "http://127.0.0.1:4000"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_REQUEST_TIMEOUT = 10.0

ENV_CONFIG = "TASKBOARD_CONFIG"
ENV_DATABASE_URL = "TASKBOARD_DATABASE_URL"
ENV_HOST = "TASKBOARD_HOST"
ENV_PORT = "TASKBOARD_PORT"
ENV_API_URL = "TASKBOARD_API_URL"
ENV_LOG_LEVEL = "TASKBOARD_LOG_LEVEL"
ENV_CORS = "TASKBOARD_CORS"
ENV_TIMEOUT = "TASKBOARD_TIMEOUT"

TASKS_PATH = "/api/tasks"

# Error bodies returned by the API (``{"error": ...}``)
MSG_TITLE_REQUIRED = "title is required"
MSG_INVALID_BODY = "request body must be a JSON object"
MSG_NOT_FOUND = "Task not found"
MSG_LOAD_FAILED = "Failed to load tasks"
MSG_CREATE_FAILED = "Failed to create task"
MSG_UPDATE_FAILED = "Failed to update task"
MSG_DELETE_FAILED = "Failed to delete task"
