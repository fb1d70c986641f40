import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


VERBOSE = _env_flag("APIBLAME_VERBOSE")
BLAME_MODE = os.getenv("APIBLAME_BLAME_MODE", "batched")
GIT_EXECUTABLE = os.getenv("APIBLAME_GIT", "git")
