"""
Configuration constants for path_util.

Values are plain module attributes and are read at call time, so tests and
applications can patch them.
"""

# ------------------------------
# Platform Selection
# ------------------------------

# Overrides the active platform strategy ("posix" or "windows") when set
PLATFORM_ENV_VAR = "PATH_UTIL_PLATFORM"

# ------------------------------
# Directory Creation
# ------------------------------

DIRECTORY_MODE = 0o755

# ------------------------------
# Home Directory
# ------------------------------

HOME_ENV_VAR = "HOME"

# ------------------------------
# Executable Discovery
# ------------------------------

PROC_SELF_EXE = "/proc/self/exe"

# Buffer sizes for native calls
PATH_MAX = 4096
MAX_PATH = 260

# ------------------------------
# Windows Error Codes
# ------------------------------

ERROR_FILE_NOT_FOUND = 2
ERROR_PATH_NOT_FOUND = 3
ERROR_INVALID_DRIVE = 15
ERROR_BAD_NETPATH = 53

# Attribute queries failing with these codes mean "no such file"
WINDOWS_NOT_FOUND_ERRORS = (
    ERROR_FILE_NOT_FOUND,
    ERROR_PATH_NOT_FOUND,
    ERROR_INVALID_DRIVE,
    ERROR_BAD_NETPATH,
)
