"""Path and storage-key constants for time-tracker.

Each persisted value lives under its own key inside the data directory.
The key doubles as the file name, so the extension documents the format.
"""

# =============================================================================
# Data Directory
# =============================================================================

DEFAULT_DATA_DIR = ".time-tracker"
LOG_FILE_NAME = "time-tracker.log"

# =============================================================================
# Storage Keys
# =============================================================================

LOGS_KEY = "activity_logs.json"
CONFIG_KEY = "activity_config.yaml"
THEME_KEY = "app_theme"

# =============================================================================
# Export
# =============================================================================

EXPORT_FILE_PREFIX = "activity_logs"
EXPORT_FILE_EXTENSION = ".json"
EXPORT_INDENT = 2

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_ACTIVITIES = ("Work", "Break", "Exercise")
COMMENT_SEPARATOR = ","
