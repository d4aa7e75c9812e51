"""Configuration service for the activity list and theme.

The activity configuration is a small YAML document the user edits by
hand. It is stored verbatim as typed and parsed into an ActivityConfig.
The theme is a single stored value, independent of the log.

Key Classes:
    ConfigService: Holds the active configuration and theme

Behaviour:
    - Nothing stored: the built-in default activities are used.
    - Stored text unparsable at startup: logged, default used.
    - Saving invalid text: InvalidConfig is raised and the previously
      active configuration stays in effect (never reset to default).
    - Saving is wholesale; there is no partial patching.

Typical Usage:
    >>> service = ConfigService(KeyValueStorage(data_dir))
    >>> service.init()
    >>> service.save_config("activities:\\n- Work\\n- Gym\\n")
    >>> service.config.activities
    ['Work', 'Gym']
"""

import logging
import threading

from time_tracker.config.paths import CONFIG_KEY, THEME_KEY
from time_tracker.exceptions import InvalidConfig, StorageError
from time_tracker.models.config import ActivityConfig
from time_tracker.models.enums import Theme
from time_tracker.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)


def load_activity_config(persisted_text: str | None) -> ActivityConfig:
    """Turn persisted configuration text into an ActivityConfig.

    Raises:
        InvalidConfig: If the text is present but unusable.
    """
    return ActivityConfig.from_yaml(persisted_text)


def serialize_activity_config(config: ActivityConfig) -> str:
    """Editable YAML text for ``config``; parses back to an equal config."""
    return config.to_yaml()


class ConfigService:
    """Service for loading and saving activity configuration and theme."""

    def __init__(self, storage: KeyValueStorage):
        """Initialize config service with the built-in defaults.

        Args:
            storage: Persistence backend shared with the log store.
        """
        self._storage = storage
        self._config = ActivityConfig.default()
        self._theme = Theme.default()
        self._loaded = False
        self._lock = threading.RLock()

    def init(self) -> ActivityConfig:
        """Load the persisted configuration and theme."""
        self.load_theme()
        return self.load_config()

    @property
    def config(self) -> ActivityConfig:
        with self._lock:
            return self._config.model_copy(deep=True)

    @property
    def theme(self) -> Theme:
        return self._theme

    # ------------------------------------------------------------------
    # Activity configuration
    # ------------------------------------------------------------------

    def load_config(self) -> ActivityConfig:
        """Reload the configuration from storage and make it active.

        If the stored text is invalid, the previously loaded configuration
        is kept; before anything was loaded that is the built-in default.
        """
        with self._lock:
            try:
                stored = self._storage.get_item(CONFIG_KEY)
                if stored is not None and not stored.strip():
                    stored = None
                config = load_activity_config(stored)
            except (InvalidConfig, StorageError) as e:
                if self._loaded:
                    logger.error(f"Stored configuration is invalid, keeping current one: {e}")
                else:
                    logger.error(f"Failed to load configuration, using defaults: {e}")
                return self.config
            self._config = config
            self._loaded = True
            return self.config

    def save_config(self, text: str) -> ActivityConfig:
        """Validate ``text`` and, if valid, store it and make it active.

        Raises:
            InvalidConfig: If the text does not parse; nothing is stored and
                the active configuration is unchanged.
            StoreWriteError: If storing fails; the active configuration is
                unchanged.
        """
        with self._lock:
            config = load_activity_config(text)
            self._storage.set_item(CONFIG_KEY, text)
            self._config = config
            self._loaded = True
            logger.info(f"Configuration saved with {len(config.activities)} activities")
            return self.config

    def config_text(self) -> str:
        """Editable text for the active configuration."""
        return serialize_activity_config(self.config)

    # ------------------------------------------------------------------
    # Theme
    # ------------------------------------------------------------------

    def load_theme(self) -> Theme:
        """Load the stored theme; unknown values fall back to the default."""
        try:
            stored = self._storage.get_item(THEME_KEY)
        except StorageError as e:
            logger.warning(f"Failed to read theme, using current one: {e}")
            return self._theme
        if stored:
            try:
                self._theme = Theme(stored.strip())
            except ValueError:
                logger.warning(f"Ignoring unknown stored theme {stored!r}")
                self._theme = Theme.default()
        return self._theme

    def save_theme(self, theme: Theme | str) -> Theme:
        """Persist ``theme`` and make it active.

        Raises:
            ValueError: If ``theme`` is not a known theme name.
            StoreWriteError: If storing fails.
        """
        value = Theme(theme)
        self._storage.set_item(THEME_KEY, value.value)
        self._theme = value
        return value
