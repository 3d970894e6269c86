"""Environment-driven settings for the smart scheduling service."""

import logging
import os

log = logging.getLogger('smart_scheduling.config')

ENV_PREFIX = 'SMART_SCHEDULING_'

DEFAULT_RETENTION_DAYS = 30
DEFAULT_PATTERN_DAYS = 7
DEFAULT_CHECK_INTERVAL = 60
DEFAULT_PORT = 8000
DEFAULT_DB_URL = 'sqlite:///activity.sqlite'

# setting -> (default, min, max); env var is ENV_PREFIX + setting.upper()
INT_SETTINGS = {
    'retention_days': (DEFAULT_RETENTION_DAYS, 1, 365),
    'pattern_days': (DEFAULT_PATTERN_DAYS, 1, 30),
    'check_interval': (DEFAULT_CHECK_INTERVAL, 5, 86400),
    'port': (DEFAULT_PORT, 1, 65535),
}


def env_name(setting):
    return ENV_PREFIX + setting.upper()


def read_int_setting(setting, environ=None):
    """Integer setting from the environment, or its default.

    Unset or blank variables use the default silently; unparsable or
    out-of-range values fall back with a warning.
    """
    environ = os.environ if environ is None else environ
    default, min_val, max_val = INT_SETTINGS[setting]
    name = env_name(setting)

    raw = environ.get(name, '').strip()
    if not raw:
        return default

    try:
        value = int(raw)
    except ValueError:
        log.warning(f"[Settings] {name}={raw!r} is not an integer, using default {default}")
        return default

    if not min_val <= value <= max_val:
        log.warning(f"[Settings] {name}={value} outside {min_val}-{max_val}, using default {default}")
        return default
    return value


def load_settings(environ=None):
    """Read SMART_SCHEDULING_* variables into a settings dict."""
    environ = os.environ if environ is None else environ
    settings = {setting: read_int_setting(setting, environ) for setting in INT_SETTINGS}
    settings['db_url'] = environ.get(env_name('db_url'), '').strip() or DEFAULT_DB_URL

    log.info(
        f"[Settings] retention={settings['retention_days']}d, pattern_window={settings['pattern_days']}d, "
        f"check_interval={settings['check_interval']}s, port={settings['port']}"
    )
    return settings
