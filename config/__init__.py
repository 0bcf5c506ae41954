"""Configuration management."""
import os
import logging
import yaml
from pathlib import Path
from dotenv import load_dotenv

logger = logging.getLogger("sleepmonitor.config")

_DEFAULT_CONFIG = Path(__file__).parent / "default_config.yaml"

# Environment variable -> (config path, numeric)
ENV_MAP = {
    "OURA_TOKEN": (("oura", "token"), False),
    "POKE_WEBHOOK_URL": (("webhook", "url"), False),
    "SLEEP_SCORE_THRESHOLD": (("thresholds", "sleep_score"), True),
    "MIN_TOTAL_SLEEP_MIN": (("thresholds", "min_total_sleep_min"), True),
    "MAX_SLEEP_LATENCY_MIN": (("thresholds", "max_sleep_latency_min"), True),
    "POOR_NIGHTS_STREAK": (("thresholds", "poor_nights_streak"), True),
    "TIMEZONE": (("timezone",), False),
    "SLEEP_MONITOR_LOG_LEVEL": (("logging", "level"), False),
    "SLEEP_MONITOR_LOG_FILE": (("logging", "file"), False),
    "SLEEP_MONITOR_ALERT_LOG": (("alerts", "log_path"), False),
}


class ConfigError(Exception):
    """Missing or invalid configuration."""


def load_config(path=None, env_file=None):
    """Load config from YAML, merging defaults with optional overrides.

    Precedence: defaults < YAML file at ``path`` < environment. A ``.env``
    file (``env_file`` or ``./.env``) is loaded first without overriding
    variables that are already set.
    """
    with open(_DEFAULT_CONFIG) as f:
        config = yaml.safe_load(f)

    if path and Path(path).exists():
        with open(path) as f:
            overrides = yaml.safe_load(f) or {}
        config = _deep_merge(config, overrides)

    dotenv_path = Path(env_file) if env_file else Path(".env")
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=False)
        logger.debug(f"Loaded {dotenv_path}")

    for env_key, (config_path, numeric) in ENV_MAP.items():
        val = os.environ.get(env_key)
        if not val:
            continue
        if numeric:
            parsed = _parse_number(val)
            if parsed is None:
                logger.warning(f"{env_key}={val!r} is not a number, keeping default")
                continue
            val = parsed
        d = config
        for k in config_path[:-1]:
            d = d.setdefault(k, {})
        d[config_path[-1]] = val

    _validate_config(config)
    return config


def _parse_number(val):
    try:
        num = float(val)
    except ValueError:
        return None
    if num != num:  # NaN
        return None
    return int(num) if num.is_integer() else num


def _deep_merge(base, override):
    """Recursively merge override into base dict."""
    result = base.copy()
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _validate_config(config):
    """Basic config validation."""
    required_sections = ["oura", "webhook", "thresholds", "http"]
    for section in required_sections:
        if section not in config:
            raise ConfigError(f"Missing required config section: {section}")

    for key, val in config["thresholds"].items():
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise ConfigError(f"thresholds.{key} must be a number, got {val!r}")
        if val < 0:
            raise ConfigError(f"thresholds.{key} must be >= 0")

    if config["http"].get("timeout", 0) <= 0:
        raise ConfigError("http.timeout must be > 0 seconds")

    if config["oura"].get("window_days", 0) < 1:
        raise ConfigError("oura.window_days must be >= 1")
