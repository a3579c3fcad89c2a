import logging
import logging.config
import yaml
from pathlib import Path
from typing import Optional
from ..config.settings import settings

DEFAULT_LOGGING_CONFIG_PATH = Path(settings.LOGGING_CONFIG_PATH)

# Handler swapped in for "console" when JSON output is selected
JSON_HANDLER_NAMES = {"console": "console_json"}


def _use_json_handlers(log_config: dict) -> dict:
    targets = list(log_config.get("loggers", {}).values())
    if "root" in log_config:
        targets.append(log_config["root"])
    for target in targets:
        target["handlers"] = [JSON_HANDLER_NAMES.get(name, name) for name in target.get("handlers", [])]
    return log_config


def setup_logging(config_path: Path = DEFAULT_LOGGING_CONFIG_PATH, log_format: Optional[str] = None) -> None:
    """
    Set up logging configuration from a YAML file.

    Args:
        config_path (Path): Path to the logging configuration YAML file.
        log_format (Optional[str]): "text" or "json". Defaults to settings.LOG_FORMAT.
    """
    log_format = (log_format or settings.LOG_FORMAT).lower()
    if config_path.exists():
        try:
            with open(config_path, 'rt') as f:
                log_config = yaml.safe_load(f.read())
            if log_format == "json":
                log_config = _use_json_handlers(log_config)
            logging.config.dictConfig(log_config)
            logging.getLogger(__name__).info(f"Logging configured successfully from {config_path} ({log_format})")
        except Exception as e:
            logging.basicConfig(level=logging.INFO)  # Basic config as fallback
            logging.getLogger(__name__).error(
                f"Error loading logging configuration from {config_path}: {e}. Using basicConfig."
            )
    else:
        logging.basicConfig(level=logging.INFO)
        logging.getLogger(__name__).warning(
            f"Logging configuration file not found at {config_path}. Using basicConfig."
        )
