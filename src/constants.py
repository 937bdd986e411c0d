"""Constants used in the project."""

import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    DECLARATION_ERROR = 2
    USAGE_ERROR = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # Kinds and metadata names starting with this (case-insensitive) are reserved
    RESERVED_PREFIX = "nest-"

    DEPENDENCY_META_OPTIONAL = "optional"
    DEPENDENCY_META_PRIVATE = "private"

    # Token in version ranges replaced by the declaring bundle version
    THIS_VERSION_TOKEN = "this"

    ENCODING = "utf-8"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "NESTDEPS_LOG_LEVEL"
    ENV_DECLARING_IDENTIFIER = "NESTDEPS_DECLARING_IDENTIFIER"
    CONFIG_FILE_NAMES = ["nestdeps.yml", "nestdeps.yaml"]
    CONFIG_USER_DIR = os.path.join("~", ".config", "nestdeps")


def _config_search_paths():
    """Return candidate default config file locations in priority order."""
    paths = [os.path.join(os.getcwd(), name) for name in Constants.CONFIG_FILE_NAMES]
    user_dir = os.path.expanduser(Constants.CONFIG_USER_DIR)
    paths.extend(os.path.join(user_dir, name) for name in Constants.CONFIG_FILE_NAMES)
    return paths


def _load_yaml_config():
    """Load the first default YAML config file found, or an empty dict.

    Missing files are not an error; a file that exists but does not hold a
    mapping is logged and ignored.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    for path in _config_search_paths():
        if not os.path.isfile(path):
            continue
        with open(path, "r", encoding=Constants.ENCODING) as fh:
            data = yaml.safe_load(fh)
        if isinstance(data, dict):
            logger.debug("Loaded config from %s", path)
            return data
        logger.warning("Ignoring config file without a mapping: %s", path)
    return {}
