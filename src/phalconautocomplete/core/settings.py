"""
Project-wide constants that are unlikely to change at runtime.
"""

SOURCE_DIR_NAME = "src"
META_DIR_NAME = "META-INF"
UPSTREAM_DIR_NAME = "upstream"

VERSION_PLACEHOLDER = "{version}"
MAJOR_VERSION_PLACEHOLDER = "{majorversion}"

LOG_FORMAT = "%(asctime)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

USAGE = "Usage: phalconautocomplete [-v version]"
