"""Common literal values used across homepage_builder.

These constants keep the document identity, collection name, and mirror file
location centralized so the store, the HTTP layer, and tests can import the
same values without drifting. Intended for internal use within the
homepage_builder package.

Examples
--------
>>> from homepage_builder import _constants
>>> _constants.CONFIG_DOCUMENT_ID
'homepage'
>>> str(_constants.MIRROR_RELATIVE_PATH)
'.indiekit/homepage.json'
"""

from pathlib import PurePosixPath

CONFIG_DOCUMENT_ID = "homepage"
CONFIG_COLLECTION = "homepageConfig"
MIRROR_RELATIVE_PATH = PurePosixPath(".indiekit") / "homepage.json"

DEFAULT_MOUNT_PATH = "/homepage"
DEFAULT_CONTENT_DIR = "/app/data/content"
CONTENT_DIR_ENV = "CONTENT_DIR"

LAYOUTS: dict[str, str] = {
    "single-column": "Single Column",
    "two-column": "Two Column with Sidebar",
    "full-width-hero": "Full-width Hero + Grid",
}
DEFAULT_LAYOUT = "single-column"
BUILTIN_SOURCE_LABEL = "Built-in"
