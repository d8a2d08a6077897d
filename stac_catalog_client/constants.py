"""Constants for STAC catalog client."""

__version__ = "0.1.0"

# Link relation advertising the item search endpoint
SEARCH_REL = "search"

# Default directories (under ~/.stac/ so pip installs work from any directory)
DEFAULT_CONFIG_FILE = "~/.stac/config.toml"
DEFAULT_DATA_DIR = "~/.stac/data"
DEFAULT_CREDENTIALS_FILE = "~/.stac/credentials.txt"

# Authentication defaults
DEFAULT_AUTH_HEADER = "Authorization"
DEFAULT_TOKEN_LIFETIME = 300  # Seconds, when the login reply has no expires_in

# Transfer settings
DEFAULT_CHUNK_SIZE = 65536
DEFAULT_TIMEOUT = 30
