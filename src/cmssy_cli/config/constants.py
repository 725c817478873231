"""Default paths, file names, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "cmssy-cli"
APP_AUTHOR = "Cmssy"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_API_URL = "CMSSY_API_URL"
ENV_API_TOKEN = "CMSSY_API_TOKEN"
ENV_PUBLISH_TOKEN = "CMSSY_PUBLISH_TOKEN"

# API defaults
DEFAULT_API_URL = "https://api.cmssy.io/graphql"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3

# Project layout
PROJECT_CONFIG_FILE = "cmssy.toml"
BLOCKS_DIR = "blocks"
TEMPLATES_DIR = "templates"
RESOURCE_CONFIG_FILE = "block_config.py"
PACKAGE_JSON = "package.json"
PREVIEW_JSON = "preview.json"
README_FILE = "README.md"
SOURCE_DIR = "src"
ENTRY_POINTS = ("index.tsx", "index.ts", "index.jsx", "index.js")

# Legacy manifest section
LEGACY_SECTION = "cmssy"

# Exit code for a batch that finished with some per-resource failures
EXIT_PARTIAL = 3
