"""Global constants for cars-cli"""

from enum import Enum

APP_NAME = "cars"
LOG_FORMAT = "%(message)s"

# Manifest
MANIFEST_FILE = "deployment-info.json"
MANIFEST_SCHEMA = "bsv-app"
DEFAULT_SCHEMA_VERSION = "1.0"
TARGETS_KEY = "configs"
LEGACY_TARGETS_KEY = "deployments"

# Providers
CARS_PROVIDER = "CARS"

# Languages
SUPPORTED_CONTRACT_LANGUAGE = "sCrypt"
FRONTEND_LANGUAGE_REACT = "react"
FRONTEND_LANGUAGE_HTML = "html"
SUPPORTED_FRONTEND_LANGUAGES = [FRONTEND_LANGUAGE_REACT, FRONTEND_LANGUAGE_HTML]

# Project layout
BACKEND_DIR = "backend"
DEFAULT_FRONTEND_DIR = "frontend"
REACT_BUILD_DIR = "build"
HTML_ENTRY_FILE = "index.html"
PACKAGE_FILE = "package.json"
LOCK_FILES = ["package.json", "package-lock.json"]

# Build steps
STEP_COMPILE = "compile"
STEP_BUILD = "build"
DEFAULT_PACKAGE_MANAGER = "npm"

# Artifacts
ARTIFACT_PREFIX = "cars_artifact_"
ARTIFACT_EXTENSION = ".tgz"
ARTIFACT_TIMESTAMP_WIDTH = 13  # epoch millis stay 13 digits until year 2286
STAGING_DIR_PREFIX = "cars_tmp_build_"

# Remote
DEFAULT_REQUEST_TIMEOUT = 30  # seconds
DEFAULT_CLOUD_URLS = [
    "http://localhost:7777",
    "https://cars-cloud1.com",
    "https://cars-cloud2.com",
    "https://cars-cloud3.com",
]
FRONTEND_HOSTING_METHODS = ["HTTPS", "UHRP", "none"]
DEFAULT_NETWORK = "mainnet"

# User configuration
USER_CONFIG_DIR = ".cars"
USER_CONFIG_FILE = "config.yaml"

# Environment variables
ENV_CONFIG_PATH = "CARS_CONFIG"
ENV_LOG_LEVEL = "CARS_LOG_LEVEL"
ENV_PACKAGE_MANAGER = "CARS_PACKAGE_MANAGER"
ENV_IDENTITY_KEY = "CARS_IDENTITY_KEY"
ENV_AUTH_TOKEN = "CARS_AUTH_TOKEN"
ENV_PROJECT_ROOT = "CARS_PROJECT_ROOT"


class Subsystem(Enum):
    """Deployable subsystems of a project"""
    BACKEND = "backend"
    FRONTEND = "frontend"


class PipelineStage(Enum):
    """Stages of the build pipeline, used in diagnostics"""
    MANIFEST = "manifest"
    TARGET = "target"
    BUILD = "build"
    STAGE = "stage"
    PACKAGE = "package"
    REMOTE = "remote"


# Error codes
class ErrorCode:
    MANIFEST_MISSING = "CARS001"
    MANIFEST_INVALID = "CARS002"
    INVALID_SCHEMA = "CARS003"
    TARGET_NOT_FOUND = "CARS010"
    TARGET_NOT_ELIGIBLE = "CARS011"
    NO_ELIGIBLE_TARGET = "CARS012"
    AMBIGUOUS_TARGET = "CARS013"
    MISSING_PROJECT_ID = "CARS014"
    MISSING_CLOUD_URL = "CARS015"
    BACKEND_MISSING = "CARS020"
    UNSUPPORTED_CONTRACT_LANGUAGE = "CARS021"
    MISSING_COMPILE_STEP = "CARS022"
    FRONTEND_LANGUAGE_UNSET = "CARS023"
    HTML_ENTRY_MISSING = "CARS024"
    UNSUPPORTED_FRONTEND_LANGUAGE = "CARS025"
    FRONTEND_PACKAGE_MISSING = "CARS026"
    REACT_OUTPUT_MISSING = "CARS027"
    DEPENDENCY_INSTALL_FAILED = "CARS030"
    BACKEND_COMPILE_FAILED = "CARS031"
    BACKEND_BUILD_FAILED = "CARS032"
    REACT_BUILD_FAILED = "CARS033"
    STAGING_FAILED = "CARS040"
    STAGING_SOURCE_MISSING = "CARS041"
    ARCHIVE_FAILED = "CARS050"
    ARTIFACT_NOT_FOUND = "CARS060"
    NO_ARTIFACT = "CARS061"
    REMOTE_REQUEST_FAILED = "CARS070"
    REMOTE_PROJECT_NOT_FOUND = "CARS071"
    CONFIG_ERROR = "CARS080"


# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_INFO = "ℹ"
EMOJI_PACKAGE = "📦"
EMOJI_ROCKET = "🚀"
EMOJI_BUILD = "🛠"
