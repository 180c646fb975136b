"""Constants used throughout the application."""

# Directory names never descended into
IGNORED_DIRS = frozenset({
    ".git",
    ".svn",
    ".hg",
    "node_modules",
    "__pycache__",
    ".vscode",
    ".idea",
    ".obsidian",
    "Pictures",
})

# OS metadata files
IGNORED_FILES = frozenset({
    ".DS_Store",
    "thumbs.db",
    "Thumbs.db",
    "desktop.ini",
})

# Binary/media formats (compared lowercased)
IGNORED_EXTENSIONS = frozenset({
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".heic", ".tif", ".tiff",
    ".mp4", ".avi", ".mov", ".mkv", ".wmv",
    ".pdf",
    ".zip", ".rar", ".7z", ".tar", ".gz",
})

# Detection defaults
DEFAULT_SIMILARITY_THRESHOLD = 0.9
DEFAULT_SIZE_THRESHOLD = 0.1  # 10% relative size difference
DEFAULT_HASH_ALGORITHM = "sha256"
CRYPTOGRAPHIC_HASHES = frozenset({"sha256", "sha512", "sha3_256", "blake2b"})

# Reports
DEFAULT_REPORT_DIR = "log"
REPORT_PREFIX = "duplicate_report"
REPORT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
REPORT_FORMATS = ("txt", "json", "csv")
