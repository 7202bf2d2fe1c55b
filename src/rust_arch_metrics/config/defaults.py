"""Default configurations for rust-arch-metrics."""

# Extensions handled by the Rust extractor
RUST_FILE_EXTENSIONS = [".rs"]

# Directory/file names pruned during discovery
DEFAULT_IGNORE_PATTERNS = [
    # Version control
    ".git",
    ".hg",
    ".svn",
    # Cargo build output
    "target",
]

# Configuration file looked up in the analyzed directory
DEFAULT_CONFIG_FILENAME = ".rust-arch-metrics.yaml"

# Environment variable overriding the worker count
MAX_WORKERS_ENV_VAR = "RUST_ARCH_METRICS_MAX_WORKERS"

# Upper bound for automatically chosen extraction workers
DEFAULT_MAX_WORKERS = 8
