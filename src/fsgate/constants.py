"""Core constants for fsgate."""

# Environment variable consulted for "~" expansion
HOME_ENV_VAR = "HOME"

# Directory listing tags
TAG_DIRECTORY = "[DIR]"
TAG_FILE = "[FILE]"
TAG_UNKNOWN = "[UNKNOWN]"

# Tree drawing
TREE_BRANCH = "├── "
TREE_LAST_BRANCH = "└── "
TREE_PIPE_EXTENSION = "│   "
TREE_SPACE_EXTENSION = "    "
TREE_DIR_MARKER = "[DIR] "
TREE_UNKNOWN_MARKER = "[?] "

# Human-scaled sizes
SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")

# Write permission bits for owner, group and other
WRITE_PERMISSION_BITS = 0o222

NOT_EMPTY_HINT = " Remove all contents first."
