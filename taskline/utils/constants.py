"""Constants used throughout the taskline package."""

# Output streams a Terminal may be bound to
SUPPORTED_STREAMS = ['stderr', 'stdout']
DEFAULT_STREAM = 'stderr'

# Redraw cadence of the render loop (seconds)
DEFAULT_INTERVAL = 0.1

# Spinner frames, advanced clockwise once per tick
DEFAULT_FRAMES = '-\\|/'

# ANSI styling
ANSI_RESET = '\x1b[0m'
ANSI_YELLOW_BOLD = '\x1b[33;1m'
ANSI_GREEN_BOLD = '\x1b[32;1m'
ANSI_RED_BOLD = '\x1b[31;1m'
ANSI_PATTERN = r'\x1b\[[0-9;]*[A-Za-z]'

# Final glyphs
PASS_GLYPH = '✔'
WARN_GLYPH = '▲'
FAIL_GLYPH = '✘'
# Marker left on a parent line once a subtask takes over the current line
OPEN_GLYPH = '┳'

# Nesting decoration: each level below the first shifts by INDENT_STEP columns
INDENT_STEP = 5
BRANCH = '┗━ '
