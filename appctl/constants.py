VERSION = "0.1.0"

MODE_BROWSE = "browse"
MODE_SEARCH = "search"
MODES = (MODE_BROWSE, MODE_SEARCH)

ACTION_OPEN = "open"
ACTION_TERMINATE = "terminate"

# Maximum number of result rows to display at once
DEFAULT_MAX_VISIBLE = 15

# select() slice used while waiting for input, in seconds
READ_TIMEOUT = 0.05
