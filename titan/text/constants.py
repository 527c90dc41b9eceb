LOGGER_NAME = "titan"

PREFORMATTED_FENCE = "```"

# Narrowest width the wrapper accepts: the widest prefix, "### ".
MIN_WIDTH = 4
