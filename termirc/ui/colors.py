"""
ANSI color codes for console output
"""


class bcolors:
    """ANSI color codes for console output"""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'
    GRAY = '\033[90m'


# Indexed by color_utils.nick_color_index
NICK_PALETTE = (
    bcolors.CYAN,
    bcolors.GREEN,
    bcolors.MAGENTA,
    bcolors.YELLOW,
    bcolors.BLUE,
    bcolors.WHITE,
)

BELL = "\a"
