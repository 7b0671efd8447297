"""Order anchors for the built-in interceptors."""

import sys


# Request interceptors that must run before user code are anchored here.
REQUEST_ORDER_BASE = -sys.maxsize

# Leaves room after the network call for observers such as loggers.
TERMINAL_ORDER = sys.maxsize - 1000
