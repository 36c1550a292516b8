"""Domain enums for raw profiles."""

from enum import Enum


class ProcessType(Enum):
    """Kind of process a profiled thread belongs to.

    Version 4 made ``processType`` mandatory on every thread. Older profiles
    encoded the tab process through the thread name instead.
    """

    TAB = "tab"  # Content (web page) process
    PLUGIN = "plugin"  # Out-of-process plugin host
    DEFAULT = "default"  # Parent process and everything else
