"""Raw Gecko profile format upgrader.

Upgrades profiles captured at any historical "raw profile" schema version
to the single version understood by the rest of the profiler tooling.
"""

__version__ = "0.1.0"
