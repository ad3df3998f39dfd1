"""
Drift engine: decide whether a small business's operating metrics have drifted.

Two interchangeable scoring engines turn a baseline and a current metric
window into a status, ordered reasons and a 0-100 health score. Change
detection decides when a result is worth a notification, and the executive
summary turns a result into something an owner can act on.
"""

__version__ = "1.0.0"
