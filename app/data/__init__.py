"""
Configuration for the bridge.

This package is responsible for:
* Declaring every tunable (upstream URLs, cache window, listing policy).
* Locating the config file (via env var) and loading it with sensible defaults.
"""

