# ABOUTME: Command-line client for the Open-Meteo forecast and geocoding APIs.
# ABOUTME: Exposes the package version used by the CLI --version flag.

__version__ = "0.1.0"
