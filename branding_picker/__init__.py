"""
Branding Picker

Extracts AppStream branding colors (primary, light and dark variants) from
application icons and exposes them over a small HTTP API.
"""

__version__ = "1.0.0"
