"""
Configuration for the auth module.

The secret itself is not read here: it lives in `aka_platform.config.settings`
and is handed to the resolver at construction time. This module only names
the header the secret travels in.
"""

AUTH_HEADER = "X-Authorization"
