"""Playlist history configuration read from the environment, .env or settings.ini."""

from decouple import config

# Prefix for generated item ids (e.g. "item-1")
ID_PREFIX = config('PLAYLIST_ID_PREFIX', default='item')

# Logging
LOG_LEVEL = config('LOG_LEVEL', default='INFO')
LOG_FILE = config('LOG_FILE', default='') or None
