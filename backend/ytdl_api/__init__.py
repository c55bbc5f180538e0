"""
ytdl-api: a thin HTTP façade over yt-dlp.

Components:
- assets: downloads the yt-dlp binary and optional cookie file on demand
- extraction: runs yt-dlp and parses its JSON dump
- proxy: relays remote images past cross-origin restrictions
- main: FastAPI application factory
- cli: serve / provision / extract commands
"""

__version__ = "1.0.0"
