"""LANPlay - local-network media server.

Scans a media folder of movies, series and music, keeps a cached JSON index
with generated thumbnails, and serves the index and raw files over HTTP.
"""

__version__ = "1.0.0"
