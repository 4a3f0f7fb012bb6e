"""
changet – Download every attachment from a single 4chan thread.

Supports:
  • Parsing pasted boards.4chan.org / boards.4channel.org thread links
  • Fetching thread metadata from the 4chan JSON API
  • Collision-free local filenames for repeated original names
  • Idempotent re-runs (files already on disk are skipped)
  • Optional bounded parallel downloads
"""

__version__ = "0.1.0"
