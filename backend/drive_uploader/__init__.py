"""
Photo upload relay to Google Drive.
"""
__version__ = "0.1.0"
