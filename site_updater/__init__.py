"""
Site Updater - AI-assisted updates for data.json, functions.php and index.php
"""

__version__ = "1.0.0"
