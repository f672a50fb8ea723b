"""
HabitTracker package.

Logs hours spent on self-improvement activities to a local JSON file and
renders a terminal dashboard of streaks, totals and recent days.
"""
import logging

# Applications using this package should configure their own logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

VERSION = "0.1.0"
