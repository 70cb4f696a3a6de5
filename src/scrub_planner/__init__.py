"""Tide prediction and scrubbing-day planning for boat owners."""
