"""Core Django app: prediction debug page, job store and charting."""
