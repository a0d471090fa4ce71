"""Data models: submissions, carrier outcomes, and quote-flow states."""
