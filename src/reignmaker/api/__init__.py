"""HTTP API for reignmaker."""
