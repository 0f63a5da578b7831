"""Treatment center admin API."""
