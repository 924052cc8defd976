"""HTTP API for the zapper."""
