"""HTTP routers of the Social API, mounted under `/v1` except for health."""
