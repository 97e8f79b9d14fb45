"""HTTP API for the production engine."""
