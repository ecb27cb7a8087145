"""REST API for Notelytic."""
