"""Dashboard interface: router, schemas and dependency wiring."""
