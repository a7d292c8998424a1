"""HTTP transport bindings."""
