"""Infrastructure layer: database, HTTP and logging adapters."""
