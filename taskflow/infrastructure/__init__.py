"""Infrastructure layer: observability, in-memory stubs, persistence adapters."""
