"""Application layer: ports, view definitions and use cases."""
