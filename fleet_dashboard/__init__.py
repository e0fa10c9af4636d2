"""Fleet dashboard reporting engine."""
