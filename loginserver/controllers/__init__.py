"""Request controllers: map requests to workflows, and outcomes to responses."""
