"""HTTP surface of the workflow core."""
