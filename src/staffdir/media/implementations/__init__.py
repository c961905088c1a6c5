"""Media store implementations."""
