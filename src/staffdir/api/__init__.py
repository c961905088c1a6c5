"""HTTP transport for the employee directory."""
