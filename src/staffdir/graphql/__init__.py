"""GraphQL API for the employee directory."""
