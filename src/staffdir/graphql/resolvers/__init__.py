"""Resolver package for GraphQL schema.

One module per area: `auth` (signup, login) and `employee` (employee CRUD).
"""
