"""Hierarchical role-based access control API server."""
