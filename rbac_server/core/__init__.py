"""Configuration, errors, middleware, security and the hierarchy comparator."""
