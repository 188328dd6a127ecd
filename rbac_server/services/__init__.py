"""Authentication, authorization, mutation rules and user/role services."""
