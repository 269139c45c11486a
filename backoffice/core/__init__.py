"""Request-outcome and access-control core: Result, errors, validation, pipeline, RBAC."""
