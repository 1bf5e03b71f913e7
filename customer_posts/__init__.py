"""Customer/post data layer: generic transactional repositories and domain services."""
