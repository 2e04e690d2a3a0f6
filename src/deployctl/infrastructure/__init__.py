"""Infrastructure layer — adapters for the remote registry API."""
