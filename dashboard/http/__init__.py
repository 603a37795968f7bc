"""HTTP plumbing: error envelope handlers and request-id middleware."""
