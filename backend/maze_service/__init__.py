"""HTTP service that generates, stores and serves maze documents."""
