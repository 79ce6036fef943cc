"""In-memory sample backends for testing an API gateway: a user store and provider, a JSON user endpoint and versioned traffic servers."""

__version__ = "0.1.0"