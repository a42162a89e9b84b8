"""sslctl — certificate lifecycle adapter for the GoGetSSL reseller API."""

__version__ = "0.1.0"
