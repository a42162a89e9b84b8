"""Configuration: TOML models, settings, discovery, and logging."""
