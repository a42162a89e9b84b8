"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, sslctl.toml only contains overrides.
A working setup needs only [provider] login and password.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, SecretStr

from sslctl.infrastructure.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT


class ProviderConfig(BaseModel):
    """[provider] section."""

    model_config = {"frozen": True}

    url: str = DEFAULT_BASE_URL
    login: str = ""
    password: SecretStr = SecretStr("")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)


class ContactsConfig(BaseModel):
    """[contacts] section."""

    model_config = {"frozen": True}

    path: Path | None = None


class OrdersConfig(BaseModel):
    """[orders] section."""

    model_config = {"frozen": True}

    strict_product: bool = False
