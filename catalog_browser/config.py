"""Client configuration stored as YAML."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

BASE_URL_ENV = "CATALOG_BASE_URL"


class ClientConfig(BaseModel):
    """Settings for talking to the marketplace API."""

    base_url: str = Field(default="http://localhost:3000", description="Marketplace base URL")
    timeout_seconds: float = Field(default=30.0, gt=0, description="HTTP timeout")
    page_size: int = Field(default=20, ge=1, description="Products requested per page")
    user_agent: str = Field(default="catalog-browser/0.1", description="User-Agent header")

    def save(self, filepath: Path | str) -> None:
        """Save config to YAML file."""
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump(mode="json")
        filepath.write_text(
            yaml.dump(data, allow_unicode=True, default_flow_style=False, sort_keys=False),
            encoding="utf-8",
        )

    @classmethod
    def load(cls, filepath: Path | str | None = None) -> "ClientConfig":
        """Load config from YAML file.

        A missing or empty file gives the defaults. ``CATALOG_BASE_URL``
        overrides the base URL either way.
        """
        data: dict = {}
        if filepath is not None:
            filepath = Path(filepath)
            if filepath.exists():
                data = yaml.safe_load(filepath.read_text(encoding="utf-8")) or {}

        base_url = os.getenv(BASE_URL_ENV)
        if base_url:
            data["base_url"] = base_url
        return cls.model_validate(data)
