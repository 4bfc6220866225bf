"""Clients that fetch the tabular food catalog."""

import asyncio
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Protocol

import httpx


class FoodSourceClient(Protocol):
    """Interface for retrieving the raw food catalog CSV."""

    async def fetch_text(self) -> str:
        """Return the catalog as comma-separated text."""


@dataclass
class HttpxFoodSourceClient(FoodSourceClient):
    """HTTPX-backed client for a catalog served over HTTP."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(cls, url: str, timeout_seconds: float = 15) -> "HttpxFoodSourceClient":
        """Create a catalog client with a managed httpx session."""
        return cls(
            url=url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_text(self) -> str:
        """Download the catalog CSV."""
        response = await self.http_client.get(self.url, timeout=self.timeout_seconds)
        response.raise_for_status()
        return response.text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


@dataclass
class FileFoodSourceClient(FoodSourceClient):
    """Client reading the catalog from a local CSV file."""

    path: Path

    async def fetch_text(self) -> str:
        """Read the catalog CSV without blocking the event loop."""
        return await asyncio.to_thread(self.path.read_text, encoding="utf-8")

    async def close(self) -> None:
        """Nothing to release for local files."""


def bundled_catalog_path() -> Path:
    """Return the path of the catalog shipped with the package."""
    return Path(str(resources.files("burntrack") / "data" / "indian_foods.csv"))
