"""Live PokéAPI client backing the DataSource contract."""
from __future__ import annotations

import logging
from typing import Dict
from urllib.parse import quote

import requests

from .config import Settings, load_settings
from .errors import NetworkError, NotFoundError
from .models import ChainLink, Record, SpeciesDescriptor

logger = logging.getLogger(__name__)

USER_AGENT = "regiondex/0.1 (+https://pokeapi.co)"


class PokeApiClient:
    def __init__(
        self,
        settings: Settings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)

    @property
    def base_url(self) -> str:
        return self.settings.api_base_url

    def _get_json(self, url: str, what: object) -> Dict[str, object]:
        try:
            resp = self.session.get(url, timeout=self.settings.request_timeout)
        except requests.RequestException as exc:
            logger.error("Request to %s failed: %s", url, exc)
            raise NetworkError(f"request to {url} failed: {exc}") from exc
        if not resp.ok:
            logger.info("GET %s -> HTTP %s", url, resp.status_code)
            raise NotFoundError(what)
        try:
            data = resp.json()
        except ValueError as exc:
            logger.error("Malformed JSON from %s: %s", url, exc)
            raise NetworkError(f"malformed response from {url}") from exc
        if not isinstance(data, dict):
            raise NetworkError(f"unexpected response body from {url}")
        return data

    def fetch_by_id(self, pokemon_id: int) -> Record:
        payload = self._get_json(f"{self.base_url}/pokemon/{int(pokemon_id)}", pokemon_id)
        return Record.from_api(payload)

    def fetch_by_name(self, name: str) -> Record:
        slug = name.strip().lower()
        payload = self._get_json(f"{self.base_url}/pokemon/{quote(slug)}", name)
        return Record.from_api(payload)

    def fetch_species(self, pokemon_id: int) -> SpeciesDescriptor:
        payload = self._get_json(f"{self.base_url}/pokemon-species/{int(pokemon_id)}", pokemon_id)
        return SpeciesDescriptor.from_api(payload)

    def fetch_evolution_chain(self, url: str) -> ChainLink:
        payload = self._get_json(url, url)
        return ChainLink.from_api(payload)

    def close(self) -> None:
        self.session.close()
