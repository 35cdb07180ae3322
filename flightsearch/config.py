"""Gestion de la configuration de la recherche de vols."""

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from dotenv import load_dotenv


@dataclass
class RapidAPIConfig:
    """Configuration pour l'API Skyscanner (via RapidAPI)."""

    api_key: str
    api_host: str = "skyscanner89.p.rapidapi.com"
    base_url: str = "https://skyscanner89.p.rapidapi.com"
    roundtrip_url: str = "/flights/roundtrip/list"
    request_timeout: float = 30.0  # Timeout total d'une requête en secondes


@dataclass
class SearchConfig:
    """Configuration principale."""

    log_file: str = "flightsearch.log"
    rapidapi: RapidAPIConfig = field(default=None)

    @classmethod
    def load(cls, config_path: str = "config.yaml", env_path: str = ".env") -> "SearchConfig":
        """Charge la configuration depuis les fichiers YAML et .env."""
        # Charger les variables d'environnement
        load_dotenv(env_path)

        # Charger le fichier YAML
        config_data = {}
        if Path(config_path).exists():
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}

        # La clé API vient uniquement du .env, le reste peut être surchargé en YAML
        rapidapi_data = config_data.get("rapidapi") or {}
        defaults = RapidAPIConfig(api_key="")
        rapidapi_config = RapidAPIConfig(
            api_key=os.getenv("RAPID_API_KEY", ""),
            api_host=rapidapi_data.get("api_host", defaults.api_host),
            base_url=rapidapi_data.get("base_url", defaults.base_url),
            roundtrip_url=rapidapi_data.get("roundtrip_url", defaults.roundtrip_url),
            request_timeout=float(rapidapi_data.get("request_timeout", defaults.request_timeout)),
        )

        return cls(
            log_file=config_data.get("log_file", cls().log_file),
            rapidapi=rapidapi_config,
        )
