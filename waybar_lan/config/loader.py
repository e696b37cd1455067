"""Lecture du fichier de configuration de waybar-lan.

Le fichier est optionnel : sans lui, les valeurs par defaut de
AppSettings s'appliquent.
"""

import json
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from waybar_lan.config.settings import AppSettings
from waybar_lan.errors.exceptions import ConfigurationError

DEFAULT_SEARCH_PATHS: List[str] = [
    "~/.config/waybar-lan/config.toml",
    "~/.config/waybar-lan/config.json",
]


class ConfigLoader(ABC):
    """Source du contenu brut de la configuration."""

    @abstractmethod
    def load(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Lit un fichier et retourne son contenu non valide.

        Raises:
            FileNotFoundError: Si le fichier n'existe pas.
            ValueError: Si le format n'est pas reconnu.
        """


class FileConfigLoader(ConfigLoader):
    """Lit un fichier TOML ou JSON selon son extension."""

    def load(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise FileNotFoundError(
                f"Fichier de configuration introuvable : {path}"
            )

        suffix = path.suffix.lower()
        if suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f)
        if suffix == ".json":
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(
                    f"{path} doit contenir un objet JSON"
                )
            return data
        raise ValueError(
            f"Format {suffix or '(sans extension)'} non pris en "
            "charge : utilisez .toml ou .json"
        )


def _find_config_file(search_paths: List[str]) -> Optional[Path]:
    for candidate in search_paths:
        path = Path(candidate).expanduser()
        if path.is_file():
            return path
    return None


def load_settings(
    config_path: Optional[Union[str, Path]] = None,
    loader: Optional[ConfigLoader] = None,
    search_paths: Optional[List[str]] = None,
) -> AppSettings:
    """Charge et valide la configuration de l'application.

    Sans chemin explicite, le premier fichier existant parmi
    search_paths est utilise ; a defaut, AppSettings() est
    retourne.

    Args:
        config_path: Fichier explicite (.toml ou .json).
        loader: Lecteur injectable, FileConfigLoader par defaut.
        search_paths: Emplacements parcourus, DEFAULT_SEARCH_PATHS
            par defaut.

    Returns:
        Configuration validee.

    Raises:
        ConfigurationError: Si le fichier est absent, illisible
            ou invalide.
    """
    loader = loader or FileConfigLoader()
    if config_path is None:
        config_path = _find_config_file(
            DEFAULT_SEARCH_PATHS if search_paths is None else search_paths
        )
        if config_path is None:
            return AppSettings()

    try:
        raw = loader.load(config_path)
        return AppSettings.model_validate(raw)
    except FileNotFoundError as e:
        raise ConfigurationError(str(e)) from e
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Syntaxe invalide dans {config_path} : {e}"
        ) from e
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Valeurs refusees dans {config_path} : {e}"
        ) from e
    except (ValueError, OSError) as e:
        raise ConfigurationError(
            f"Lecture impossible de {config_path} : {e}"
        ) from e
