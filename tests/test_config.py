"""Tests pour le module config."""

import json

import pytest

from waybar_lan.config import (
    DEFAULT_SERVICE_TYPES,
    AppSettings,
    ConfigLoader,
    FileConfigLoader,
    load_settings,
)
from waybar_lan.errors import ConfigurationError


class FakeLoader(ConfigLoader):
    """Lecteur en memoire qui retient les chemins demandes."""

    def __init__(self, data):
        self.data = data
        self.paths = []

    def load(self, config_path):
        self.paths.append(config_path)
        return self.data


class TestAppSettings:
    """Tests pour les valeurs par défaut et la validation."""

    def test_defaults(self):
        """Les valeurs par défaut couvrent tout le pipeline."""
        settings = AppSettings()

        assert settings.discovery.mdns_timeout == 3.0
        assert settings.discovery.mdns_poll_interval == 0.1
        assert settings.discovery.ssdp_timeout == 2.0
        assert settings.discovery.ssdp_retransmissions == 2
        assert settings.discovery.ssdp_send_interval == 0.1
        assert settings.discovery.ping_timeout == 1
        assert settings.discovery.ping_grace_period == 0.2
        assert settings.discovery.service_types == DEFAULT_SERVICE_TYPES
        assert settings.paths.neighbor_table == "/proc/net/arp"
        assert settings.paths.route_table == "/proc/net/route"
        assert settings.paths.resolv_conf == "/etc/resolv.conf"
        assert settings.retry.delays == [1, 2, 4, 8]
        assert settings.logging.console is False

    def test_catalogue_mdns(self):
        """Le catalogue contient les douze types attendus."""
        assert len(DEFAULT_SERVICE_TYPES) == 12
        assert "_googlecast._tcp.local." in DEFAULT_SERVICE_TYPES
        assert "_device-info._tcp.local." in DEFAULT_SERVICE_TYPES

    def test_cle_inconnue_refusee(self):
        """extra='forbid' rejette les clés inconnues."""
        with pytest.raises(ValueError):
            AppSettings.model_validate({"discovery": {"mdns": 3}})

    def test_type_service_invalide(self):
        """Un type de service sans suffixe .local. est refusé."""
        with pytest.raises(ValueError):
            AppSettings.model_validate(
                {"discovery": {"service_types": ["_ssh._tcp"]}}
            )

    def test_delai_negatif(self):
        """Un délai de relance négatif est refusé."""
        with pytest.raises(ValueError):
            AppSettings.model_validate({"retry": {"delays": [1, -2]}})

    def test_niveau_log_normalise(self):
        """Le niveau de log est mis en majuscules."""
        settings = AppSettings.model_validate(
            {"logging": {"level": "debug"}}
        )
        assert settings.logging.level == "DEBUG"

    def test_niveau_log_inconnu(self):
        """Un niveau inconnu est refusé."""
        with pytest.raises(ValueError):
            AppSettings.model_validate({"logging": {"level": "verbose"}})


class TestFileConfigLoader:
    """Tests pour FileConfigLoader."""

    def test_implements_interface(self):
        """FileConfigLoader implémente ConfigLoader."""
        assert isinstance(FileConfigLoader(), ConfigLoader)

    def test_load_toml(self, tmp_path):
        """Chargement d'un fichier TOML brut."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[discovery]\nmdns_timeout = 5.0\n")

        config = FileConfigLoader().load(config_file)

        assert config == {"discovery": {"mdns_timeout": 5.0}}

    def test_load_json(self, tmp_path):
        """Chargement JSON brut, validé ensuite par load_settings."""
        config_file = tmp_path / "config.json"
        config_file.write_text(
            json.dumps({"retry": {"delays": [0.5]}})
        )

        assert FileConfigLoader().load(config_file) == {
            "retry": {"delays": [0.5]}
        }
        assert load_settings(config_file).retry.delays == [0.5]

    def test_fichier_absent(self, tmp_path):
        """Fichier absent lève FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            FileConfigLoader().load(tmp_path / "absent.toml")

    def test_extension_non_supportee(self, tmp_path):
        """Extension inconnue lève ValueError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("a: 1")
        with pytest.raises(ValueError):
            FileConfigLoader().load(config_file)

    def test_json_non_objet(self, tmp_path):
        """Un document JSON qui n'est pas un objet lève ValueError."""
        config_file = tmp_path / "config.json"
        config_file.write_text("[1, 2]")
        with pytest.raises(ValueError):
            FileConfigLoader().load(config_file)

    def test_lecteur_injecte(self):
        """load_settings valide le contenu fourni par le lecteur."""
        loader = FakeLoader({"discovery": {"dns_timeout": 2.0}})
        settings = load_settings("virtuel.toml", loader=loader)
        assert settings.discovery.dns_timeout == 2.0
        assert loader.paths == ["virtuel.toml"]


class TestLoadSettings:
    """Tests pour load_settings."""

    def test_aucun_fichier_defauts(self, tmp_path):
        """Sans fichier trouvé, la configuration par défaut est utilisée."""
        settings = load_settings(
            search_paths=[str(tmp_path / "absent.toml")]
        )
        assert settings == AppSettings()

    def test_premier_fichier_trouve(self, tmp_path):
        """Le premier emplacement existant est chargé."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[paths]\nneighbor_table = \"/tmp/arp\"\n")

        settings = load_settings(
            search_paths=[str(tmp_path / "absent.toml"), str(config_file)]
        )

        assert settings.paths.neighbor_table == "/tmp/arp"

    def test_chemin_explicite_absent(self, tmp_path):
        """Un chemin explicite absent lève ConfigurationError."""
        with pytest.raises(ConfigurationError):
            load_settings(tmp_path / "absent.toml")

    def test_toml_invalide(self, tmp_path):
        """Un TOML mal formé lève ConfigurationError."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[discovery\n")
        with pytest.raises(ConfigurationError):
            load_settings(config_file)

    def test_json_invalide(self, tmp_path):
        """Un JSON mal formé lève ConfigurationError."""
        config_file = tmp_path / "config.json"
        config_file.write_text("{")
        with pytest.raises(ConfigurationError):
            load_settings(config_file)

    def test_validation_echouee(self, tmp_path):
        """Une valeur hors bornes lève ConfigurationError."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[discovery]\nssdp_retransmissions = 0\n")
        with pytest.raises(ConfigurationError):
            load_settings(config_file)

    def test_extension_non_supportee(self, tmp_path):
        """Une extension inconnue lève ConfigurationError."""
        config_file = tmp_path / "config.ini"
        config_file.write_text("[x]")
        with pytest.raises(ConfigurationError):
            load_settings(config_file)
