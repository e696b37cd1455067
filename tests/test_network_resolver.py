"""Tests pour la resolution DNS inverse."""

import socket
import threading
from unittest.mock import MagicMock

from waybar_lan.logging.base import Logger
from waybar_lan.network.models import Hostname
from waybar_lan.network.resolver import ReverseResolver


def _lookup_table(names):
    def lookup(ip):
        name = names.get(ip)
        if name is None:
            raise socket.herror(1, "Unknown host")
        return name, [], [ip]
    return lookup


class TestReverseResolver:
    """Tests pour ReverseResolver."""

    def test_lookup_resolu(self) -> None:
        resolver = ReverseResolver(_lookup_table({"10.0.0.1": "gw.lan"}))
        assert resolver.lookup("10.0.0.1") == Hostname.resolved("gw.lan")

    def test_lookup_echec(self) -> None:
        """herror et gaierror donnent un nom inconnu."""
        resolver = ReverseResolver(_lookup_table({}))
        assert resolver.lookup("10.0.0.9") == Hostname.unknown()

        resolver = ReverseResolver(
            MagicMock(side_effect=socket.gaierror(-2, "Name unknown"))
        )
        assert resolver.lookup("10.0.0.9") == Hostname.unknown()

    def test_lookup_nom_vide(self) -> None:
        resolver = ReverseResolver(lambda ip: ("", [], [ip]))
        assert resolver.lookup("10.0.0.1") == Hostname.unknown()

    def test_resolve_all(self) -> None:
        """Une entree par adresse, succes et echecs confondus."""
        resolver = ReverseResolver(
            _lookup_table({"10.0.0.1": "gw.lan", "10.0.0.2": "nas.lan"})
        )

        results = resolver.resolve_all(["10.0.0.1", "10.0.0.2", "10.0.0.3"])

        assert results == {
            "10.0.0.1": Hostname.resolved("gw.lan"),
            "10.0.0.2": Hostname.resolved("nas.lan"),
            "10.0.0.3": Hostname.unknown(),
        }

    def test_resolve_all_vide(self) -> None:
        assert ReverseResolver(_lookup_table({})).resolve_all([]) == {}

    def test_delai_global(self) -> None:
        """Les recherches encore en cours a l'echeance sont inconnues."""
        release = threading.Event()
        logger = MagicMock(spec=Logger)

        def lookup(ip):
            if ip == "10.0.0.2":
                release.wait(5)
            return "host-" + ip.rsplit(".", 1)[1], [], [ip]

        resolver = ReverseResolver(lookup, timeout=0.2, logger=logger)
        try:
            results = resolver.resolve_all(["10.0.0.1", "10.0.0.2"])
            stuck = [
                t for t in threading.enumerate() if t.name == "rdns-10.0.0.2"
            ]
        finally:
            release.set()

        assert results["10.0.0.1"] == Hostname.resolved("host-1")
        assert results["10.0.0.2"] == Hostname.unknown()
        logger.log_warning.assert_called_once()
        # Une recherche bloquee ne doit pas retenir le processus a la sortie
        assert stuck and all(t.daemon for t in stuck)

    def test_adresses_en_double(self) -> None:
        """Une adresse repetee n'est resolue qu'une fois."""
        lookup = MagicMock(return_value=("gw.lan", [], ["10.0.0.1"]))

        results = ReverseResolver(lookup).resolve_all(
            ["10.0.0.1", "10.0.0.1"]
        )

        assert results == {"10.0.0.1": Hostname.resolved("gw.lan")}
        lookup.assert_called_once_with("10.0.0.1")
