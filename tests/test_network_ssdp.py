"""Tests pour la decouverte SSDP."""

import socket
from unittest.mock import MagicMock, call

import pytest

from waybar_lan.errors import DiscoveryError
from waybar_lan.logging.base import Logger
from waybar_lan.network.models import UpnpInfo
from waybar_lan.network.ssdp import (
    SSDP_ADDR,
    SSDP_PORT,
    SsdpDeviceDiscovery,
    build_msearch,
    extract_ip_from_location,
    parse_ssdp_response,
)

RESPONSE_TV = (
    b"HTTP/1.1 200 OK\r\n"
    b"CACHE-CONTROL: max-age=1800\r\n"
    b"LOCATION: http://192.168.1.30:9197/dmr\r\n"
    b"st: urn:schemas-upnp-org:device:MediaRenderer:1\r\n"
    b"USN: uuid:abcd::urn:schemas-upnp-org:device:MediaRenderer:1\r\n"
    b"\r\n"
)

RESPONSE_ROUTER = (
    b"HTTP/1.1 200 OK\r\n"
    b"Location: http://192.168.1.1:5000/rootDesc.xml\r\n"
    b"ST: upnp:rootdevice\r\n"
    b"\r\n"
)

RESPONSE_HOSTNAME = (
    b"HTTP/1.1 200 OK\r\n"
    b"LOCATION: http://router.lan:5000/desc.xml\r\n"
    b"ST: upnp:rootdevice\r\n"
    b"\r\n"
)


def _socket(*responses):
    sock = MagicMock()
    sock.recvfrom.side_effect = [
        (data, ("192.168.1.99", 1900)) for data in responses
    ] + [socket.timeout()]
    return sock


class TestHelpers:
    """Tests pour les fonctions de protocole."""

    def test_build_msearch(self) -> None:
        request = build_msearch("upnp:rootdevice", 2).decode()

        assert request.startswith("M-SEARCH * HTTP/1.1\r\n")
        assert "HOST: 239.255.255.250:1900\r\n" in request
        assert 'MAN: "ssdp:discover"\r\n' in request
        assert "MX: 2\r\n" in request
        assert "ST: upnp:rootdevice\r\n" in request
        assert request.endswith("\r\n\r\n")

    def test_parse_ssdp_response(self) -> None:
        """Noms d'en-tetes en majuscules, ligne de statut ignoree."""
        headers = parse_ssdp_response(RESPONSE_TV)

        assert headers["LOCATION"] == "http://192.168.1.30:9197/dmr"
        assert headers["ST"] == "urn:schemas-upnp-org:device:MediaRenderer:1"
        assert "HTTP/1.1 200 OK" not in headers

    @pytest.mark.parametrize(
        "location,expected",
        [
            ("http://192.168.1.100:1234/desc.xml", "192.168.1.100"),
            ("http://192.168.1.100/desc.xml", "192.168.1.100"),
            ("http://192.168.1.100", "192.168.1.100"),
            ("http://router.lan:5000/desc.xml", None),
            ("https://192.168.1.100/desc.xml", None),
            ("", None),
        ],
    )
    def test_extract_ip_from_location(self, location, expected) -> None:
        assert extract_ip_from_location(location) == expected


class TestSsdpDeviceDiscovery:
    """Tests pour SsdpDeviceDiscovery."""

    def test_collecte(self) -> None:
        """Une entree par IP de LOCATION, avec la cible annoncee."""
        sock = _socket(RESPONSE_TV, RESPONSE_ROUTER, RESPONSE_HOSTNAME)
        discovery = SsdpDeviceDiscovery(socket_factory=lambda: sock)

        devices = discovery.discover(1.0)

        assert devices == {
            "192.168.1.30": UpnpInfo(
                device_type="urn:schemas-upnp-org:device:MediaRenderer:1"
            ),
            "192.168.1.1": UpnpInfo(device_type="upnp:rootdevice"),
        }
        sock.close.assert_called_once()

    def test_retransmissions(self) -> None:
        """Les envois sont espaces, sans attente apres le dernier."""
        sock = _socket()
        sleep = MagicMock()
        SsdpDeviceDiscovery(
            retransmissions=3, socket_factory=lambda: sock, sleep=sleep
        ).discover(1.0)

        assert sock.sendto.call_count == 3
        assert sleep.call_args_list == [call(0.1), call(0.1)]
        sock.sendto.assert_called_with(
            build_msearch("upnp:rootdevice", 1), (SSDP_ADDR, SSDP_PORT)
        )
        sock.setsockopt.assert_called_once_with(
            socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, 2
        )

    def test_ecart_borne_par_la_fenetre(self) -> None:
        """L'ecart entre envois tient dans la duree de collecte."""
        sock = _socket()
        sleep = MagicMock()
        SsdpDeviceDiscovery(
            retransmissions=4, send_interval=1.0,
            socket_factory=lambda: sock, sleep=sleep,
        ).discover(0.2)

        assert sock.sendto.call_count == 4
        assert sleep.call_count == 3
        for waited in sleep.call_args_list:
            assert waited[0][0] == pytest.approx(0.05)

    def test_envoi_unique_sans_attente(self) -> None:
        sleep = MagicMock()
        SsdpDeviceDiscovery(
            retransmissions=1, socket_factory=_socket, sleep=sleep
        ).discover(1.0)
        sleep.assert_not_called()

    def test_derniere_reponse_gagne(self) -> None:
        sock = _socket(RESPONSE_TV, RESPONSE_TV.replace(
            b"MediaRenderer:1\r\nUSN", b"MediaServer:1\r\nUSN"
        ))
        devices = SsdpDeviceDiscovery(
            socket_factory=lambda: sock
        ).discover(1.0)

        assert devices["192.168.1.30"].device_type == (
            "urn:schemas-upnp-org:device:MediaServer:1"
        )

    def test_socket_impossible(self) -> None:
        discovery = SsdpDeviceDiscovery(
            socket_factory=MagicMock(side_effect=OSError("denied"))
        )
        with pytest.raises(DiscoveryError):
            discovery.discover(1.0)

    def test_envoi_impossible(self) -> None:
        """Un echec d'envoi leve DiscoveryError et ferme la socket."""
        sock = _socket()
        sock.sendto.side_effect = OSError("unreachable")

        with pytest.raises(DiscoveryError):
            SsdpDeviceDiscovery(socket_factory=lambda: sock).discover(1.0)
        sock.close.assert_called_once()

    def test_erreur_de_reception(self) -> None:
        """Une erreur de reception termine la collecte sans lever."""
        logger = MagicMock(spec=Logger)
        sock = MagicMock()
        sock.recvfrom.side_effect = [
            (RESPONSE_ROUTER, ("192.168.1.1", 1900)),
            ConnectionResetError("reset"),
        ]

        devices = SsdpDeviceDiscovery(
            socket_factory=lambda: sock, logger=logger
        ).discover(1.0)

        assert list(devices) == ["192.168.1.1"]
        logger.log_warning.assert_called_once()

    def test_echeance_depassee(self) -> None:
        """Aucune lecture apres l'echeance."""
        sock = _socket(RESPONSE_TV)
        clock = iter([0.0, 5.0]).__next__

        devices = SsdpDeviceDiscovery(
            socket_factory=lambda: sock, clock=clock
        ).discover(1.0)

        assert devices == {}
        sock.recvfrom.assert_not_called()
