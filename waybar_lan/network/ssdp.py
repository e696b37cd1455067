"""Decouverte de peripheriques UPnP par SSDP.

Un M-SEARCH est envoye en multicast puis les reponses unicast
sont collectees jusqu'a l'echeance. Le document de description
du peripherique n'est jamais telecharge : seule la cible de
recherche annoncee (en-tete ST) est conservee.
"""

import socket
import time
from typing import Callable, Dict, Optional

from waybar_lan.errors import DiscoveryError
from waybar_lan.logging.base import Logger
from waybar_lan.network.base import DeviceDiscovery
from waybar_lan.network.models import UpnpInfo
from waybar_lan.network.validators import parse_ip

SSDP_ADDR = "239.255.255.250"
SSDP_PORT = 1900
ROOT_DEVICE = "upnp:rootdevice"


def build_msearch(search_target: str = ROOT_DEVICE, mx: int = 2) -> bytes:
    """Construit la requete M-SEARCH."""
    return (
        "M-SEARCH * HTTP/1.1\r\n"
        f"HOST: {SSDP_ADDR}:{SSDP_PORT}\r\n"
        'MAN: "ssdp:discover"\r\n'
        f"MX: {mx}\r\n"
        f"ST: {search_target}\r\n"
        "\r\n"
    ).encode()


def parse_ssdp_response(data: bytes) -> Dict[str, str]:
    """Retourne les en-tetes d'une reponse, noms en majuscules.

    La ligne de statut et les lignes sans ':' sont ignorees.
    """
    headers = {}
    text = data.decode("utf-8", errors="ignore")
    for line in text.splitlines()[1:]:
        key, sep, value = line.partition(":")
        if not sep:
            continue
        headers[key.strip().upper()] = value.strip()
    return headers


def extract_ip_from_location(location: str) -> Optional[str]:
    """Extrait l'adresse IP d'une URL de description UPnP.

    Exemple : "http://192.168.1.100:1234/desc.xml" donne
    "192.168.1.100". Un nom d'hote ou un autre schema donne None.
    """
    if not location.startswith("http://"):
        return None
    host_port = location[len("http://"):].split("/", 1)[0]
    ip = parse_ip(host_port.split(":", 1)[0])
    return str(ip) if ip is not None else None


def _udp_socket() -> socket.socket:
    return socket.socket(
        socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP
    )


class SsdpDeviceDiscovery(DeviceDiscovery):
    """Recherche les peripheriques racine UPnP.

    Attributes:
        _search_target: Valeur ST de la requete.
        _retransmissions: Nombre d'envois du M-SEARCH.
        _send_interval: Ecart max entre deux envois (s).
        _socket_factory: Fabrique de la socket UDP.
        _clock: Horloge monotone.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        search_target: str = ROOT_DEVICE,
        retransmissions: int = 2,
        send_interval: float = 0.1,
        socket_factory: Callable[[], socket.socket] = _udp_socket,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[Logger] = None,
    ) -> None:
        self._search_target = search_target
        self._retransmissions = max(1, retransmissions)
        self._send_interval = send_interval
        self._sleep = sleep
        self._socket_factory = socket_factory
        self._clock = clock
        self._logger = logger

    def discover(self, timeout: float) -> Dict[str, UpnpInfo]:
        """Envoie la recherche et collecte les reponses.

        Args:
            timeout: Duree totale de la collecte en secondes.

        Returns:
            Descripteur par adresse IP ; une IP repondant
            plusieurs fois garde la derniere reponse.

        Raises:
            DiscoveryError: Si la socket ne peut pas etre ouverte
                ou la requete envoyee.
        """
        deadline = self._clock() + timeout
        request = build_msearch(self._search_target, max(1, int(timeout)))
        try:
            sock = self._socket_factory()
        except OSError as e:
            raise DiscoveryError(f"Socket SSDP impossible : {e}") from e

        devices: Dict[str, UpnpInfo] = {}
        try:
            try:
                sock.setsockopt(
                    socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, 2
                )
                self._send(sock, request, timeout)
            except OSError as e:
                raise DiscoveryError(
                    f"Envoi du M-SEARCH impossible : {e}"
                ) from e
            self._collect(sock, deadline, devices)
        finally:
            sock.close()

        if self._logger:
            self._logger.log_info(
                f"SSDP : {len(devices)} peripherique(s) UPnP"
            )
        return devices

    def _send(
        self, sock: socket.socket, request: bytes, timeout: float
    ) -> None:
        """Envoie les retransmissions espacees dans la fenetre MX."""
        gap = min(self._send_interval, timeout / self._retransmissions)
        for attempt in range(self._retransmissions):
            if attempt and gap > 0:
                self._sleep(gap)
            sock.sendto(request, (SSDP_ADDR, SSDP_PORT))

    def _collect(
        self,
        sock: socket.socket,
        deadline: float,
        devices: Dict[str, UpnpInfo],
    ) -> None:
        while True:
            remaining = deadline - self._clock()
            if remaining <= 0:
                return
            sock.settimeout(remaining)
            try:
                data, _ = sock.recvfrom(4096)
            except socket.timeout:
                return
            except OSError as e:
                if self._logger:
                    self._logger.log_warning(f"Reception SSDP : {e}")
                return
            headers = parse_ssdp_response(data)
            ip = extract_ip_from_location(headers.get("LOCATION", ""))
            if ip is None:
                continue
            devices[ip] = UpnpInfo(device_type=headers.get("ST") or None)
