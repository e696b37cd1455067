"""Tests pour la classification et l'extraction d'identite."""

from typing import List, Optional

import pytest

from waybar_lan.network.identity import (
    CLASSIFICATION_RULES,
    ClassificationRule,
    build_identity,
    classify_device,
    extract_friendly_name,
    extract_manufacturer,
    extract_model,
)
from waybar_lan.network.models import (
    DeviceIdentity,
    DeviceType,
    Hostname,
    NetworkDevice,
    ServiceInfo,
    UpnpInfo,
)

RENDERER = "urn:schemas-upnp-org:device:MediaRenderer:1"


def _device(
    services: Optional[List[str]] = None,
    upnp: Optional[UpnpInfo] = None,
    hostname: Optional[str] = None,
) -> NetworkDevice:
    device = NetworkDevice(
        ip="192.168.1.50",
        mac="aa:bb:cc:dd:ee:ff",
        interface_name="eth0",
        services=[
            ServiceInfo(service_type, "device.local.", 0)
            for service_type in services or []
        ],
        upnp_info=upnp,
    )
    if hostname is not None:
        device.set_hostname(Hostname.resolved(hostname))
    return device


class TestClassificationUpnp:
    """Regles basees sur l'URN UPnP."""

    def test_renderer_avec_airplay_television(self) -> None:
        device = _device(
            services=["_airplay._tcp.local."],
            upnp=UpnpInfo(device_type=RENDERER),
        )
        assert classify_device(device) is DeviceType.TELEVISION

    def test_renderer_avec_chromecast_television(self) -> None:
        device = _device(
            services=["_googlecast._tcp.local."],
            upnp=UpnpInfo(device_type=RENDERER),
        )
        assert classify_device(device) is DeviceType.TELEVISION

    def test_renderer_seul_enceinte(self) -> None:
        device = _device(upnp=UpnpInfo(device_type=RENDERER))
        assert classify_device(device) is DeviceType.SPEAKER

    def test_passerelle_internet(self) -> None:
        device = _device(
            upnp=UpnpInfo(
                device_type="urn:schemas-upnp-org:device:"
                            "InternetGatewayDevice:1"
            )
        )
        assert classify_device(device) is DeviceType.ROUTER

    def test_media_server(self) -> None:
        device = _device(
            upnp=UpnpInfo(
                device_type="urn:schemas-upnp-org:device:MediaServer:1"
            )
        )
        assert classify_device(device) is DeviceType.NAS

    def test_urn_prioritaire_sur_services(self) -> None:
        """Un renderer avec IPP reste une enceinte : l'URN passe avant."""
        device = _device(
            services=["_ipp._tcp.local."],
            upnp=UpnpInfo(device_type=RENDERER),
        )
        assert classify_device(device) is DeviceType.SPEAKER


class TestClassificationServices:
    """Regles basees sur la signature mDNS."""

    @pytest.mark.parametrize(
        "services,expected",
        [
            (["_ipp._tcp.local."], DeviceType.PRINTER),
            (["_printer._tcp.local."], DeviceType.PRINTER),
            (["_googlecast._tcp.local."], DeviceType.TELEVISION),
            (
                ["_airplay._tcp.local.", "_spotify-connect._tcp.local."],
                DeviceType.TELEVISION,
            ),
            (["_raop._tcp.local."], DeviceType.SPEAKER),
            (["_ssh._tcp.local.", "_smb._tcp.local."], DeviceType.NAS),
            (["_homekit._tcp.local."], DeviceType.SMART_HOME),
            (["_ssh._tcp.local."], DeviceType.UNKNOWN),
        ],
    )
    def test_signatures(self, services, expected) -> None:
        assert classify_device(_device(services=services)) is expected

    def test_airtunes_avec_airplay_pas_enceinte(self) -> None:
        """AirTunes + AirPlay ne correspond a aucune regle de service."""
        device = _device(
            services=["_raop._tcp.local.", "_airplay._tcp.local."]
        )
        assert classify_device(device) is DeviceType.UNKNOWN


class TestClassificationMarques:
    """Regles basees sur fabricant et modele."""

    def test_marque_tv_avec_streaming(self) -> None:
        device = _device(
            services=["_airplay._tcp.local."],
            upnp=UpnpInfo(manufacturer="LG Electronics"),
        )
        assert classify_device(device) is DeviceType.TELEVISION

    def test_marque_tv_sans_streaming(self) -> None:
        device = _device(upnp=UpnpInfo(manufacturer="Samsung"))
        assert classify_device(device) is DeviceType.UNKNOWN

    def test_marque_tv_dans_le_nom_d_hote(self) -> None:
        device = _device(
            services=["_spotify-connect._tcp.local."],
            hostname="sony-bravia",
        )
        assert classify_device(device) is DeviceType.TELEVISION

    def test_marque_imprimante(self) -> None:
        device = _device(upnp=UpnpInfo(manufacturer="Brother Industries"))
        assert classify_device(device) is DeviceType.PRINTER

    def test_marque_imprimante_nom_d_hote(self) -> None:
        assert (
            classify_device(_device(hostname="EPSON1234"))
            is DeviceType.PRINTER
        )

    def test_vendeur_nas_upnp_uniquement(self) -> None:
        device = _device(upnp=UpnpInfo(manufacturer="Synology Inc."))
        assert classify_device(device) is DeviceType.NAS
        assert (
            classify_device(_device(hostname="synology-box"))
            is DeviceType.UNKNOWN
        )

    def test_modele_ipad(self) -> None:
        device = _device(upnp=UpnpInfo(model_name="iPad Pro"))
        assert classify_device(device) is DeviceType.TABLET

    def test_modele_iphone(self) -> None:
        device = _device(upnp=UpnpInfo(model_name="iPhone 15"))
        assert classify_device(device) is DeviceType.MOBILE_DEVICE


class TestClassificationNomHote:
    """Regles basees sur le nom d'hote resolu."""

    @pytest.mark.parametrize(
        "hostname,expected",
        [
            ("kitchen-nas", DeviceType.NAS),
            ("main-router", DeviceType.ROUTER),
            ("gateway.lan", DeviceType.ROUTER),
            ("office-printer", DeviceType.PRINTER),
            ("ipad-de-marie", DeviceType.TABLET),
            ("galaxy-tab-s7", DeviceType.TABLET),
            ("tab-enfants", DeviceType.TABLET),
            ("galaxy-s21", DeviceType.MOBILE_DEVICE),
            ("iphone", DeviceType.MOBILE_DEVICE),
            ("pixel-8", DeviceType.MOBILE_DEVICE),
            ("desktop", DeviceType.UNKNOWN),
        ],
    )
    def test_mots_cles(self, hostname: str, expected) -> None:
        assert classify_device(_device(hostname=hostname)) is expected

    def test_nom_non_resolu_ignore(self) -> None:
        """Un nom en resolution ne declenche aucune regle."""
        assert classify_device(_device()) is DeviceType.UNKNOWN


class TestReglesOrdonnees:
    """Tests sur la liste ordonnee des regles."""

    def test_premiere_regle_gagne(self) -> None:
        rules = (
            ClassificationRule("a", lambda d: True, DeviceType.COMPUTER),
            ClassificationRule("b", lambda d: True, DeviceType.NAS),
        )
        assert classify_device(_device(), rules) is DeviceType.COMPUTER

    def test_noms_uniques(self) -> None:
        names = [rule.name for rule in CLASSIFICATION_RULES]
        assert len(names) == len(set(names))


class TestExtraction:
    """Tests pour fabricant, modele et nom convivial."""

    def test_fabricant_upnp(self) -> None:
        device = _device(
            upnp=UpnpInfo(manufacturer="Acme", friendly_name="Sony TV")
        )
        assert extract_manufacturer(device) == "Acme"

    def test_fabricant_depuis_nom_convivial(self) -> None:
        """Le premier mot connu est retourne avec son orthographe."""
        device = _device(upnp=UpnpInfo(friendly_name="samsung Smart TV"))
        assert extract_manufacturer(device) == "Samsung"

    def test_fabricant_nom_convivial_inconnu(self) -> None:
        device = _device(upnp=UpnpInfo(friendly_name="Living Room TV"))
        assert extract_manufacturer(device) is None

    def test_fabricant_depuis_nom_d_hote(self) -> None:
        """Le fabricant trouve dans le nom d'hote est capitalise."""
        assert extract_manufacturer(_device(hostname="my-apple-tv")) == "Apple"
        assert extract_manufacturer(_device(hostname="hp-laserjet")) == "Hp"

    def test_modele(self) -> None:
        assert extract_model(_device(upnp=UpnpInfo(model_name="QN90B"))) == (
            "QN90B"
        )
        assert extract_model(_device(upnp=UpnpInfo(model_name=""))) is None
        assert extract_model(_device(hostname="QN90B")) is None

    def test_nom_convivial_upnp(self) -> None:
        device = _device(
            upnp=UpnpInfo(friendly_name="Living Room TV"), hostname="tv"
        )
        assert extract_friendly_name(device) == "Living Room TV"

    def test_nom_convivial_uuid_ignore(self) -> None:
        device = _device(
            upnp=UpnpInfo(friendly_name="uuid:1234"), hostname="tv"
        )
        assert extract_friendly_name(device) == "tv"

    def test_nom_convivial_underscore_ignore(self) -> None:
        assert extract_friendly_name(_device(hostname="_service")) is None

    def test_aucune_information(self) -> None:
        """Identite totalement inconnue sans aucun indice."""
        assert build_identity(_device()) == DeviceIdentity(
            DeviceType.UNKNOWN, None, None, None
        )
