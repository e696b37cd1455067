"""Deduction de l'identite d'un peripherique.

La classification est une liste ordonnee de regles
predicat -> type : la premiere regle satisfaite l'emporte.
L'ordre de CLASSIFICATION_RULES est donc significatif.

Les champs fabricant, modele et nom convivial sont extraits
independamment du type, chacun par sa propre chaine de priorite.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from waybar_lan.network.models import (
    DeviceIdentity,
    DeviceType,
    NetworkDevice,
)

TV_BRANDS = ("samsung", "lg", "sony", "vizio", "tcl", "hisense")
PRINTER_BRANDS = ("brother", "hp", "canon", "epson", "xerox")
NAS_VENDORS = ("synology", "qnap")
STREAMING_SERVICES = (
    "_airplay", "_googlecast", "_spotify-connect", "_raop",
)
KNOWN_MANUFACTURERS = (
    "Samsung", "LG", "Sony", "Brother", "HP",
    "Canon", "Epson", "Apple", "Google", "Amazon",
)


@dataclass(frozen=True)
class ClassificationRule:
    """Regle de classification.

    Attributes:
        name: Nom lisible de la regle.
        predicate: Fonction testant le peripherique.
        device_type: Type retourne si le predicat est vrai.
    """

    name: str
    predicate: Callable[[NetworkDevice], bool]
    device_type: DeviceType

    def matches(self, device: NetworkDevice) -> bool:
        return self.predicate(device)


def _urn(device: NetworkDevice) -> str:
    if device.upnp_info is None or not device.upnp_info.device_type:
        return ""
    return device.upnp_info.device_type.lower()


def _upnp_manufacturer(device: NetworkDevice) -> str:
    if device.upnp_info is None or not device.upnp_info.manufacturer:
        return ""
    return device.upnp_info.manufacturer.lower()


def _upnp_model(device: NetworkDevice) -> str:
    if device.upnp_info is None or not device.upnp_info.model_name:
        return ""
    return device.upnp_info.model_name.lower()


def _resolved_hostname(device: NetworkDevice) -> str:
    if not device.hostname.is_resolved:
        return ""
    return (device.hostname.name or "").lower()


def _contains_any(text: str, keywords: Tuple[str, ...]) -> bool:
    return bool(text) and any(k in text for k in keywords)


def _has_brand(device: NetworkDevice, brands: Tuple[str, ...]) -> bool:
    """Cherche une marque dans le fabricant UPnP puis le nom d'hote."""
    return _contains_any(
        _upnp_manufacturer(device), brands
    ) or _contains_any(_resolved_hostname(device), brands)


def _has_streaming_service(device: NetworkDevice) -> bool:
    return any(device.has_service(s) for s in STREAMING_SERVICES)


def _is_tablet_hostname(hostname: str) -> bool:
    return (
        _contains_any(hostname, ("ipad", "tablet", "-tab-", " tab "))
        or hostname.startswith("tab")
    )


def _is_renderer(device: NetworkDevice) -> bool:
    return "mediarenderer" in _urn(device)


CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    # URN UPnP
    ClassificationRule(
        "upnp-renderer-video",
        lambda d: _is_renderer(d) and (
            d.has_service("_airplay") or d.has_service("_googlecast")
        ),
        DeviceType.TELEVISION,
    ),
    ClassificationRule(
        "upnp-renderer", _is_renderer, DeviceType.SPEAKER,
    ),
    ClassificationRule(
        "upnp-gateway",
        lambda d: "internetgatewaydevice" in _urn(d),
        DeviceType.ROUTER,
    ),
    ClassificationRule(
        "upnp-media-server",
        lambda d: "mediaserver" in _urn(d),
        DeviceType.NAS,
    ),
    # Signature des services mDNS
    ClassificationRule(
        "mdns-printer",
        lambda d: d.has_service("_printer") or d.has_service("_ipp"),
        DeviceType.PRINTER,
    ),
    ClassificationRule(
        "mdns-cast",
        lambda d: d.has_service("_googlecast") or (
            d.has_service("_airplay")
            and d.has_service("_spotify-connect")
        ),
        DeviceType.TELEVISION,
    ),
    ClassificationRule(
        "mdns-airtunes",
        lambda d: d.has_service("_raop")
        and not d.has_service("_airplay"),
        DeviceType.SPEAKER,
    ),
    ClassificationRule(
        "mdns-file-server",
        lambda d: d.has_service("_ssh") and d.has_service("_smb"),
        DeviceType.NAS,
    ),
    ClassificationRule(
        "mdns-homekit",
        lambda d: d.has_service("_homekit"),
        DeviceType.SMART_HOME,
    ),
    # Marques et modeles
    ClassificationRule(
        "brand-tv",
        lambda d: _has_brand(d, TV_BRANDS) and _has_streaming_service(d),
        DeviceType.TELEVISION,
    ),
    ClassificationRule(
        "brand-printer",
        lambda d: _has_brand(d, PRINTER_BRANDS),
        DeviceType.PRINTER,
    ),
    ClassificationRule(
        "vendor-nas",
        lambda d: _contains_any(_upnp_manufacturer(d), NAS_VENDORS),
        DeviceType.NAS,
    ),
    ClassificationRule(
        "model-ipad",
        lambda d: "ipad" in _upnp_model(d),
        DeviceType.TABLET,
    ),
    ClassificationRule(
        "model-iphone",
        lambda d: "iphone" in _upnp_model(d),
        DeviceType.MOBILE_DEVICE,
    ),
    # Nom d'hote ; tablettes avant telephones ("galaxy-tab-s7")
    ClassificationRule(
        "hostname-router",
        lambda d: _contains_any(
            _resolved_hostname(d), ("router", "gateway")
        ),
        DeviceType.ROUTER,
    ),
    ClassificationRule(
        "hostname-nas",
        lambda d: "nas" in _resolved_hostname(d),
        DeviceType.NAS,
    ),
    ClassificationRule(
        "hostname-printer",
        lambda d: "printer" in _resolved_hostname(d),
        DeviceType.PRINTER,
    ),
    ClassificationRule(
        "hostname-tablet",
        lambda d: _is_tablet_hostname(_resolved_hostname(d)),
        DeviceType.TABLET,
    ),
    ClassificationRule(
        "hostname-phone",
        lambda d: _contains_any(
            _resolved_hostname(d), ("iphone", "galaxy", "pixel")
        ),
        DeviceType.MOBILE_DEVICE,
    ),
)


def classify_device(
    device: NetworkDevice,
    rules: Tuple[ClassificationRule, ...] = CLASSIFICATION_RULES,
) -> DeviceType:
    """Retourne le type de la premiere regle satisfaite.

    Args:
        device: Peripherique a classer.
        rules: Regles ordonnees.

    Returns:
        Le type deduit, DeviceType.UNKNOWN si aucune regle.
    """
    for rule in rules:
        if rule.matches(device):
            return rule.device_type
    return DeviceType.UNKNOWN


def extract_manufacturer(device: NetworkDevice) -> Optional[str]:
    """Extrait le fabricant.

    Priorite : champ fabricant UPnP, premier mot du nom convivial
    UPnP s'il s'agit d'un fabricant connu, puis fabricant connu
    contenu dans le nom d'hote resolu.
    """
    upnp = device.upnp_info
    if upnp is not None and upnp.manufacturer:
        return upnp.manufacturer
    if upnp is not None and upnp.friendly_name:
        words = upnp.friendly_name.split()
        if words:
            first = words[0].lower()
            for known in KNOWN_MANUFACTURERS:
                if first == known.lower():
                    return known
    hostname = _resolved_hostname(device)
    for known in KNOWN_MANUFACTURERS:
        lowered = known.lower()
        if hostname and lowered in hostname:
            return lowered[0].upper() + lowered[1:]
    return None


def extract_model(device: NetworkDevice) -> Optional[str]:
    """Le modele ne provient que du descripteur UPnP."""
    upnp = device.upnp_info
    if upnp is not None and upnp.model_name:
        return upnp.model_name
    return None


def extract_friendly_name(device: NetworkDevice) -> Optional[str]:
    """Nom convivial UPnP sans 'uuid', sinon nom d'hote resolu."""
    upnp = device.upnp_info
    if (
        upnp is not None
        and upnp.friendly_name
        and "uuid" not in upnp.friendly_name
    ):
        return upnp.friendly_name
    if device.hostname.is_resolved:
        name = device.hostname.name or ""
        if name and not name.startswith("_"):
            return name
    return None


def build_identity(device: NetworkDevice) -> DeviceIdentity:
    """Calcule l'identite, fonction pure des champs du peripherique."""
    return DeviceIdentity(
        device_type=classify_device(device),
        manufacturer=extract_manufacturer(device),
        model=extract_model(device),
        friendly_name=extract_friendly_name(device),
    )
