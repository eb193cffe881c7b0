"""Correios service codes and the bracket encoding used to store them.

Enabled services are persisted as bracket-wrapped codes joined by ``:``,
e.g. ``[04510]:[04014]:``. The brackets keep a code from matching inside
a longer one during membership tests.
"""

from types import MappingProxyType

SEPARATOR = ":"

_SERVICES = {
    "04014": "SEDEX à vista",
    "04065": "SEDEX à vista pagamento na entrega",
    "04162": "SEDEX contrato agência",
    "04510": "PAC à vista",
    "04669": "PAC contrato agência",
    "04707": "PAC à vista pagamento na entrega",
    "04782": "SEDEX 12 à vista",
    "04790": "SEDEX 10 à vista",
    "04804": "SEDEX Hoje à vista",
    "40010": "SEDEX sem contrato",
    "40215": "SEDEX 10 sem contrato",
    "40290": "SEDEX Hoje sem contrato",
    "41106": "PAC sem contrato",
}


def _build_tables(services: dict[str, str]) -> tuple[MappingProxyType, MappingProxyType]:
    names = {}
    for code, name in services.items():
        if not code or not name:
            raise ValueError(f"Empty service code or name: {code!r} -> {name!r}")
        if name in names:
            raise ValueError(f"Service name {name!r} used by {names[name]} and {code}")
        names[name] = code
    return MappingProxyType(dict(services)), MappingProxyType(names)


SERVICE_NAMES, SERVICE_CODES = _build_tables(_SERVICES)


def service_name_from_code(code: str) -> str:
    """Return the display name for a carrier service code."""
    try:
        return SERVICE_NAMES[code]
    except KeyError:
        raise ValueError(f"Unknown Correios service code: {code}") from None


def service_code_from_name(name: str) -> str:
    """Return the carrier service code for a display name."""
    try:
        return SERVICE_CODES[name]
    except KeyError:
        raise ValueError(f"Unknown Correios service name: {name}") from None


def encode_services(codes) -> str:
    """Encode service codes as ``[code]:`` tokens, keeping the given order."""
    return "".join(f"[{code}]{SEPARATOR}" for code in codes)


def decode_services(services_offered: str | None) -> list[str]:
    """Decode a stored ``[code]:[code]:`` string into a list of codes."""
    if not services_offered:
        return []
    if services_offered.endswith(SEPARATOR):
        services_offered = services_offered[: -len(SEPARATOR)]
    codes = []
    for token in services_offered.split(SEPARATOR):
        code = token.strip().lstrip("[").rstrip("]")
        if code:
            codes.append(code)
    return codes


def is_service_enabled(services_offered: str | None, code: str) -> bool:
    """Return True when *code* is one of the stored services."""
    if not services_offered or not code:
        return False
    return f"[{code}]" in services_offered
