from __future__ import annotations

import re
from typing import Dict, Optional, Set, Tuple, Union

# ============ CONFIGURATIE ============

Entry = Union[str, Tuple[str, str]]

CATALOGS: Dict[str, Dict[str, Entry]] = {
    "en": {
        "header.cartons": "Cartons",
        "header.discount": "Discount",
        "qty.cartons": ("{n} carton", "{n} cartons"),
        "qty.units": ("{n} unit", "{n} units"),
        "qty.cartons_open": "From {start}+",
        "qty.units_open": "from {start}+ units",
        "qty.cartons_range": "From {start} to {end}",
        "qty.units_range": "from {start} to {end} units",
    },
    "it": {
        "header.cartons": "Cartoni",
        "header.discount": "Sconto",
        "qty.cartons": ("{n} cartone", "{n} cartoni"),
        "qty.units": ("{n} pezzo", "{n} pezzi"),
        "qty.cartons_open": "Da {start}+",
        "qty.units_open": "da {start}+ pezzi",
        "qty.cartons_range": "Da {start} a {end}",
        "qty.units_range": "da {start} a {end} pezzi",
    },
}

SUPPORTED: Set[str] = set(CATALOGS)
FALLBACK_LANG = "en"

# Gewichten voor Accept-Language parsing
Q_WEIGHT_PATTERN = re.compile(r"q=([0-9.]+)")


# ============ CORE FUNCTIES ============


def _entry(key: str, lang: Optional[str]) -> Entry:
    code = _normalize_lang(lang)
    catalog = CATALOGS.get(code or "", CATALOGS[FALLBACK_LANG])
    if key in catalog:
        return catalog[key]
    return CATALOGS[FALLBACK_LANG].get(key, key)


def translate(key: str, lang: Optional[str] = None, **kwargs) -> str:
    """Gebruik: translate("header.cartons", "it")"""
    entry = _entry(key, lang)
    if isinstance(entry, tuple):
        entry = entry[0]
    return entry.format(**kwargs) if kwargs else entry


def ntranslate(key: str, count: int, lang: Optional[str] = None, **kwargs) -> str:
    """
    Singular/plural lookup. Both catalogs use the same rule: exactly 1 is singular.
    """
    entry = _entry(key, lang)
    if isinstance(entry, tuple):
        entry = entry[0] if count == 1 else entry[1]
    return entry.format(**kwargs)


def pick_language(
    *,
    accept_language: Optional[str] = None,
    user_pref: Optional[str] = None,
    fallback: str = FALLBACK_LANG,
) -> str:
    """
    Bepaal taal op basis van:
    1. Expliciete gebruikerskeuze (?lang=)
    2. Browser Accept-Language (met q-waarden)
    3. Fallback (site default)
    """
    if user_pref:
        code = _normalize_lang(user_pref)
        if code in SUPPORTED:
            return code

    browser_lang = _parse_accept_language(accept_language)
    if browser_lang:
        return browser_lang

    code = _normalize_lang(fallback)
    return code if code in SUPPORTED else FALLBACK_LANG


# ============ HELPERS ============


def _normalize_lang(code: Optional[str]) -> Optional[str]:
    """Normaliseer taalcode naar base (it-IT → it)"""
    if not code:
        return None
    return code.lower().split("-")[0].split("_")[0]


def _parse_accept_language(header: Optional[str]) -> Optional[str]:
    """
    Parse Accept-Language header met q-waarden.
    Bijv: "it-IT,it;q=0.9,en-US;q=0.8,en;q=0.7"
    """
    if not header:
        return None

    options = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue

        if ";" in part:
            locale, *params = part.split(";")
            locale = locale.strip()
            q = 1.0
            for param in params:
                match = Q_WEIGHT_PATTERN.search(param)
                if match:
                    try:
                        q = float(match.group(1))
                    except ValueError:
                        pass
        else:
            locale = part
            q = 1.0

        code = _normalize_lang(locale)
        if code and code in SUPPORTED:
            options.append((q, code))

    # Sorteer op gewicht (hoogste eerst)
    options.sort(reverse=True)

    return options[0][1] if options else None
