"""Centralized lookup tables for Russian address decomposition.

This module is the single source of truth for the type-prefix abbreviations,
region markers and the known-settlement whitelist used by the decomposition
rules, plus the city centres behind the offline approximation backend. Bump
LOOKUP_TABLES_VERSION (or CITY_TABLE_VERSION for the centres) whenever an
entry changes so results can be traced back to the table set that produced
them.
"""

from __future__ import annotations

import re

LOOKUP_TABLES_VERSION = "1.0.0"

# Lowercase substrings marking a region part (oblast, krai, republic)
REGION_MARKERS: tuple[str, ...] = ("обл", "край", "респ")

# Settlement-type abbreviations, matched case-insensitively at the start of a part
SETTLEMENT_PREFIXES: tuple[str, ...] = (
    "г.",  # город
    "с.",  # село
    "п.",  # посёлок
    "пгт.",  # посёлок городского типа
    "рп.",  # рабочий посёлок
    "д.",  # деревня
)

# Street-type abbreviations, matched case-insensitively at the start of a part
STREET_PREFIXES: tuple[str, ...] = (
    "ул.",  # улица
    "пр-кт.",  # проспект
    "пер.",  # переулок
    "ш.",  # шоссе
    "пр-д.",  # проезд
    "пл.",  # площадь
    "б-р.",  # бульвар
)

# Normalized settlement name -> canonical type prefix.
# Insertion order is the match order when a part contains several names.
KNOWN_SETTLEMENTS: dict[str, str] = {
    "мамонтово": "с.",
    "барнаул": "г.",
    "новосибирск": "г.",
    "красноярск": "г.",
}

# Used when a known settlement maps to nothing more specific
DEFAULT_SETTLEMENT_PREFIX = "г."

# A part containing any of these cannot be a bare settlement name
FALLBACK_EXCLUDED_MARKERS: tuple[str, ...] = ("обл", "край", "ул", "пр-кт", "пер")

# A part containing any of these is never taken as the house number
NON_HOUSE_MARKERS: tuple[str, ...] = ("обл", "край")

COUNTRY_SUFFIX = ", Россия"

# Ordered abbreviation expansions used for normalisation; order matters
# because several abbreviations share a stem (пр. / пр-кт / пр-т).
ABBREVIATION_EXPANSIONS: tuple[tuple[str, str], ...] = (
    ("ул.", "улица"),
    ("пр.", "проспект"),
    ("пр-кт", "проспект"),
    ("пр-т", "проспект"),
    ("д.", "дом"),
    ("корп.", "корпус"),
    ("г.", "город"),
    ("с.", "село"),
    ("обл.", "область"),
    ("респ.", "республика"),
    ("кр.", "край"),
    ("ш.", "шоссе"),
    ("б-р", "бульвар"),
    ("пер.", "переулок"),
    ("пл.", "площадь"),
    ("ст-ца", "станица"),
    ("мкр", "микрорайон"),
    ("кв-л", "квартал"),
    ("р-н", "район"),
)


def prefix_for_known_settlement(text: str) -> str | None:
    """Return the canonical prefix if *text* mentions a known settlement.

    Args:
        text: A single address part, any case.

    Returns:
        The prefix (without trailing space) of the first known settlement
        contained in *text*, or None when none is mentioned.
    """
    lower = text.lower()
    for name, prefix in KNOWN_SETTLEMENTS.items():
        if name in lower:
            return prefix or DEFAULT_SETTLEMENT_PREFIX
    return None


# Bump whenever a CITY_CENTRES entry is added or moved
CITY_TABLE_VERSION = "1.0.0"

# City (or region) name -> approximate centre (lat, lng), used when no
# online match exists. Names are matched as whole words, case-insensitively,
# in insertion order.
CITY_CENTRES: dict[str, tuple[float, float]] = {
    "Москва": (55.7558, 37.6173),
    "Санкт-Петербург": (59.9343, 30.3351),
    "Новосибирск": (55.0084, 82.9357),
    "Екатеринбург": (56.8389, 60.6057),
    "Казань": (55.7961, 49.1064),
    "Нижний Новгород": (56.3269, 44.0065),
    "Челябинск": (55.1644, 61.4368),
    "Самара": (53.2415, 50.2212),
    "Омск": (54.9893, 73.3682),
    "Ростов-на-Дону": (47.2357, 39.7015),
    "Уфа": (54.7351, 55.9587),
    "Красноярск": (56.0090, 92.8726),
    "Пермь": (58.0105, 56.2294),
    "Воронеж": (51.6606, 39.2006),
    "Волгоград": (48.7071, 44.5170),
    "Саратов": (51.5924, 45.9608),
    "Краснодар": (45.0355, 38.9753),
    "Тюмень": (57.1530, 65.5343),
    "Тольятти": (53.5078, 49.4204),
    "Ижевск": (56.8527, 53.2115),
    "Барнаул": (53.3548, 83.7698),
    "Ульяновск": (54.3142, 48.4031),
    "Иркутск": (52.2896, 104.2806),
    "Хабаровск": (48.4802, 135.0719),
    "Ярославль": (57.6261, 39.8845),
    "Владивосток": (43.1155, 131.8855),
    "Махачкала": (42.9831, 47.5047),
    "Томск": (56.4846, 84.9476),
    "Оренбург": (51.7682, 55.0974),
    "Кемерово": (55.3547, 86.0873),
    "Новокузнецк": (53.7576, 87.1360),
    "Рязань": (54.6294, 39.7417),
    "Астрахань": (46.3497, 48.0408),
    "Пенза": (53.2001, 45.0047),
    "Липецк": (52.6088, 39.5992),
    "Киров": (58.6035, 49.6680),
    "Чебоксары": (56.1463, 47.2511),
    "Калининград": (54.7104, 20.4522),
    "Тула": (54.1930, 37.6173),
    "Ставрополь": (45.0433, 41.9691),
    "Курск": (51.7304, 36.1926),
    "Сочи": (43.5855, 39.7231),
    "Тверь": (56.8587, 35.9176),
    "Магнитогорск": (53.4072, 58.9798),
    "Иваново": (57.0004, 40.9739),
    "Брянск": (53.2436, 34.3642),
    "Белгород": (50.5953, 36.5873),
    "Сургут": (61.2541, 73.3962),
    "Владимир": (56.1290, 40.4066),
    "Архангельск": (64.5401, 40.5433),
    "Калуга": (54.5140, 36.2616),
    "Симферополь": (44.9521, 34.1024),
    "Севастополь": (44.6166, 33.5254),
    "Крым": (45.0433, 34.6021),
}


def find_city_centre(text: str) -> tuple[str, tuple[float, float]] | None:
    """Return the first city from CITY_CENTRES named in *text*.

    Names must stand as whole words, so "Томск" never matches "Омск".

    Returns:
        ``(name, (lat, lng))`` or None when no listed city is mentioned.
    """
    for name, centre in CITY_CENTRES.items():
        if _CITY_PATTERNS[name].search(text):
            return name, centre
    return None


_CITY_PATTERNS: dict[str, re.Pattern[str]] = {
    name: re.compile(rf"(?<![\wё-]){re.escape(name)}(?![\wё-])", re.IGNORECASE)
    for name in CITY_CENTRES
}
