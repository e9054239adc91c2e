"""Fixed vocabulary tables for directions, units and dosage forms.

All tables are read-only mappings built once at import time. A frequency
value of ``None`` marks the as-needed (PRN) family: recognised, but without
a computable times-per-day figure.
"""

from types import MappingProxyType
from typing import Final

DOSAGE_FORMS: Final = MappingProxyType({
    # Oral solids
    "tab": "tablet",
    "tabs": "tablet",
    "tablet": "tablet",
    "tablets": "tablet",
    "pill": "pill",
    "pills": "pill",
    "cap": "capsule",
    "caps": "capsule",
    "capsule": "capsule",
    "capsules": "capsule",
    # Oral liquids
    "sol": "solution",
    "soln": "solution",
    "solution": "solution",
    "susp": "suspension",
    "suspension": "suspension",
    "for suspension": "suspension",
    "syrup": "syrup",
    "elixir": "elixir",
    "tincture": "tincture",
    # Topical
    "cream": "cream",
    "oint": "ointment",
    "ointment": "ointment",
    "gel": "gel",
    "lotion": "lotion",
    "patch": "patch",
    "patches": "patch",
    # Inhalational
    "aero": "aerosol",
    "aerosol": "aerosol",
    "inhaler": "inhaler",
    "neb": "nebulizer",
    "nebulizer": "nebulizer",
    # Injectable
    "inj": "injection",
    "injection": "injection",
    "vial": "vial",
    "vials": "vial",
    "syringe": "syringe",
    "syringes": "syringe",
    # Ophthalmic / otic
    "gtt": "drops",
    "gtts": "drops",
    "drop": "drops",
    "drops": "drops",
    # Other
    "supp": "suppository",
    "suppository": "suppository",
    "suppositories": "suppository",
    "enema": "enema",
    "loz": "lozenge",
    "lozenge": "lozenge",
    "lozenges": "lozenge",
    "powder": "powder",
    "pwd": "powder",
})

UNITS: Final = MappingProxyType({
    # Count
    "each": "each",
    "ea": "each",
    "tablet": "tablet",
    "tablets": "tablet",
    "tab": "tablet",
    "tabs": "tablet",
    "capsule": "capsule",
    "capsules": "capsule",
    "cap": "capsule",
    "caps": "capsule",
    "pill": "pill",
    "pills": "pill",
    "patch": "patch",
    "patches": "patch",
    "supp": "suppository",
    "suppository": "suppository",
    "suppositories": "suppository",
    "loz": "lozenge",
    "lozenge": "lozenge",
    "lozenges": "lozenge",
    # Volume / weight
    "ml": "ml",
    "mls": "ml",
    "cc": "ml",
    "milliliter": "ml",
    "milliliters": "ml",
    "l": "l",
    "liter": "l",
    "liters": "l",
    "mg": "mg",
    "milligram": "mg",
    "milligrams": "mg",
    "g": "g",
    "gm": "g",
    "gram": "g",
    "grams": "g",
    "mcg": "mcg",
    "microgram": "mcg",
    "micrograms": "mcg",
    "meq": "meq",
    "milliequivalent": "meq",
    "milliequivalents": "meq",
    # Special
    "unit": "units",
    "units": "units",
    "iu": "iu",
    # Application
    "drop": "drop",
    "drops": "drop",
    "gtt": "drop",
    "gtts": "drop",
    "puff": "puff",
    "puffs": "puff",
    "spray": "spray",
    "sprays": "spray",
    "inhalation": "inhalation",
    "inhalations": "inhalation",
})

COUNT_UNITS: Final = frozenset({
    "each", "tablet", "capsule", "pill", "patch", "suppository", "lozenge",
})

VOLUME_UNITS: Final = frozenset({"ml", "l", "mg", "g", "mcg", "meq"})

ROUTES: Final = MappingProxyType({
    "po": "oral",
    "oral": "oral",
    "orally": "oral",
    "by mouth": "oral",
    "im": "intramuscular",
    "intramuscular": "intramuscular",
    "iv": "intravenous",
    "intravenous": "intravenous",
    "sc": "subcutaneous",
    "subq": "subcutaneous",
    "subcutaneous": "subcutaneous",
    "sl": "sublingual",
    "sublingual": "sublingual",
    "top": "topical",
    "topical": "topical",
    "inh": "inhalation",
    "ophth": "ophthalmic",
    "ophthalmic": "ophthalmic",
    "otic": "otic",
    "pr": "rectal",
    "rect": "rectal",
    "rectal": "rectal",
    "vag": "vaginal",
    "vaginal": "vaginal",
})

# Routes the abbreviated strategy steps over when looking for the unit.
SKIPPABLE_ROUTE_TOKENS: Final = frozenset({"po", "oral", "orally", "im", "iv", "sl"})

FREQUENCY_PHRASES: Final = MappingProxyType({
    # Daily
    "once daily": 1.0,
    "once a day": 1.0,
    "daily": 1.0,
    "every day": 1.0,
    "qd": 1.0,
    "every morning": 1.0,
    "qam": 1.0,
    "every evening": 1.0,
    "qpm": 1.0,
    "at bedtime": 1.0,
    "nightly": 1.0,
    "hs": 1.0,
    "qhs": 1.0,
    "twice daily": 2.0,
    "twice a day": 2.0,
    "two times daily": 2.0,
    "two times a day": 2.0,
    "bid": 2.0,
    "three times daily": 3.0,
    "three times a day": 3.0,
    "tid": 3.0,
    "four times daily": 4.0,
    "four times a day": 4.0,
    "qid": 4.0,
    "five times daily": 5.0,
    "five times a day": 5.0,
    "six times daily": 6.0,
    "six times a day": 6.0,
    # Hourly
    "every hour": 24.0,
    "hourly": 24.0,
    "qh": 24.0,
    "every 2 hours": 12.0,
    "q2h": 12.0,
    "every 3 hours": 8.0,
    "q3h": 8.0,
    "every 4 hours": 6.0,
    "q4h": 6.0,
    "every 6 hours": 4.0,
    "q6h": 4.0,
    "every 8 hours": 3.0,
    "q8h": 3.0,
    "every 12 hours": 2.0,
    "q12h": 2.0,
    "every 24 hours": 1.0,
    "q24h": 1.0,
    # Less than daily
    "every other day": 0.5,
    "qod": 0.5,
    "once weekly": 1 / 7,
    "once a week": 1 / 7,
    "weekly": 1 / 7,
    "twice weekly": 2 / 7,
    "twice a week": 2 / 7,
    "three times weekly": 3 / 7,
    "three times a week": 3 / 7,
    # As needed
    "as needed": None,
    "prn": None,
    "as required": None,
})

# Longest phrase first, then alphabetical, so containment lookups never
# depend on table insertion order and "twice daily" beats "daily".
FREQUENCY_PHRASES_BY_LENGTH: Final = tuple(
    sorted(FREQUENCY_PHRASES, key=lambda phrase: (-len(phrase), phrase))
)

# Canonical phrase used when rendering a frequency back into directions.
CANONICAL_FREQUENCY_PHRASES: Final = MappingProxyType({
    1.0: "once daily",
    2.0: "twice daily",
    3.0: "three times daily",
    4.0: "four times daily",
})

NUMBER_WORDS: Final = MappingProxyType({
    "half": 0.5,
    "one": 1.0,
    "two": 2.0,
    "three": 3.0,
    "four": 4.0,
    "five": 5.0,
    "six": 6.0,
    "seven": 7.0,
    "eight": 8.0,
    "nine": 9.0,
    "ten": 10.0,
})
