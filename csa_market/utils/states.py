"""US state names and postal abbreviations."""

STATE_ABBREVIATIONS: dict[str, str] = {
    "alabama": "AL",
    "alaska": "AK",
    "arizona": "AZ",
    "arkansas": "AR",
    "california": "CA",
    "colorado": "CO",
    "connecticut": "CT",
    "delaware": "DE",
    "district of columbia": "DC",
    "florida": "FL",
    "georgia": "GA",
    "hawaii": "HI",
    "idaho": "ID",
    "illinois": "IL",
    "indiana": "IN",
    "iowa": "IA",
    "kansas": "KS",
    "kentucky": "KY",
    "louisiana": "LA",
    "maine": "ME",
    "maryland": "MD",
    "massachusetts": "MA",
    "michigan": "MI",
    "minnesota": "MN",
    "mississippi": "MS",
    "missouri": "MO",
    "montana": "MT",
    "nebraska": "NE",
    "nevada": "NV",
    "new hampshire": "NH",
    "new jersey": "NJ",
    "new mexico": "NM",
    "new york": "NY",
    "north carolina": "NC",
    "north dakota": "ND",
    "ohio": "OH",
    "oklahoma": "OK",
    "oregon": "OR",
    "pennsylvania": "PA",
    "rhode island": "RI",
    "south carolina": "SC",
    "south dakota": "SD",
    "tennessee": "TN",
    "texas": "TX",
    "utah": "UT",
    "vermont": "VT",
    "virginia": "VA",
    "washington": "WA",
    "west virginia": "WV",
    "wisconsin": "WI",
    "wyoming": "WY",
}

STATE_NAMES: dict[str, str] = {abbr: name.title() for name, abbr in STATE_ABBREVIATIONS.items()}
STATE_NAMES["DC"] = "District of Columbia"


def normalize_state(text: str | None) -> str | None:
    """Return the postal abbreviation for a state name or abbreviation.

    >>> normalize_state("ca")
    'CA'
    >>> normalize_state(" New  York ")
    'NY'
    >>> normalize_state("Portland") is None
    True
    """
    if not text:
        return None
    cleaned = " ".join(text.split())
    if len(cleaned) == 2 and cleaned.upper() in STATE_NAMES:
        return cleaned.upper()
    return STATE_ABBREVIATIONS.get(cleaned.lower())


def state_name(abbreviation: str) -> str | None:
    """Return the full name for a postal abbreviation."""
    return STATE_NAMES.get(abbreviation.strip().upper())
