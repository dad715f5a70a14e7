"""REST Countries endpoint used as the flag source.

Only the name and flag fields are requested; the full record is large.
"""

COUNTRIES_URL = "https://restcountries.com/v3.1/all"

COUNTRY_FIELDS = "name,flags"

DEFAULT_HEADERS = {
    "Accept": "application/json",
}
