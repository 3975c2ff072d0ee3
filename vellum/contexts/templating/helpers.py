"""
Template Helpers

Formatting functions exposed to the resume templates under their template names
(wrapURL, wrapMail, formatAddress, formatDate, getValueIfDiffFromPrevious, eq).

Helpers return either a plain str, which the template engine escapes, or a
markupsafe.Markup, which is emitted verbatim. Helpers never raise: missing or
malformed values degrade to empty output.
"""

import re
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from dateutil import parser as date_parser
from i18naddress import format_address as i18n_format_address
from markupsafe import Markup, escape

# Leading "<protocol>://" prefix, stripped from link text only
URL_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")

ADDRESS_LINE_SEPARATOR = Markup("<br/>")
DATE_DISPLAY_FORMAT = "%b %Y"

# Missing day/month in partial dates ("2019-03", "2019") resolve to the first
DATE_PARSE_DEFAULT = datetime(2000, 1, 1)
# Second parse default; a year that differs between the two parses was not in the input
DATE_PARSE_YEAR_CHECK = datetime(2001, 1, 1)


def _text(value: Any) -> str:
    """Coerce a template value to text, mapping missing values to ''."""
    if value is None or value is False:
        return ""
    text = str(value)
    return text.strip()


def wrap_url(url: Any) -> Markup:
    """
    Wrap a URL in an anchor whose visible text omits the scheme.

    Example:
        >>> wrap_url("https://example.com")
        Markup('<a href="https://example.com">example.com</a>')
    """
    url = _text(url)
    if not url:
        return Markup("")
    display = URL_SCHEME_PATTERN.sub("", url, count=1)
    return Markup('<a href="{0}">{1}</a>').format(url, display)


def wrap_mail(address: Any) -> Markup:
    """Wrap an email address in a mailto anchor."""
    address = _text(address)
    if not address:
        return Markup("")
    return Markup('<a href="mailto:{0}">{0}</a>').format(address)


def _fallback_address_lines(
    address: str, city: str, region: str, postal_code: str, country_code: str
) -> List[str]:
    """Plain component ordering used when the address library rejects the input."""
    region_line = " ".join(part for part in (region, postal_code) if part)
    return [line for line in (address, city, region_line, country_code) if line]


def format_address(
    address: Any = None,
    city: Any = None,
    region: Any = None,
    postal_code: Any = None,
    country_code: Any = None,
) -> Markup:
    """
    Format postal address components as locale-aware lines joined by <br/>.

    Args:
        address: Street address (may contain newlines)
        city: City or locality
        region: State, province or other subdivision
        postal_code: Postal or ZIP code
        country_code: ISO 3166-1 alpha-2 country code

    Returns:
        Markup with each line HTML-escaped, joined with <br/>.
        Empty Markup if no component is present.
    """
    components = [_text(v) for v in (address, city, region, postal_code, country_code)]
    address, city, region, postal_code, country_code = components
    if not any(components):
        return Markup("")
    if not country_code:
        lines = _fallback_address_lines(address, city, region, postal_code, country_code)
        return ADDRESS_LINE_SEPARATOR.join(escape(line) for line in lines)

    try:
        formatted = i18n_format_address(
            {
                "street_address": address,
                "city": city,
                "country_area": region,
                "postal_code": postal_code,
                "country_code": country_code.upper(),
            }
        )
        lines = [line.strip() for line in formatted.split("\n")]
    except (ValueError, KeyError):
        lines = _fallback_address_lines(address, city, region, postal_code, country_code)

    return ADDRESS_LINE_SEPARATOR.join(escape(line) for line in lines if line)


def format_date(value: Any) -> str:
    """
    Format a date-like value as "<abbreviated month> <year>" (e.g. "Mar 2019").

    Accepts full dates ("2019-03-14"), year-month ("2019-03"), bare years and any
    other form dateutil can parse. Returns '' for missing or unparseable input,
    including input without a year ("March").
    """
    if isinstance(value, (datetime, date)):
        return value.strftime(DATE_DISPLAY_FORMAT)

    text = _text(value)
    if not text:
        return ""

    try:
        parsed = date_parser.parse(text, default=DATE_PARSE_DEFAULT)
        check = date_parser.parse(text, default=DATE_PARSE_YEAR_CHECK)
    except (ValueError, OverflowError):
        return ""
    if parsed.year != check.year:
        return ""
    return parsed.strftime(DATE_DISPLAY_FORMAT)


def get_value_if_diff_from_previous(collection: Optional[Sequence], index: int, key: str) -> Any:
    """
    Return collection[index][key] unless the previous entry holds the same value.

    Used to collapse repeated group labels (same employer, same year) across
    consecutive rows. Index 0 always returns its value.
    """
    if not isinstance(collection, Sequence) or isinstance(collection, str):
        return ""
    if not isinstance(index, int) or not 0 <= index < len(collection):
        return ""

    entry = collection[index]
    if not isinstance(entry, Mapping):
        return ""
    current = entry.get(key)
    if current is None:
        return ""

    if index > 0:
        previous = collection[index - 1]
        if isinstance(previous, Mapping) and _strict_equal(previous.get(key), current):
            return ""
    return current


def _strict_equal(a: Any, b: Any) -> bool:
    # bool is an int subclass; True must not equal 1
    if isinstance(a, bool) or isinstance(b, bool):
        return a is b
    return a == b


def eq(a: Any, b: Any) -> bool:
    """Case-insensitive equality for two strings, strict equality otherwise."""
    if isinstance(a, str) and isinstance(b, str):
        return a.lower() == b.lower()
    return _strict_equal(a, b)


def has_entries(value: Any) -> bool:
    """True for a non-empty list of entries; strings, mappings and scalars are not lists."""
    return isinstance(value, (list, tuple)) and len(value) > 0


# Template name -> helper
HELPERS: Dict[str, Callable[..., Any]] = {
    "wrapURL": wrap_url,
    "wrapMail": wrap_mail,
    "formatAddress": format_address,
    "formatDate": format_date,
    "getValueIfDiffFromPrevious": get_value_if_diff_from_previous,
    "eq": eq,
}

# Template test name -> predicate ({% if resume.work is entries %})
TESTS: Dict[str, Callable[[Any], bool]] = {
    "entries": has_entries,
}
