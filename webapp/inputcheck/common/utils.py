import os
import re

ID_SEPARATORS_RE = re.compile(r'[\s\-]')
MOBILE_SEPARATORS_RE = re.compile(r'[\s\-()]')

# Emirates ID display grouping: XXX-YYYY-XXXXXXX-X
NATIONAL_ID_GROUPS = (3, 4, 7, 1)


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment ('1', 'true', 'yes', 'on')."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def parse_prefix_list(value: str | None) -> tuple[str, ...]:
    """Parse '50, 51,52' into ('50', '51', '52'), keeping order and dropping blanks."""
    if not value:
        return ()
    seen = []
    for part in value.split(','):
        part = part.strip()
        if part and part not in seen:
            seen.append(part)
    return tuple(seen)


def to_text(value) -> str:
    """Coerce raw form input to a stripped string; None becomes ''."""
    if value is None:
        return ''
    return str(value).strip()


def strip_id_separators(value: str) -> str:
    return ID_SEPARATORS_RE.sub('', value)


def strip_mobile_separators(value: str) -> str:
    return MOBILE_SEPARATORS_RE.sub('', value)


def normalize_mobile(mobile: str, country_code: str = '971') -> str:
    """
    Remove the international or trunk prefix from a cleaned mobile number.

    At most one prefix is removed, checked in this order:
    ``+<cc>``, ``<cc>``, ``00<cc>``, a single leading ``0``.

    Examples:
        >>> normalize_mobile('+971501234567')
        '501234567'
        >>> normalize_mobile('00971501234567')
        '501234567'
        >>> normalize_mobile('0501234567')
        '501234567'
        >>> normalize_mobile('5012345678')
        '5012345678'
    """
    if country_code:
        if mobile.startswith('+' + country_code):
            return mobile[len(country_code) + 1:]
        if mobile.startswith(country_code):
            return mobile[len(country_code):]
        if mobile.startswith('00' + country_code):
            return mobile[len(country_code) + 2:]
    if mobile.startswith('0'):
        return mobile[1:]
    return mobile


def format_national_id(value: str) -> str:
    """
    Regroup Emirates ID digits as ``XXX-YYYY-XXXXXXX-X``.

    Partial input is grouped as far as it goes, extra characters beyond
    fifteen are dropped.

    Examples:
        >>> format_national_id('784200012345671')
        '784-2000-1234567-1'
        >>> format_national_id('7842')
        '784-2'
    """
    raw = strip_id_separators(to_text(value))[:sum(NATIONAL_ID_GROUPS)]
    groups = []
    start = 0
    for size in NATIONAL_ID_GROUPS:
        chunk = raw[start:start + size]
        if not chunk:
            break
        groups.append(chunk)
        start += size
    return '-'.join(groups)
