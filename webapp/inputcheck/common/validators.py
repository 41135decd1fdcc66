"""Validation rules for email, Emirates ID and UAE mobile numbers.

Each validator takes the raw field value and returns a list of error
messages in the order the rules were checked. An empty list means the
value is valid. The server uses these functions directly; the browser
runs the same patterns and messages from ``export_rules`` so it can give
feedback while typing without a request.
"""
import re
from typing import List, Optional

from inputcheck.common.utils import (
    ID_SEPARATORS_RE,
    MOBILE_SEPARATORS_RE,
    NATIONAL_ID_GROUPS,
    normalize_mobile,
    strip_id_separators,
    strip_mobile_separators,
    to_text,
)
from inputcheck.domain.submission import FieldKind
from inputcheck.domain.validation_config import ValidatorConfig

EMAIL_MAX_LENGTH = 254
DOMAIN_MAX_LENGTH = 253

# Patterns are kept to the subset that JavaScript's RegExp reads the same way.
EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$')
DOMAIN_RE = re.compile(r'^[A-Za-z0-9](?:[A-Za-z0-9.\-]*[A-Za-z0-9])?$')

NATIONAL_ID_LENGTH = 15
NATIONAL_ID_RE = re.compile(r'^[0-9]{15}$')
NATIONAL_ID_GROUPED_RE = re.compile(r'^[0-9]{3}[-\s]?[0-9]{4}[-\s]?[0-9]{7}[-\s]?[0-9]$')
# Weights 1..14 applied to the first fourteen digits.
CHECKSUM_WEIGHTS = tuple(range(1, NATIONAL_ID_LENGTH))

MOBILE_RE = re.compile(r'^[0-9]{9}$')

# Placeholders in braces are filled with str.format here and by the browser script.
MESSAGES = {
    'email_required': "Email is required",
    'email_format': "Invalid email format",
    'email_too_long': "Email is too long (maximum {max_length} characters)",
    'email_single_at': "Email must contain exactly one @ symbol",
    'domain_too_long': "Domain part is too long",
    'domain_format': "Invalid domain format",
    'domain_not_found': "Email domain does not exist",
    'eid_required': "Emirates ID is required",
    'eid_length': "Emirates ID must be exactly {length} digits",
    'eid_prefix': "Emirates ID must start with {prefix}",
    'eid_grouping': "Emirates ID format should be XXX-YYYY-XXXXXXX-X",
    'eid_checksum': "Invalid Emirates ID checksum",
    'mobile_required': "Mobile number is required",
    'mobile_length': "Mobile number must be 9 digits after country code",
    'mobile_prefix': "Invalid UAE mobile number prefix. Must start with: {prefixes}",
}


def validate_email(email: str, resolver=None) -> List[str]:
    """
    Check an email address.

    All rule violations are reported; only an empty value stops early.
    ``resolver`` is optional: when given, its ``domain_exists(domain)`` is
    asked once the address is otherwise valid. ``False`` means the domain does
    not exist, ``None`` means the lookup could not be completed and is ignored.

    Examples:
        >>> validate_email('user@example.com')
        []
        >>> validate_email('')
        ['Email is required']
    """
    errors = []
    email = to_text(email)

    if not email:
        errors.append(MESSAGES['email_required'])
        return errors

    if not EMAIL_RE.match(email):
        errors.append(MESSAGES['email_format'])

    if len(email) > EMAIL_MAX_LENGTH:
        errors.append(MESSAGES['email_too_long'].format(max_length=EMAIL_MAX_LENGTH))

    if email.count('@') != 1:
        errors.append(MESSAGES['email_single_at'])

    parts = email.split('@')
    if len(parts) == 2:
        domain = parts[1]
        if len(domain) > DOMAIN_MAX_LENGTH:
            errors.append(MESSAGES['domain_too_long'])
        if not DOMAIN_RE.match(domain):
            errors.append(MESSAGES['domain_format'])

        if resolver is not None and not errors:
            if resolver.domain_exists(domain) is False:
                errors.append(MESSAGES['domain_not_found'])

    return errors


def compute_check_digit(digits: str) -> int:
    """
    Compute the Emirates ID check digit from the first fourteen digits.

    Weighted sum (weights 1..14) mod 11, subtracted from 11;
    11 maps to 0 and 10 maps to 1.
    """
    total = sum(int(digits[i]) * weight for i, weight in enumerate(CHECKSUM_WEIGHTS))
    check = 11 - (total % 11)
    if check == 11:
        return 0
    if check == 10:
        return 1
    return check


def is_valid_eid_checksum(eid: str) -> bool:
    """True when the 15th digit matches the computed check digit."""
    eid = strip_id_separators(to_text(eid))
    if not NATIONAL_ID_RE.match(eid):
        return False
    return compute_check_digit(eid[:14]) == int(eid[14])


def generate_valid_eid(year: int = 2000, sequence: int = 1234567, prefix: str = '784') -> str:
    """
    Build a syntactically valid Emirates ID with a correct check digit.

    Meant for test fixtures and form examples.

    Examples:
        >>> generate_valid_eid(2000, 1234567)
        '784200012345676'
    """
    if not 0 <= int(year) <= 9999:
        raise ValueError(f"year must be between 0 and 9999, got {year}")
    if not 0 <= int(sequence) <= 9999999:
        raise ValueError(f"sequence must be between 0 and 9999999, got {sequence}")
    if not re.fullmatch(r'[0-9]{3}', prefix or ''):
        raise ValueError(f"prefix must be three digits, got {prefix!r}")

    base = f"{prefix}{int(year):04d}{int(sequence):07d}"
    return f"{base}{compute_check_digit(base)}"


def validate_national_id(eid: str, config: Optional[ValidatorConfig] = None) -> List[str]:
    """
    Check an Emirates ID (15 digits, optional XXX-YYYY-XXXXXXX-X grouping).

    Wrong digit count stops further checks; prefix, grouping and checksum
    violations are reported together.
    """
    config = config or ValidatorConfig()
    errors = []
    raw = to_text(eid)

    if not raw:
        errors.append(MESSAGES['eid_required'])
        return errors

    digits = strip_id_separators(raw)
    if not NATIONAL_ID_RE.match(digits):
        errors.append(MESSAGES['eid_length'].format(length=NATIONAL_ID_LENGTH))
        return errors

    if config.required_prefix and not digits.startswith(config.required_prefix):
        errors.append(MESSAGES['eid_prefix'].format(prefix=config.required_prefix))

    if config.enforce_id_grouping and raw != digits:
        if not NATIONAL_ID_GROUPED_RE.match(raw):
            errors.append(MESSAGES['eid_grouping'])

    if config.checksum_enabled and not is_valid_eid_checksum(digits):
        errors.append(MESSAGES['eid_checksum'])

    return errors


def validate_mobile(mobile: str, config: Optional[ValidatorConfig] = None) -> List[str]:
    """
    Check a UAE mobile number.

    Accepts +971 / 971 / 00971 / 0 prefixed input. After the prefix is
    removed exactly nine digits must remain, starting with an allowed
    operator code.

    Examples:
        >>> validate_mobile('+971 50 123 4567')
        []
        >>> validate_mobile('5012345678')
        ['Mobile number must be 9 digits after country code']
    """
    config = config or ValidatorConfig()
    errors = []
    raw = to_text(mobile)

    if not raw:
        errors.append(MESSAGES['mobile_required'])
        return errors

    local = normalize_mobile(strip_mobile_separators(raw), config.country_code)

    # Prefix check is meaningless on the wrong length.
    if not MOBILE_RE.match(local):
        errors.append(MESSAGES['mobile_length'])
        return errors

    if local[:2] not in config.allowed_mobile_prefixes:
        errors.append(
            MESSAGES['mobile_prefix'].format(prefixes=', '.join(config.allowed_mobile_prefixes))
        )

    return errors


def validate(kind, value: str, config: Optional[ValidatorConfig] = None, resolver=None) -> List[str]:
    """
    Validate ``value`` as the given field kind.

    ``kind`` is a FieldKind or its name ('email', 'eid', 'mobile', or the
    'national_id' alias). The DNS check only runs when the config enables it
    and a resolver is supplied.
    """
    config = config or ValidatorConfig()
    if not isinstance(kind, FieldKind):
        kind = FieldKind.parse(kind)

    if kind == FieldKind.EMAIL:
        return validate_email(value, resolver if config.enable_dns_lookup else None)
    if kind == FieldKind.NATIONAL_ID:
        return validate_national_id(value, config)
    return validate_mobile(value, config)


def export_rules(config: Optional[ValidatorConfig] = None) -> dict:
    """
    JSON-ready copy of the rules for the browser-side evaluator.

    Carries the regex sources, limits and message templates used above,
    plus the toggles of ``config``. DNS lookup is server-only and not exported.
    """
    config = config or ValidatorConfig()
    return {
        'messages': dict(MESSAGES),
        'email': {
            'pattern': EMAIL_RE.pattern,
            'domain_pattern': DOMAIN_RE.pattern,
            'max_length': EMAIL_MAX_LENGTH,
            'domain_max_length': DOMAIN_MAX_LENGTH,
        },
        'eid': {
            'separators': ID_SEPARATORS_RE.pattern,
            'pattern': NATIONAL_ID_RE.pattern,
            'grouped_pattern': NATIONAL_ID_GROUPED_RE.pattern,
            'length': NATIONAL_ID_LENGTH,
            'groups': list(NATIONAL_ID_GROUPS),
            'required_prefix': config.required_prefix or '',
            'enforce_grouping': config.enforce_id_grouping,
            'checksum_enabled': config.checksum_enabled,
            'checksum_weights': list(CHECKSUM_WEIGHTS),
        },
        'mobile': {
            'separators': MOBILE_SEPARATORS_RE.pattern,
            'pattern': MOBILE_RE.pattern,
            'country_code': config.country_code or '',
            'allowed_prefixes': list(config.allowed_mobile_prefixes),
        },
    }
