import os

from inputcheck.common.utils import env_flag, parse_prefix_list


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-prod'

    DEBUG = True
    TESTING = False

    # --- Emirates ID ---
    # Shipped disabled: any 15-digit number with the right prefix is accepted.
    EID_CHECKSUM_ENABLED = env_flag('EID_CHECKSUM_ENABLED', False)
    # Empty string disables the prefix rule.
    EID_REQUIRED_PREFIX = os.environ.get('EID_REQUIRED_PREFIX', '784')
    EID_ENFORCE_GROUPING = env_flag('EID_ENFORCE_GROUPING', True)

    # --- UAE mobile ---
    MOBILE_COUNTRY_CODE = os.environ.get('MOBILE_COUNTRY_CODE', '971')
    MOBILE_ALLOWED_PREFIXES = parse_prefix_list(
        os.environ.get('MOBILE_ALLOWED_PREFIXES', '50,51,52,54,55,56,58')
    )

    # --- Email ---
    # Network lookup of the email domain (MX/A). Off by default.
    EMAIL_DNS_LOOKUP = env_flag('EMAIL_DNS_LOOKUP', False)
    # Object with domain_exists(domain); None means the system resolver.
    DOMAIN_RESOLVER = None


class TestConfig(Config):
    TESTING = True
    DEBUG = False
    EID_CHECKSUM_ENABLED = False
    EID_REQUIRED_PREFIX = '784'
    EID_ENFORCE_GROUPING = True
    EMAIL_DNS_LOOKUP = False
