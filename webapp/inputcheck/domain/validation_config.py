from dataclasses import dataclass
from typing import Mapping, Optional

from inputcheck.common.utils import parse_prefix_list

DEFAULT_MOBILE_PREFIXES = ('50', '51', '52', '54', '55', '56', '58')


@dataclass(frozen=True)
class ValidatorConfig:
    """Toggles consumed by the field validators."""
    checksum_enabled: bool = False
    required_prefix: Optional[str] = '784'
    allowed_mobile_prefixes: tuple[str, ...] = DEFAULT_MOBILE_PREFIXES
    enable_dns_lookup: bool = False
    country_code: str = '971'
    enforce_id_grouping: bool = True

    @classmethod
    def from_mapping(cls, config: Mapping) -> 'ValidatorConfig':
        """Build from a Flask ``app.config`` (or any mapping with the same keys)."""
        prefixes = config.get('MOBILE_ALLOWED_PREFIXES', DEFAULT_MOBILE_PREFIXES)
        if isinstance(prefixes, str):
            prefixes = parse_prefix_list(prefixes)
        return cls(
            checksum_enabled=bool(config.get('EID_CHECKSUM_ENABLED', False)),
            required_prefix=config.get('EID_REQUIRED_PREFIX', '784') or None,
            allowed_mobile_prefixes=tuple(prefixes),
            enable_dns_lookup=bool(config.get('EMAIL_DNS_LOOKUP', False)),
            country_code=config.get('MOBILE_COUNTRY_CODE', '971') or '',
            enforce_id_grouping=bool(config.get('EID_ENFORCE_GROUPING', True)),
        )
