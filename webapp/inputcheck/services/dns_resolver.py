"""
Email domain lookup.

Kept out of the validators so the network call can be skipped, faked in
tests, or replaced. A resolver answers ``domain_exists(domain)`` with
True / False, or None when the lookup itself failed.
"""

import logging
from typing import Optional

import dns.exception
import dns.resolver

logger = logging.getLogger(__name__)


class DnsDomainResolver:
    """
    Ask DNS whether a domain can receive mail.

    MX records are tried first and A records second, so a mail-only domain
    is accepted. ``lifetime`` bounds each query, including retries.
    """

    record_types = ('MX', 'A')

    def __init__(self, lifetime: float = 3.0):
        self.lifetime = lifetime

    def domain_exists(self, domain: str) -> Optional[bool]:
        for rdtype in self.record_types:
            try:
                dns.resolver.resolve(domain, rdtype, lifetime=self.lifetime)
                return True
            except dns.resolver.NXDOMAIN:
                return False
            except dns.resolver.NoAnswer:
                continue
            except dns.exception.DNSException as e:
                # Timeout, NoNameservers, missing resolver configuration.
                logger.warning("[DomainResolver] %s lookup failed for %s: %r", rdtype, domain, e)
                return None
        return False


class StaticDomainResolver:
    """Answer from a fixed set of known domains. Useful for tests and offline runs."""

    def __init__(self, known_domains=(), unreachable=False):
        self.known_domains = {d.lower() for d in known_domains}
        self.unreachable = unreachable

    def domain_exists(self, domain: str) -> Optional[bool]:
        if self.unreachable:
            logger.warning("[DomainResolver] Resolver unreachable, skipping %s", domain)
            return None
        return domain.lower() in self.known_domains
