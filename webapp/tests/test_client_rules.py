"""
Tests for the rule set the browser evaluates while the user types.

Tests cover:
- export_rules carries the same patterns, limits and messages as the validators
- A step-by-step evaluator using only the exported data agrees with validate()
- The form page and GET /api/rules serve the rules of the active config
"""

import json
import re

import pytest

from inputcheck.app import create_app
from inputcheck.common import validators
from inputcheck.common.utils import ID_SEPARATORS_RE, MOBILE_SEPARATORS_RE
from inputcheck.common.validators import MESSAGES, export_rules, validate
from inputcheck.domain.validation_config import ValidatorConfig

RULES_SCRIPT_RE = re.compile(
    r'<script id="validationRules" type="application/json">(.*?)</script>', re.S
)

EMAILS = [
    "", "   ", "user@example.com", "  user@example.com  ", "bad-email",
    "user@@example.com", "user@-example.com", "user@exa_mple.com",
    "us er@example.com", "user@example.c", "a" * 250 + "@example.com",
]
EIDS = [
    "", "784200012345676", "784-2000-1234567-6", "784 2000 1234567 6",
    "784-20001234567-6", "78-42000-1234567-6", "123200012345676",
    "784200012345671", "7842000", "784a00012345676", " 784-1995-9876543-9 ",
]
MOBILES = [
    "", "+971 50 123 4567", "00971501234567", "971501234567", "0501234567",
    "(050) 123-4567", "5012345678", "+971423456789", "0591234567", "abc",
]
CONFIGS = [
    ValidatorConfig(),
    ValidatorConfig(
        checksum_enabled=True,
        required_prefix=None,
        enforce_id_grouping=False,
        allowed_mobile_prefixes=("59",),
    ),
]


def _message(rules, key, **params):
    # Same placeholder substitution the browser script performs.
    return re.sub(
        r'\{(\w+)\}',
        lambda m: str(params[m.group(1)]) if m.group(1) in params else m.group(0),
        rules['messages'][key],
    )


def _evaluate(rules, field, value):
    """Apply the exported rules the way static/js/live_validation.js does."""
    raw = value.strip()
    errors = []

    if field == 'email':
        email_rules = rules['email']
        if not raw:
            return [_message(rules, 'email_required')]
        if not re.search(email_rules['pattern'], raw):
            errors.append(_message(rules, 'email_format'))
        if len(raw) > email_rules['max_length']:
            errors.append(_message(rules, 'email_too_long', max_length=email_rules['max_length']))
        parts = raw.split('@')
        if len(parts) != 2:
            errors.append(_message(rules, 'email_single_at'))
        else:
            if len(parts[1]) > email_rules['domain_max_length']:
                errors.append(_message(rules, 'domain_too_long'))
            if not re.search(email_rules['domain_pattern'], parts[1]):
                errors.append(_message(rules, 'domain_format'))
        return errors

    if field == 'eid':
        eid_rules = rules['eid']
        if not raw:
            return [_message(rules, 'eid_required')]
        digits = re.sub(eid_rules['separators'], '', raw)
        if not re.search(eid_rules['pattern'], digits):
            return [_message(rules, 'eid_length', length=eid_rules['length'])]
        prefix = eid_rules['required_prefix']
        if prefix and not digits.startswith(prefix):
            errors.append(_message(rules, 'eid_prefix', prefix=prefix))
        if eid_rules['enforce_grouping'] and raw != digits and not re.search(eid_rules['grouped_pattern'], raw):
            errors.append(_message(rules, 'eid_grouping'))
        if eid_rules['checksum_enabled']:
            total = sum(int(digits[i]) * w for i, w in enumerate(eid_rules['checksum_weights']))
            check = {11: 0, 10: 1}.get(11 - total % 11, 11 - total % 11)
            if check != int(digits[14]):
                errors.append(_message(rules, 'eid_checksum'))
        return errors

    mobile_rules = rules['mobile']
    if not raw:
        return [_message(rules, 'mobile_required')]
    local = re.sub(mobile_rules['separators'], '', raw)
    cc = mobile_rules['country_code']
    for lead in ('+' + cc, cc, '00' + cc):
        if cc and local.startswith(lead):
            local = local[len(lead):]
            break
    else:
        if local.startswith('0'):
            local = local[1:]
    if not re.search(mobile_rules['pattern'], local):
        return [_message(rules, 'mobile_length')]
    allowed = mobile_rules['allowed_prefixes']
    if local[:2] not in allowed:
        return [_message(rules, 'mobile_prefix', prefixes=', '.join(allowed))]
    return []


class TestExportedRules:
    """export_rules mirrors the module constants and the config toggles."""

    def test_patterns_match_validators(self):
        rules = export_rules()
        assert rules['email']['pattern'] == validators.EMAIL_RE.pattern
        assert rules['email']['domain_pattern'] == validators.DOMAIN_RE.pattern
        assert rules['eid']['pattern'] == validators.NATIONAL_ID_RE.pattern
        assert rules['eid']['grouped_pattern'] == validators.NATIONAL_ID_GROUPED_RE.pattern
        assert rules['eid']['separators'] == ID_SEPARATORS_RE.pattern
        assert rules['mobile']['pattern'] == validators.MOBILE_RE.pattern
        assert rules['mobile']['separators'] == MOBILE_SEPARATORS_RE.pattern

    def test_limits_and_messages(self):
        rules = export_rules()
        assert rules['messages'] == MESSAGES
        assert rules['email']['max_length'] == 254
        assert rules['email']['domain_max_length'] == 253
        assert rules['eid']['checksum_weights'] == list(range(1, 15))
        assert rules['eid']['groups'] == [3, 4, 7, 1]

    def test_config_toggles(self):
        rules = export_rules(ValidatorConfig(
            checksum_enabled=True,
            required_prefix=None,
            allowed_mobile_prefixes=("59", "50"),
        ))
        assert rules['eid']['checksum_enabled'] is True
        assert rules['eid']['required_prefix'] == ''
        assert rules['mobile']['allowed_prefixes'] == ["59", "50"]
        assert rules['mobile']['country_code'] == "971"

    def test_json_serializable(self):
        assert json.loads(json.dumps(export_rules())) == export_rules()


class TestEvaluatorParity:
    """The exported data alone reproduces every server-side error list."""

    @pytest.mark.parametrize("config", CONFIGS)
    @pytest.mark.parametrize("field, values", [
        ("email", EMAILS),
        ("eid", EIDS),
        ("mobile", MOBILES),
    ])
    def test_same_errors_as_validators(self, config, field, values):
        rules = export_rules(config)
        for value in values:
            assert _evaluate(rules, field, value) == validate(field, value, config), value


class TestRulesServed:
    """The page embeds the rules; GET /api/rules returns the same data."""

    def _embedded(self, client):
        html = client.get("/").get_data(as_text=True)
        match = RULES_SCRIPT_RE.search(html)
        assert match is not None
        return json.loads(match.group(1))

    def test_page_embeds_rules(self, app, client):
        expected = export_rules(ValidatorConfig.from_mapping(app.config))
        assert self._embedded(client) == expected
        assert client.get("/api/rules").get_json() == expected

    def test_rules_follow_app_config(self):
        app = create_app({
            "TESTING": True,
            "EID_CHECKSUM_ENABLED": True,
            "MOBILE_ALLOWED_PREFIXES": "50, 59",
        })
        rules = self._embedded(app.test_client())
        assert rules['eid']['checksum_enabled'] is True
        assert rules['mobile']['allowed_prefixes'] == ["50", "59"]

    def test_script_reads_embedded_rules(self, client):
        response = client.get("/static/js/live_validation.js")
        script = response.get_data(as_text=True)
        response.close()
        assert "validationRules" in script
        assert ".catch(submitAnyway)" in script
        assert "dataset.fieldUrl" not in script
