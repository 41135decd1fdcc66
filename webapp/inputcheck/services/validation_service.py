from typing import List, Optional

from inputcheck.common.utils import format_national_id, to_text
from inputcheck.common.validators import validate
from inputcheck.domain.submission import FieldKind, FieldReport, FormSubmission, SubmissionReport
from inputcheck.domain.validation_config import ValidatorConfig
from inputcheck.services.activity_logger import ActionCategory, ActionType, log_activity
from inputcheck.services.dns_resolver import DnsDomainResolver

FORM_ORDER = (FieldKind.EMAIL, FieldKind.NATIONAL_ID, FieldKind.MOBILE)


class ValidationService:
    """Runs the field validators for the submission handler and the JSON endpoints."""

    def __init__(self, config: ValidatorConfig | None = None, resolver=None):
        self.config = config or ValidatorConfig()
        if resolver is None and self.config.enable_dns_lookup:
            resolver = DnsDomainResolver()
        self.resolver = resolver

    @classmethod
    def from_app_config(cls, app_config, resolver=None) -> 'ValidationService':
        # An injected resolver (tests, offline runs) wins over the default one.
        resolver = resolver or app_config.get('DOMAIN_RESOLVER')
        return cls(ValidatorConfig.from_mapping(app_config), resolver)

    # ---- Single field ----
    def validate_field(self, kind, value, lookup_domain: bool = False) -> List[str]:
        """Errors for one field. DNS lookup is opt-in per call."""
        resolver = self.resolver if lookup_domain else None
        return validate(kind, value, self.config, resolver)

    def live_feedback(self, kind, value) -> dict:
        """Payload for the single-field endpoint; never touches the network."""
        kind = kind if isinstance(kind, FieldKind) else FieldKind.parse(kind)
        value = to_text(value)
        errors = self.validate_field(kind, value)

        payload = {
            'field': kind.value,
            'value': value,
            'errors': errors,
            'valid': not errors,
        }
        if kind == FieldKind.NATIONAL_ID:
            payload['formatted'] = format_national_id(value)

        log_activity(
            action_type=ActionType.FIELD_VALIDATE,
            action_category=ActionCategory.LIVE,
            field=kind.value,
            error_count=len(errors),
        )
        return payload

    # ---- Whole form ----
    def validate_submission(self, submission: FormSubmission, lookup_domain: Optional[bool] = None) -> SubmissionReport:
        """
        Validate all three fields of a submission.

        ``lookup_domain`` defaults to the configured DNS switch; the browser's
        pre-submit check passes False to stay off the network.
        """
        if lookup_domain is None:
            lookup_domain = self.config.enable_dns_lookup

        report = SubmissionReport(submission=submission)
        for kind in FORM_ORDER:
            value = submission.value_for(kind)
            errors = self.validate_field(kind, value, lookup_domain=lookup_domain)
            report.fields.append(FieldReport(kind=kind, value=value, errors=errors))

        log_activity(
            action_type=ActionType.SUBMISSION_VALIDATE,
            action_category=ActionCategory.SUBMISSION,
            error_count=len(report.all_errors),
            success=report.success,
        )
        return report
