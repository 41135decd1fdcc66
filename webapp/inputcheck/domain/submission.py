from dataclasses import dataclass, field
from enum import Enum
from typing import List


class FieldKind(str, Enum):
    EMAIL = 'email'
    NATIONAL_ID = 'eid'
    MOBILE = 'mobile'

    @property
    def label(self) -> str:
        return FIELD_LABELS[self]

    @classmethod
    def parse(cls, name: str) -> 'FieldKind':
        """Resolve a form field name or alias; raises ValueError for unknown names."""
        key = (name or '').strip()
        key = _ALIASES.get(key, key)
        return cls(key)


FIELD_LABELS = {
    FieldKind.EMAIL: 'Email',
    FieldKind.NATIONAL_ID: 'Emirates ID',
    FieldKind.MOBILE: 'UAE Mobile',
}

_ALIASES = {
    'national_id': 'eid',
    'nationalId': 'eid',
    'emirates_id': 'eid',
}


@dataclass
class FormSubmission:
    email: str = ''
    eid: str = ''
    mobile: str = ''

    def value_for(self, kind: FieldKind) -> str:
        return getattr(self, kind.value)


@dataclass
class FieldReport:
    kind: FieldKind
    value: str
    errors: List[str] = field(default_factory=list)

    @property
    def label(self):
        return self.kind.label

    @property
    def is_valid(self):
        return not self.errors


@dataclass
class SubmissionReport:
    submission: FormSubmission
    fields: List[FieldReport] = field(default_factory=list)

    @property
    def success(self):
        return all(report.is_valid for report in self.fields)

    @property
    def all_errors(self) -> List[str]:
        return [error for report in self.fields for error in report.errors]

    def report_for(self, kind: FieldKind) -> FieldReport:
        for report in self.fields:
            if report.kind == kind:
                return report
        raise KeyError(kind)
