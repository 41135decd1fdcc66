from flask import (
    Blueprint, render_template, request, jsonify, current_app
)
from inputcheck.common.validators import export_rules, generate_valid_eid
from inputcheck.domain.submission import FieldKind, FormSubmission
from inputcheck.services.validation_service import ValidationService

bp = Blueprint('validation', __name__)


def _service():
    return ValidationService.from_app_config(current_app.config)


def _examples():
    return {
        'emails': ['user@example.com', 'john.doe@company.co.uk'],
        'eids': [generate_valid_eid(2000, 1234567), generate_valid_eid(1995, 9876543)],
        'mobiles': ['+971 50 123 4567', '971501234567', '0501234567'],
    }


def _submission_from(data) -> FormSubmission:
    return FormSubmission(
        email=(data.get('email') or '').strip(),
        eid=(data.get('eid') or '').strip(),
        mobile=(data.get('mobile') or '').strip(),
    )


@bp.route('/', methods=('GET', 'POST'))
def index():
    """Render the form; on POST validate the three fields and show results."""
    service = _service()
    report = None
    submission = FormSubmission()

    if request.method == 'POST':
        submission = _submission_from(request.form)
        report = service.validate_submission(submission)

    return render_template(
        'validation/form.html',
        submission=submission,
        report=report,
        examples=_examples(),
        checksum_enabled=service.config.checksum_enabled,
        rules=export_rules(service.config),
    )


@bp.route('/api/validate', methods=['POST'])
def validate_field():
    """Validate a single field without DNS: {field, value} -> errors."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'JSON body with field and value required'}), 400

    try:
        kind = FieldKind.parse(str(data.get('field', '')))
    except ValueError:
        return jsonify({'error': f"Unknown field: {data.get('field')}"}), 400

    value = data.get('value')
    if value is not None and not isinstance(value, str):
        return jsonify({'error': 'value must be a string'}), 400

    return jsonify(_service().live_feedback(kind, value))


@bp.route('/api/validate-submission', methods=['POST'])
def validate_submission():
    """Pre-submit check used by the browser; skips the DNS lookup."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'JSON body with email, eid and mobile required'}), 400

    values = {name: data.get(name) for name in ('email', 'eid', 'mobile')}
    if any(v is not None and not isinstance(v, str) for v in values.values()):
        return jsonify({'error': 'field values must be strings'}), 400

    report = _service().validate_submission(_submission_from(values), lookup_domain=False)
    return jsonify({
        'success': report.success,
        'fields': {
            r.kind.value: {'errors': r.errors, 'valid': r.is_valid}
            for r in report.fields
        },
    })


@bp.route('/api/rules', methods=['GET'])
def rules():
    """Client-side rule set for the active configuration (same data the form page embeds)."""
    return jsonify(export_rules(_service().config))
