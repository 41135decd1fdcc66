"""
Activity Logger Service
Logs validation activity through the Flask application logger
"""

import logging

from flask import current_app, has_app_context, has_request_context, request


# Action types (action_type)
class ActionType:
    # Full form submission
    SUBMISSION_VALIDATE = 'submission_validate'

    # Live feedback while typing
    FIELD_VALIDATE = 'field_validate'

    # CLI
    EID_GENERATE = 'eid_generate'


# Action categories (action_category)
class ActionCategory:
    SUBMISSION = 'submission'   # server round-trip
    LIVE = 'live'               # single-field JSON endpoint
    CLI = 'cli'                 # flask commands


ACTION_DESCRIPTIONS = {
    ActionType.SUBMISSION_VALIDATE: 'Form submission validated',
    ActionType.FIELD_VALIDATE: 'Single field validated',
    ActionType.EID_GENERATE: 'Emirates ID generated',
}


def log_activity(
    action_type: str,
    action_category: str,
    description: str = None,
    field: str = None,
    error_count: int = 0,
    success: bool = None,
):
    """
    Write one activity line to the application log.

    Args:
        action_type: one of ActionType
        action_category: one of ActionCategory
        description: custom text (defaults to ACTION_DESCRIPTIONS)
        field: field kind the activity concerns, if any
        error_count: number of validation errors found
        success: overall outcome, if meaningful

    Field values are never logged, only counts.
    """
    if description is None:
        description = ACTION_DESCRIPTIONS.get(action_type, action_type)

    ip_address = None
    user_agent = None
    if has_request_context():
        ip_address = request.remote_addr
        user_agent = request.headers.get('User-Agent', '')[:200]

    logger = current_app.logger if has_app_context() else logging.getLogger(__name__)
    logger.info(
        "[ActivityLogger] %s/%s: %s field=%s errors=%d success=%s ip=%s ua=%s",
        action_category, action_type, description, field, error_count,
        success, ip_address, user_agent,
    )
