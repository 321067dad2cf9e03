"""
Contact and order form relay.

Modules:
    relay - Submission validation, email composition and SMTP delivery
"""

from .relay import (
    FormSubmission,
    InvalidSubmission,
    SmtpSender,
    compose_message,
    handle_submission,
    parse_submission,
)

__all__ = [
    'FormSubmission',
    'InvalidSubmission',
    'SmtpSender',
    'compose_message',
    'handle_submission',
    'parse_submission',
]
