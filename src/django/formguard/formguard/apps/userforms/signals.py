"""
Lifecycle hook points of the user defined form page.

Other apps connect receivers in their AppConfig.ready() to change how a form
page behaves without the page knowing about them.
"""

from dataclasses import dataclass
from typing import Any

from django.dispatch import Signal


@dataclass
class Adjustable:
    """Mutable value handed to receivers so they can replace it"""
    value: Any


# Sent before a form page is served. kwargs: form, request
form_page_requested = Signal()

# Sent once a submission has been stored. kwargs: form, submission
form_submission_processed = Signal()

# Sent while a UserForm is built. kwargs: form, fields (Adjustable of dict)
form_fields_built = Signal()

# Sent while a UserForm is built. kwargs: form, actions (Adjustable of list)
form_actions_built = Signal()
