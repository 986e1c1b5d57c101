"""Facts: models, repository adapter and view state controller."""

from .controller import FactsController, FormState, ViewState
from .models import Fact, FactDraft, FactValidationError, VoteUpdate, validate_draft
from .repository import FactRepository

__all__ = [
    "Fact",
    "FactDraft",
    "FactValidationError",
    "FactRepository",
    "FactsController",
    "FormState",
    "ViewState",
    "VoteUpdate",
    "validate_draft",
]
