# listing_wizard/core/wizard/__init__.py
from .collaborators import ListingApi, MediaUploader, UploadSource
from .controller import WizardController
from .steps import FIRST_STEP, LAST_STEP, STEP_LABELS, WizardStep

__all__ = [
    "WizardController",
    "WizardStep",
    "STEP_LABELS",
    "FIRST_STEP",
    "LAST_STEP",
    "ListingApi",
    "MediaUploader",
    "UploadSource",
]
