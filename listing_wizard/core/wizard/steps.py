# listing_wizard/core/wizard/steps.py
from __future__ import annotations

from enum import IntEnum

from listing_wizard.schemas.models import LocalizedValue


class WizardStep(IntEnum):
    LISTING_PROPERTY = 1
    FINANCIAL_MEDIA = 2
    CONTACT = 3
    SEO = 4
    REVIEW = 5

    @property
    def label(self) -> LocalizedValue:
        return STEP_LABELS[self]

    def next(self) -> WizardStep | None:
        return WizardStep(self + 1) if self < WizardStep.REVIEW else None

    def prev(self) -> WizardStep | None:
        return WizardStep(self - 1) if self > WizardStep.LISTING_PROPERTY else None


FIRST_STEP = WizardStep.LISTING_PROPERTY
LAST_STEP = WizardStep.REVIEW

STEP_LABELS: dict[WizardStep, LocalizedValue] = {
    WizardStep.LISTING_PROPERTY: LocalizedValue(en="Listing & Property Information", vi="Thông tin tin đăng & bất động sản"),
    WizardStep.FINANCIAL_MEDIA: LocalizedValue(en="Library & Financial Information", vi="Thư viện & thông tin tài chính"),
    WizardStep.CONTACT: LocalizedValue(en="Landlord Information", vi="Thông tin chủ nhà"),
    WizardStep.SEO: LocalizedValue(en="SEO Information", vi="Thông tin SEO"),
    WizardStep.REVIEW: LocalizedValue(en="Review & Publish", vi="Xem lại & đăng"),
}
