# tests/unit/test_to_form.py
from __future__ import annotations

import pytest

from listing_wizard.core.transform import to_form
from listing_wizard.core.visibility.flags import get_flag
from listing_wizard.inputs.settings import WizardSettings
from listing_wizard.schemas.labels import ListingStatus, VisibilitySection
from listing_wizard.schemas.models import Currency, ListingDraft, LocalizedValue, MediaItem
from tests import make_wire_record
from tests.utils import lv


def test_full_record_flattens_into_draft(wire_record):
    draft = to_form(wire_record)

    assert draft.record_id == "rec-001"
    assert draft.property_id == "PS1001"
    assert draft.transaction_type == lv("Sale", "Bán")
    assert (draft.hierarchy.project_id, draft.hierarchy.zone_id, draft.hierarchy.block_id) == ("p-eco", "z-a", "b-5")
    assert draft.hierarchy.block_name == lv("Block 5", "Tòa 5")
    assert draft.title.vi == "Căn hộ view hồ"
    assert draft.description.en == "Near the park"
    assert draft.address == lv("12 Lake Road", "12 Đường Hồ")
    assert draft.unit_size == 85
    assert draft.financial.price == 3500000000
    assert draft.financial.payment_terms.en == "30% upfront"
    assert draft.financial.maintenance_fee.vi == "Đã bao gồm"
    assert draft.financial.currency == Currency(symbol="VND", code="VND", name="VND")
    assert draft.contact.owner_phones == ("+84 90 000 0000",)
    assert draft.seo.meta_keywords.vi == ("ecopark", "hồ")
    assert draft.status is ListingStatus.published


def test_media_urls_become_server_items(wire_record):
    draft = to_form(wire_record)
    assert draft.media.images[0] == MediaItem(url="https://cdn.example/1.jpg", is_server_file=True)
    assert len(draft.media.for_kind("video")) == 1
    assert draft.media.floor_plans[0].url.endswith("plan.png")


def test_visibility_sections_and_root_flags(wire_record):
    vis = to_form(wire_record).visibility
    assert get_flag(vis, VisibilitySection.listing, "googleMap") is True
    assert get_flag(vis, VisibilitySection.financial, "feeTaxes") is True
    assert get_flag(vis, VisibilitySection.property, "view") is False
    assert get_flag(vis, None, "floorImageVisibility") is True
    assert get_flag(vis, None, "videoVisibility") is False


def test_dates_are_cut_at_t():
    record = make_wire_record(listingInformation={"listingInformationDateListed": "2024-05-01T07:00:00.000Z"})
    assert to_form(record).date_listed == "2024-05-01"


def test_bare_string_transaction_type_becomes_canonical_label():
    record = make_wire_record(listingInformation={"listingInformationTransactionType": " cho thuê "})
    assert to_form(record).transaction_type == lv("Lease", "Cho thuê")


def test_unrecognised_string_transaction_type_is_kept_raw():
    record = make_wire_record(listingInformation={"listingInformationTransactionType": "Auction"})
    assert to_form(record).transaction_type == "Auction"


def test_currency_object_is_accepted():
    record = make_wire_record(financialDetails={"financialDetailsCurrency": {"code": "USD", "symbol": "$"}})
    assert to_form(record).financial.currency == Currency(symbol="$", code="USD", name="USD")


@pytest.mark.parametrize("wire", [None, "garbage", 42, [], {}])
def test_non_records_give_empty_draft(wire):
    draft = to_form(wire)
    assert isinstance(draft, ListingDraft)
    assert draft.record_id is None
    assert draft.title == LocalizedValue()
    assert draft.status is ListingStatus.draft
    assert draft.financial.check_in == "2:00 PM"
    assert draft.seo.allow_indexing is True


def test_malformed_paths_degrade_to_empties():
    record = {
        "_id": 17,
        "listingInformation": "not a section",
        "propertyInformation": {"informationBedrooms": "three", "informationUnit": 5},
        "imagesVideos": {"propertyImages": [None, 5, "", "https://cdn.example/ok.jpg", {"url": "https://cdn.example/o.jpg"}]},
        "financialDetails": {"financialDetailsPrice": "1,250,000", "financialDetailsCheckIn": None},
        "propertyUtility": ["junk", {"propertyUtilityUnitName": "Pool"}],
        "listingInformationVisibility": ["x"],
        "seoInformation": {"allowIndexing": "no", "metaKeywords": "solo"},
        "status": "Archived",
    }
    draft = to_form(record)
    assert draft.record_id == "17"
    assert draft.title.is_empty()
    assert draft.bedrooms == 0
    assert draft.unit == LocalizedValue()
    assert [m.url for m in draft.media.images] == ["https://cdn.example/ok.jpg", "https://cdn.example/o.jpg"]
    assert draft.financial.price == 1250000
    assert draft.financial.check_in == "2:00 PM"
    assert draft.utilities[0].name == lv("Pool", "Pool")
    assert len(draft.utilities) == 1
    assert draft.visibility.listing["googleMap"] is False
    assert draft.seo.allow_indexing is False
    assert draft.seo.meta_keywords.en == ()
    assert draft.status is ListingStatus.draft


def test_check_in_defaults_follow_settings():
    cfg = WizardSettings(default_check_in="3:00 PM", default_check_out="10:00 AM")
    draft = to_form({}, settings=cfg)
    assert (draft.financial.check_in, draft.financial.check_out) == ("3:00 PM", "10:00 AM")


def test_legacy_refs_without_ids_keep_names():
    record = make_wire_record()
    record["listingInformation"]["listingInformationBlockName"] = {"en": "Block 5", "vi": ""}
    draft = to_form(record)
    assert draft.hierarchy.block_id == ""
    assert draft.hierarchy.block_name == lv("Block 5", "")
