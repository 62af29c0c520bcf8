# tests/unit/test_seo_slug.py
from __future__ import annotations

import pytest

from listing_wizard.core.seo.slug import autofill_seo, slugify
from listing_wizard.schemas.models import SeoInfo
from tests.utils import lv


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Lake view apartment", "lake-view-apartment"),
        ("Căn hộ 2 phòng ngủ – Ecopark", "can-ho-2-phong-ngu-ecopark"),
        ("Đường   Nguyễn Huệ!!", "duong-nguyen-hue"),
        ("  --Villa -- Pool-- ", "villa-pool"),
        ("", ""),
    ],
)
def test_slugify(title, expected):
    assert slugify(title) == expected


def test_autofill_from_english_title():
    seo = autofill_seo(SeoInfo(), lv("Lake View", "Căn hộ view hồ"))
    assert seo.slug_url == lv("lake-view", "lake-view")
    assert seo.meta_title == lv("Lake View", "Căn hộ view hồ")


def test_autofill_from_vietnamese_only_title():
    seo = autofill_seo(SeoInfo(), lv("", "Căn hộ"))
    assert seo.slug_url == lv("can-ho", "can-ho")
    assert seo.meta_title == lv("Căn hộ", "Căn hộ")


def test_existing_slug_is_never_overwritten():
    seo = SeoInfo(slug_url=lv("", "tu-chon"))
    assert autofill_seo(seo, lv("New title", "")) is seo


def test_existing_meta_title_side_is_kept():
    seo = autofill_seo(SeoInfo(meta_title=lv("Custom", "")), lv("Title", "Tiêu đề"))
    assert seo.meta_title == lv("Custom", "Tiêu đề")


def test_no_title_no_change():
    seo = SeoInfo()
    assert autofill_seo(seo, lv()) is seo
