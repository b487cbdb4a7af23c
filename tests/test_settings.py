from typing import Optional

import pytest

from sqlpager import exc
from sqlpager import PagerSettings, DEFAULT_LIMIT


@pytest.mark.parametrize(('settings', 'limit', 'expected'), [
    (PagerSettings(), None, DEFAULT_LIMIT),
    (PagerSettings(), 0, 64),
    (PagerSettings(), -1, 64),
    (PagerSettings(), 1, 1),
    (PagerSettings(), 1000, 1000),
    (PagerSettings(default_limit=10), None, 10),
    (PagerSettings(max_limit=50), 1000, 50),
    (PagerSettings(max_limit=50), 20, 20),
    (PagerSettings(max_limit=50), None, 50),
    (PagerSettings(strict=True), None, 64),
    (PagerSettings(strict=True), 5, 5),
])
def test_get_final_limit(settings: PagerSettings, limit: Optional[int], expected: int):
    assert settings.get_final_limit(limit) == expected


@pytest.mark.parametrize(('settings', 'limit'), [
    (PagerSettings(), '1'),
    (PagerSettings(), 1.5),
    (PagerSettings(), True),
    (PagerSettings(strict=True), 0),
    (PagerSettings(strict=True), -10),
])
def test_get_final_limit_invalid(settings: PagerSettings, limit):
    with pytest.raises(exc.InvalidLimitError) as e:
        settings.get_final_limit(limit)

    assert e.value.limit == limit


@pytest.mark.parametrize(('settings', 'offset', 'expected'), [
    (PagerSettings(), None, 0),
    (PagerSettings(), 0, 0),
    (PagerSettings(), 10, 10),
    (PagerSettings(), -10, 0),
    (PagerSettings(strict=True), 10, 10),
])
def test_get_final_offset(settings: PagerSettings, offset: Optional[int], expected: int):
    assert settings.get_final_offset(offset) == expected


@pytest.mark.parametrize(('settings', 'offset'), [
    (PagerSettings(), '1'),
    (PagerSettings(), False),
    (PagerSettings(strict=True), -1),
])
def test_get_final_offset_invalid(settings: PagerSettings, offset):
    with pytest.raises(exc.InvalidOffsetError):
        settings.get_final_offset(offset)


def test_settings_assertions():
    with pytest.raises(AssertionError):
        PagerSettings(default_limit=0)

    with pytest.raises(AssertionError):
        PagerSettings(max_limit=0)
