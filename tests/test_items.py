import pytest

from matching.config.matching_types import PICTURE_TITLE, TEXT, TITLE_DESCRIPTION
from matching.engine.items import (
    IMAGE_MODALITY,
    TEXT_MODALITY,
    MatchItem,
    detect_modality,
    display_hints,
    grid_columns,
)


@pytest.mark.parametrize(
    "value",
    [
        "https://example.com/cat.png",
        "http://example.com/photos/Dog.JPEG",
        "https://example.com/chart.svg?size=large",
        "https://encrypted-tbn0.gstatic.com/images?q=tbn:abc",
        "https://i.imgur.com/AbCdEf",
        "https://upload.wikimedia.org/wikipedia/commons/thumb/x",
        "https://afdc.energy.gov/files/u/data/fuel-station",
        "https://www.pubaffairsbruxelles.eu/wp-content/uploads/event-banner",
    ],
)
def test_detect_modality_recognises_images(value):
    assert detect_modality(value) == IMAGE_MODALITY


@pytest.mark.parametrize(
    "value",
    [
        "cat.png",
        "A photo of a cat",
        "https://example.com/article",
        "ftp://example.com/cat.png",
        "",
        None,
    ],
)
def test_detect_modality_defaults_to_text(value):
    assert detect_modality(value) == TEXT_MODALITY


def test_match_item_strips_value_and_derives_modality():
    item = MatchItem.from_value("  https://example.com/cat.gif ")

    assert item.value == "https://example.com/cat.gif"
    assert item.is_image


def test_grid_columns_follow_pool_size():
    assert grid_columns(2) == 3
    assert grid_columns(3) == 3
    assert grid_columns(4) == 4
    assert grid_columns(5) == 6
    assert grid_columns(9) == 6


def test_display_hints_for_title_description_drop_zone_shrink_long_text():
    short = MatchItem.from_value("Short text")
    long = MatchItem.from_value("word " * 60)

    assert display_hints(short, TITLE_DESCRIPTION, in_drop_zone=True)["font_size"] == "text-xl"
    assert display_hints(long, TITLE_DESCRIPTION, in_drop_zone=True)["font_size"] == "text-sm"
    assert display_hints(long, TITLE_DESCRIPTION)["font_size"] == "text-xs"


def test_display_hints_for_picture_title_are_bold_and_large():
    hints = display_hints(MatchItem.from_value("Volcano"), PICTURE_TITLE)

    assert hints["font_size"] == "text-2xl"
    assert hints["weight"] == "font-bold"


def test_display_hints_for_images_ignore_kind():
    image = MatchItem.from_value("https://example.com/a.png")

    assert display_hints(image, TEXT)["fit"] == "object-contain"
    assert display_hints(image, TEXT)["font_size"] is None
