import pytest
from pydantic import ValidationError

from src.models.review import ReviewRecord, ScrapeRequest, ScrapeResult

PLACE_TEMPLATE = "https://www.google.com/maps/place/?q=place_id:{place_id}"


def test_link_takes_precedence_over_place_id() -> None:
    request = ScrapeRequest.model_validate({"link": "https://maps.app.goo.gl/abc", "placeId": "ChIJ1"})

    assert request.resolve_target_url(PLACE_TEMPLATE) == "https://maps.app.goo.gl/abc"


def test_place_id_builds_canonical_url() -> None:
    request = ScrapeRequest.model_validate({"placeId": " ChIJ1 "})

    assert request.resolve_target_url(PLACE_TEMPLATE) == "https://www.google.com/maps/place/?q=place_id:ChIJ1"


def test_blank_fields_count_as_missing() -> None:
    request = ScrapeRequest.model_validate({"link": "  ", "placeId": ""})

    with pytest.raises(ValueError, match="Either link or placeId is required"):
        request.resolve_target_url(PLACE_TEMPLATE)


def test_review_record_never_holds_empty_strings() -> None:
    review = ReviewRecord(name="", rating=None, text="   ", date=None, photo_url="")

    assert review.name == "Anonymous"
    assert review.rating == 0.0
    assert review.text == "No review text"
    assert review.date == "Unknown date"
    assert review.photo_url is None


def test_review_record_rating_must_be_in_range() -> None:
    with pytest.raises(ValidationError):
        ReviewRecord(rating=5.5)


def test_reviews_payload_uses_wire_names() -> None:
    result = ScrapeResult(
        target_url="https://maps.example",
        reviews=[ReviewRecord(name="Ann", rating=4, text="Nice", date="today", photo_url="https://img/1")],
    )

    assert result.reviews_payload() == [
        {
            "name": "Ann",
            "rating": 4.0,
            "text": "Nice",
            "date": "today",
            "photoUrl": "https://img/1",
            "synthetic": False,
        }
    ]
