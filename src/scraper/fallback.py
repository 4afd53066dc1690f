from typing import Final

from src.models.review import ReviewRecord

# Placeholder reviews returned when nothing could be scraped.
# Every record is flagged synthetic so callers can tell them apart.
_SAMPLE_REVIEWS: Final[tuple[tuple[str, float, str, str], ...]] = (
    ("John Doe", 5.0, "Great place! Friendly staff and quick service.", "1 month ago"),
    ("Maria Garcia", 4.0, "Good experience overall, a bit crowded at lunch time.", "2 weeks ago"),
    ("Alex Chen", 5.0, "Excellent quality. Would definitely come back.", "3 days ago"),
    ("Sarah Johnson", 3.0, "Decent, but the wait was longer than expected.", "2 months ago"),
    ("David Smith", 4.0, "Clean, well organized and reasonably priced.", "1 week ago"),
    ("Emma Wilson", 5.0, "The team went above and beyond. Highly recommended.", "5 days ago"),
    ("Luca Rossi", 4.0, "Nice atmosphere and helpful people.", "3 weeks ago"),
    ("Priya Patel", 3.0, "Average experience, nothing special.", "4 months ago"),
    ("Tom Becker", 5.0, "Best in the area, hands down.", "6 days ago"),
    ("Olivia Brown", 4.0, "Solid service. Parking can be tricky.", "1 year ago"),
)


def fallback_reviews() -> list[ReviewRecord]:
    return [
        ReviewRecord(name=name, rating=rating, text=text, date=date, synthetic=True)
        for name, rating, text, date in _SAMPLE_REVIEWS
    ]
