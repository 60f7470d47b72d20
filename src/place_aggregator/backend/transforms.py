"""Category transforms: turn an extracted tuple into a unified Place.

Both transforms fill every Place field. Rating, review count and budget are
synthesized from an injectable random source since no provider supplies them.
"""

import random
from collections.abc import Callable
from datetime import datetime, timedelta

from place_aggregator.backend.registry import TransformKind
from place_aggregator.models import ExtractedTuple, Place, SourceTag

Clock = Callable[[], datetime]

EVENT_DESCRIPTION = (
    "Vivez une expérience inoubliable avec cet événement. "
    "Découvrez animations et surprises sur place."
)
EVENT_HIGHLIGHTS = [
    "Animation garantie",
    "Lieu atypique",
    "Ambiance festive",
    "Organisation soignée",
]
PLACE_DESCRIPTION = "Lieu convivial pour partager un moment entre amis ou en famille."
PLACE_HIGHLIGHTS = [
    "Ambiance chaleureuse",
    "Personnel accueillant",
    "Produits frais",
    "Facile d'accès",
]

# Substring -> label, first match wins.
CATEGORY_KEYWORDS = (
    ("bar", "Bar"),
    ("restaurant", "Restaurant"),
    ("sport", "Activité"),
)

AVAILABILITY_DAYS = 30


def local_now() -> datetime:
    """Timezone-aware current local time."""
    return datetime.now().astimezone()


def _at_hour(moment: datetime, hour: int, days: int = 0) -> datetime:
    return (moment + timedelta(days=days)).replace(hour=hour, minute=0, second=0, microsecond=0)


def _synthetic_scores(rng: random.Random) -> dict[str, float | int]:
    return {
        "budget": rng.randint(10, 59),
        "rating": round(rng.uniform(3.0, 5.0), 1),
        "review_count": rng.randrange(300),
    }


def infer_category(categories: list[str], default: str) -> str:
    """Map provider categories to a label by case-insensitive substring match."""
    lowered = [category.lower() for category in categories]
    for keyword, label in CATEGORY_KEYWORDS:
        if any(keyword in category for category in lowered):
            return label
    return default


def transform_event_place(
    item: ExtractedTuple, rng: random.Random, now: Clock = local_now
) -> Place:
    """Build an event Place.

    Catalog items override the default description and title with their
    ``descriptif`` and ``titre`` fields. The event is available from 10:00 today
    to 23:00 thirty days later.
    """
    description = EVENT_DESCRIPTION
    title = item.title
    if item.source is SourceTag.OPENDATA:
        description = item.details.description or description
        title = item.details.title or title

    today = now()
    return Place(
        id=item.id,
        title=title or "Événement inconnu",
        description=description,
        category="Événement",
        address=item.address,
        location=item.location,
        time_range="10h00 - 23h00",
        start_time=_at_hour(today, 10),
        end_time=_at_hour(today, 23, days=AVAILABILITY_DAYS),
        min_participants=2,
        max_participants=100,
        highlights=list(EVENT_HIGHLIGHTS),
        source=item.source,
        **_synthetic_scores(rng),
    )


def transform_place(item: ExtractedTuple, rng: random.Random, now: Clock = local_now) -> Place:
    """Build a restaurant, bar or activity Place.

    Overpass items contribute their cuisine and opening hours, Geoapify items
    their description, opening hours and a category inferred from their
    category list. Catalog items get no source-specific enrichment.
    """
    description = PLACE_DESCRIPTION
    category = "Restaurant"
    time_range = "09h00 - 19h00"
    details = item.details

    if item.source is SourceTag.OVERPASS:
        if details.cuisine:
            description = f"Cuisine: {details.cuisine}"
        time_range = details.opening_hours or time_range
    elif item.source is SourceTag.GEOAPIFY:
        description = details.description or description
        time_range = details.opening_hours or time_range
        category = infer_category(details.categories, category)
    # TODO: map the catalog's per-dataset name and description fields for opendata items.

    today = now()
    return Place(
        id=item.id,
        title=item.title or "Lieu inconnu",
        description=description,
        category=category,
        address=item.address,
        location=item.location,
        time_range=time_range,
        start_time=_at_hour(today, 9),
        end_time=_at_hour(today, 19, days=AVAILABILITY_DAYS),
        min_participants=2,
        max_participants=10,
        highlights=list(PLACE_HIGHLIGHTS),
        source=item.source,
        **_synthetic_scores(rng),
    )


TRANSFORMS: dict[TransformKind, Callable[..., Place]] = {
    TransformKind.EVENT: transform_event_place,
    TransformKind.PLACE: transform_place,
}
