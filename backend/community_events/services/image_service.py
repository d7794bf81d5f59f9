"""Resolve the image shown on an event card.

Precedence:
1. an explicit ``image_path`` stored in the event's metadata,
2. the default image of the metadata ``image_category``,
3. the default image of a ``[CATEGORY: x]`` tag in the event description,
4. a default image matched from the event location,
5. a generic fallback.

Resolution is read-only and total: it never raises and always returns a path.
"""
import re
import unicodedata
from typing import Any, Mapping, Optional

DEFAULT_IMAGE_DIR = "/images/defaults"
FALLBACK_IMAGE = f"{DEFAULT_IMAGE_DIR}/event.jpg"

CATEGORY_IMAGES = {
    "bingo": f"{DEFAULT_IMAGE_DIR}/bingo.jpg",
    "music": f"{DEFAULT_IMAGE_DIR}/music.jpg",
    "dance": f"{DEFAULT_IMAGE_DIR}/dance.jpg",
    "exercise": f"{DEFAULT_IMAGE_DIR}/exercise.jpg",
    "crafts": f"{DEFAULT_IMAGE_DIR}/crafts.jpg",
    "cinema": f"{DEFAULT_IMAGE_DIR}/cinema.jpg",
    "excursion": f"{DEFAULT_IMAGE_DIR}/excursion.jpg",
    "workshop": f"{DEFAULT_IMAGE_DIR}/workshop.jpg",
    "celebration": f"{DEFAULT_IMAGE_DIR}/celebration.jpg",
    "talk": f"{DEFAULT_IMAGE_DIR}/talk.jpg",
}

# Spanish / alternate spellings seen in calendar descriptions.
CATEGORY_ALIASES = {
    "musica": "music",
    "baile": "dance",
    "ejercicio": "exercise",
    "gimnasia": "exercise",
    "manualidades": "crafts",
    "cine": "cinema",
    "movie": "cinema",
    "excursiones": "excursion",
    "taller": "workshop",
    "fiesta": "celebration",
    "party": "celebration",
    "charla": "talk",
    "conferencia": "talk",
}

# Checked in order; the first substring found in the location wins.
LOCATION_IMAGES = (
    ("biblioteca", f"{DEFAULT_IMAGE_DIR}/library.jpg"),
    ("library", f"{DEFAULT_IMAGE_DIR}/library.jpg"),
    ("parque", f"{DEFAULT_IMAGE_DIR}/park.jpg"),
    ("park", f"{DEFAULT_IMAGE_DIR}/park.jpg"),
    ("jardin", f"{DEFAULT_IMAGE_DIR}/garden.jpg"),
    ("garden", f"{DEFAULT_IMAGE_DIR}/garden.jpg"),
    ("gimnasio", f"{DEFAULT_IMAGE_DIR}/gym.jpg"),
    ("gym", f"{DEFAULT_IMAGE_DIR}/gym.jpg"),
    ("comedor", f"{DEFAULT_IMAGE_DIR}/dining.jpg"),
    ("dining", f"{DEFAULT_IMAGE_DIR}/dining.jpg"),
    ("salon", f"{DEFAULT_IMAGE_DIR}/hall.jpg"),
    ("hall", f"{DEFAULT_IMAGE_DIR}/hall.jpg"),
)

CATEGORY_TAG_RE = re.compile(r"\[\s*(?:category|categoria)\s*:\s*([^\]]+?)\s*\]", re.IGNORECASE)


def _fold(text: str) -> str:
    """Lowercase and strip accents so 'Categoría'/'Jardín' match their plain forms."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).lower().strip()


def _field(source: Any, *names: str) -> Optional[str]:
    """Read the first present string field from a mapping or object."""
    if source is None:
        return None
    for name in names:
        value = source.get(name) if isinstance(source, Mapping) else getattr(source, name, None)
        if isinstance(value, str) and value.strip():
            return value
    return None


def category_image(category: Optional[str]) -> Optional[str]:
    if not category:
        return None
    key = _fold(category)
    key = CATEGORY_ALIASES.get(key, key)
    return CATEGORY_IMAGES.get(key)


def extract_category_tag(description: Optional[str]) -> Optional[str]:
    """Return the category named by a ``[CATEGORY: x]`` tag, if any."""
    if not description:
        return None
    match = CATEGORY_TAG_RE.search(_fold(description))
    return match.group(1) if match else None


def location_image(location: Optional[str]) -> Optional[str]:
    if not location:
        return None
    folded = _fold(location)
    for needle, image in LOCATION_IMAGES:
        if needle in folded:
            return image
    return None


def resolve_image(event: Any = None, metadata: Any = None) -> str:
    """Pick the display image for an event. See module docstring for precedence."""
    image_path = _field(metadata, "image_path", "imagePath")
    if image_path:
        return image_path

    image = category_image(_field(metadata, "image_category", "imageCategory"))
    if image:
        return image

    image = category_image(extract_category_tag(_field(event, "description")))
    if image:
        return image

    image = location_image(_field(event, "location"))
    if image:
        return image

    return FALLBACK_IMAGE
