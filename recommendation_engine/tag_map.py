"""
Category -> tag table.

Quiz categories are coarse ("STEM", "Law"); catalog entities and linking
questions are tagged with fine-grained lowercase keywords. Extending the
matching vocabulary is a data change to CATEGORY_TAGS only.
"""
import logging
from typing import Iterable

logger = logging.getLogger("recommendation-engine")

CATEGORY_TAGS: dict[str, tuple[str, ...]] = {
    # interest quiz
    "STEM": ("technology", "mathematics", "science", "engineering"),
    "Arts": ("arts", "design", "fine arts", "literature"),
    "Medical": ("medicine", "biology", "healthcare", "nursing", "pharmacy"),
    "Engineering": ("engineering", "technology", "mechanics", "electronics", "construction"),
    "Commerce": ("commerce", "business", "finance", "accounting", "economics"),
    "Business": ("business", "management", "entrepreneurship", "marketing"),
    "Law": ("law", "legal", "civil services", "political science"),
    "Social": ("social work", "psychology", "sociology", "education", "teaching"),
    "Humanities": ("history", "literature", "languages", "philosophy"),
    "Agriculture": ("agriculture", "horticulture", "food technology", "environment"),
    "Sports": ("sports", "physical education", "fitness"),
    "Media": ("journalism", "media", "mass communication", "film"),
    "IT": ("technology", "computer science", "software", "data"),
    # aptitude quiz
    "Analytical": ("analytics", "mathematics", "research", "data"),
    "Numerical": ("mathematics", "statistics", "finance", "accounting"),
    "Verbal": ("languages", "literature", "communication", "journalism"),
    "Spatial": ("design", "architecture", "engineering"),
    "Memory": ("research", "medicine", "law"),
    "Practical": ("vocational", "engineering", "technology"),
    # personality quiz
    "Leadership": ("management", "business", "civil services"),
    "Planning": ("management", "operations", "project management"),
    "Adaptability": ("hospitality", "tourism", "entrepreneurship"),
    "Creative": ("arts", "design", "media"),
}

_LOOKUP = {k.lower(): v for k, v in CATEGORY_TAGS.items()}


def tags_for_category(category: str) -> tuple[str, ...]:
    return _LOOKUP.get(str(category).strip().lower(), ())


def tags_for_categories(categories: Iterable[str]) -> list[str]:
    """
    Ordered, de-duplicated union of the tags of every category.
    Categories missing from the table contribute nothing.
    """
    tags: list[str] = []
    for category in categories or []:
        mapped = tags_for_category(category)
        if not mapped:
            logger.debug("No tag mapping for category %r", category)
            continue
        for t in mapped:
            if t not in tags:
                tags.append(t)
    return tags
