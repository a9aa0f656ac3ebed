"""
Normalizer and explainer.

Turns catalog rows of six different shapes into one item schema
({id, title, description, <domain fields>, explanation}). Explanations are
a pure function of the item, the tag set and the top categories.
"""
from datetime import date
from typing import Any, Callable, Iterable

from .fetcher import DOMAINS, EntityBundle

GENERIC_EXPLANATION = "Recommended based on your profile"
MAX_NAMED_TAGS = 2


def _lower_all(values: Iterable[Any] | None) -> list[str]:
    return [str(v).strip().lower() for v in (values or []) if str(v).strip()]


def _iso(d: date | None) -> str | None:
    return d.isoformat() if d else None


def matched_tags(item_tags: Iterable[str], tags: Iterable[str]) -> list[str]:
    wanted = set(tags)
    out: list[str] = []
    for t in item_tags:
        if t in wanted and t not in out:
            out.append(t)
    return out


def explain(item_tags: Iterable[str], tags: Iterable[str], top_categories: list[str]) -> str:
    parts = []
    matched = matched_tags(item_tags, tags)[:MAX_NAMED_TAGS]
    if matched:
        parts.append(f"Matches your interests in {' and '.join(matched)}.")
    if top_categories:
        parts.append(f"Aligns with your {top_categories[0]} quiz results.")
    if not parts:
        return GENERIC_EXPLANATION
    return " ".join(parts)


# ----------------------------
# Per-domain shapes
# ----------------------------

def _course(c) -> tuple[dict, list[str]]:
    item = {
        "id": c.id,
        "title": c.name,
        "description": c.description or "",
        "code": c.code,
        "level": c.level,
        "streamId": c.stream_id,
        "tags": list(c.tags or []),
    }
    return item, _lower_all(c.tags)


def _career(c) -> tuple[dict, list[str]]:
    item = {
        "id": c.id,
        "title": c.name,
        "description": c.description or "",
        "slug": c.slug,
        "sectors": list(c.sectors or []),
        "skillsRequired": list(c.skills_required or []),
        "growthTrend": c.growth_trend,
    }
    return item, _lower_all(c.sectors) + _lower_all(c.skills_required)


def _program(p) -> tuple[dict, list[str]]:
    item = {
        "id": p.id,
        "title": p.name,
        "description": f"{p.duration_years}-year program" if p.duration_years else "",
        "code": p.code,
        "courseId": p.course_id,
        "collegeId": p.college_id,
        "durationYears": p.duration_years,
        "medium": list(p.medium or []),
        "fees": dict(p.fees or {}),
    }
    return item, []


def _exam(e) -> tuple[dict, list[str]]:
    item = {
        "id": e.id,
        "title": e.name,
        "description": e.authority or "",
        "authority": e.authority,
        "level": e.level,
        "region": e.region,
        "scheduleWindow": e.schedule_window,
        "registrationOpens": _iso(e.registration_opens),
        "registrationCloses": _iso(e.registration_closes),
        "examDate": _iso(e.exam_date),
        "link": e.link,
        "tags": list(e.tags or []),
    }
    return item, _lower_all(e.tags)


def _interest(i) -> tuple[dict, list[str]]:
    item = {
        "id": i.id,
        "title": i.name,
        "description": i.description or "",
        "slug": i.slug,
    }
    return item, _lower_all([i.name, i.slug])


def _college(c) -> tuple[dict, list[str]]:
    item = {
        "id": c.id,
        "title": c.name,
        "description": ", ".join(p for p in (c.district, c.state) if p),
        "code": c.code,
        "type": c.type,
        "district": c.district,
        "state": c.state,
        "website": c.website,
    }
    return item, []


_SHAPERS: dict[str, Callable[[Any], tuple[dict, list[str]]]] = {
    "courses": _course,
    "careers": _career,
    "programs": _program,
    "exams": _exam,
    "interests": _interest,
    "colleges": _college,
}


def normalize_bundle(bundle: EntityBundle, tags: list[str], top_categories: list[str]) -> dict[str, list[dict]]:
    out: dict[str, list[dict]] = {}
    for domain in DOMAINS:
        shape = _SHAPERS[domain]
        items = []
        for row in getattr(bundle, domain):
            item, item_tags = shape(row)
            item["explanation"] = explain(item_tags, tags, top_categories)
            items.append(item)
        out[domain] = items
    return out


def build_rationale(top_categories: list[str], tags: list[str]) -> str:
    if not top_categories:
        return GENERIC_EXPLANATION
    text = f"Based on your top categories: {', '.join(top_categories)}"
    if tags:
        text += f"; matched tags: {', '.join(tags[:5])}"
    return text
