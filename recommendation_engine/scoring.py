"""
Category scoring.

Every accepted input shape (raw Likert answers, client pre-aggregated
scores in object or array form, explicit top categories) is reduced here
to one canonical list of CategoryScore. Nothing downstream branches on the
shape the caller used.
"""
from dataclasses import dataclass
from numbers import Number
from typing import Any, Iterable, Mapping

from .config import TOP_CATEGORY_LIMIT

_SCORE_KEYS = ("score", "average", "value")
_LABEL_KEYS = ("category", "name", "section")


@dataclass
class CategoryScore:
    category: str
    average: float
    total: float
    count: int

    def as_dict(self) -> dict:
        return {
            "category": self.category,
            "average": self.average,
            "total": self.total,
            "count": self.count,
        }


def _field(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, Number):
        return None
    v = float(value)
    if v != v:  # NaN
        return None
    return v


def _label(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def question_label(question: Any) -> str | None:
    # quiz types populate one or the other
    return _label(_field(question, "category")) or _label(_field(question, "section"))


def answer_value(raw: Any) -> float | None:
    """A Likert response as stored or as submitted: 4, {"value": 4}."""
    n = _number(raw)
    if n is not None:
        return n
    if isinstance(raw, dict):
        return _number(raw.get("value"))
    return None


def normalize_answer_set(raw: Any) -> dict[str, float]:
    """
    {questionId: value} or [{questionId, value|response}] -> ordered
    {questionId: value}. Unanswered and non-numeric entries are dropped.
    """
    out: dict[str, float] = {}
    if isinstance(raw, Mapping):
        items: Iterable = raw.items()
    elif isinstance(raw, list):
        items = (
            (a.get("questionId"), a["response"] if a.get("response") is not None else a.get("value"))
            for a in raw
            if isinstance(a, dict)
        )
    else:
        return out

    for question_id, val in items:
        if question_id is None:
            continue
        v = answer_value(val)
        if v is not None:
            out[str(question_id)] = v
    return out


def aggregate_answers(answers: Mapping[str, float], questions: Mapping[str, Any]) -> list[CategoryScore]:
    totals: dict[str, list[float]] = {}
    for question_id, value in answers.items():
        question = questions.get(question_id)
        if question is None:
            continue
        label = question_label(question)
        if not label:
            continue
        bucket = totals.setdefault(label, [0.0, 0])
        bucket[0] += value
        bucket[1] += 1

    return [
        CategoryScore(category=label, average=total / count, total=total, count=count)
        for label, (total, count) in totals.items()
        if count > 0
    ]


def _score_from_entry(label: str, entry: Any) -> CategoryScore | None:
    n = _number(entry)
    if n is not None:
        return CategoryScore(category=label, average=n, total=n, count=1)
    if not isinstance(entry, dict):
        return None

    total, count = _number(entry.get("total")), entry.get("count")
    if total is not None and isinstance(count, int) and not isinstance(count, bool) and count > 0:
        return CategoryScore(category=label, average=total / count, total=total, count=count)

    for key in _SCORE_KEYS:
        n = _number(entry.get(key))
        if n is not None:
            return CategoryScore(category=label, average=n, total=n, count=1)
    return None


def parse_category_scores(raw: Any) -> list[CategoryScore]:
    """
    Client pre-aggregated scores:
      {"STEM": 5, "Arts": 1}
      {"STEM": {"total": 9, "count": 2}}
      [{"category": "STEM", "average": 4.5}, {"name": "Arts", "score": 2}]
    A results wrapper carrying "categoryScores" is unwrapped first.
    """
    if isinstance(raw, dict) and "categoryScores" in raw:
        return parse_category_scores(raw["categoryScores"])

    scores: list[CategoryScore] = []
    seen: set[str] = set()

    if isinstance(raw, dict):
        pairs: Iterable = ((k, v) for k, v in raw.items() if k != "topCategories")
    elif isinstance(raw, list):
        pairs = (
            (next((e.get(k) for k in _LABEL_KEYS if _label(e.get(k))), None), e)
            for e in raw
            if isinstance(e, dict)
        )
    else:
        return scores

    for label, entry in pairs:
        label = _label(label)
        if not label or label in seen:
            continue
        s = _score_from_entry(label, entry)
        if s is not None:
            seen.add(label)
            scores.append(s)
    return scores


def clean_top_categories(raw: Any, limit: int = TOP_CATEGORY_LIMIT) -> list[str]:
    out: list[str] = []
    if not isinstance(raw, (list, tuple)):
        return out
    for item in raw:
        label = _label(item if not isinstance(item, dict) else item.get("category"))
        if label and label not in out:
            out.append(label)
        if len(out) >= limit:
            break
    return out


def top_categories(scores: list[CategoryScore], limit: int = TOP_CATEGORY_LIMIT) -> list[str]:
    # sorted() is stable, so equal averages keep their input order
    ranked = sorted(scores, key=lambda s: s.average, reverse=True)
    return [s.category for s in ranked[:limit]]


def top_categories_from_results(results: Any, limit: int = TOP_CATEGORY_LIMIT) -> tuple[list[CategoryScore], list[str]]:
    """Stored or submitted `results`: explicit topCategories win over scores."""
    scores = parse_category_scores(results)
    if isinstance(results, dict):
        explicit = clean_top_categories(results.get("topCategories"), limit)
        if explicit:
            return scores, explicit
    return scores, top_categories(scores, limit)


def _is_scored(entry: Any) -> bool:
    return isinstance(entry, dict) and _score_from_entry("", entry) is not None


def explicit_top_categories(raw: Any, limit: int = TOP_CATEGORY_LIMIT) -> tuple[list[CategoryScore], list[str]]:
    """
    Caller-supplied topCategories. A plain label list is kept in the
    caller's order; an object or a list of scored entries is ranked.
    """
    if isinstance(raw, dict) or (isinstance(raw, list) and any(_is_scored(e) for e in raw)):
        scores = parse_category_scores(raw)
        return scores, top_categories(scores, limit)
    return [], clean_top_categories(raw, limit)
