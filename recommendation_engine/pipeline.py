import logging
from dataclasses import dataclass, field
from typing import Any

from .config import DOMAIN_RESULT_LIMIT, TOP_CATEGORY_LIMIT
from .explain import build_rationale, normalize_bundle
from .fetcher import DOMAINS, fetch_entities
from .linking import resolve_linked_ids
from .scoring import (
    CategoryScore,
    aggregate_answers,
    explicit_top_categories,
    normalize_answer_set,
    top_categories,
    top_categories_from_results,
)
from .tag_map import tags_for_categories

logger = logging.getLogger("recommendation-engine")


@dataclass
class PipelineResult:
    scores: list[CategoryScore] = field(default_factory=list)
    top_categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    items: dict[str, list[dict]] = field(default_factory=lambda: {d: [] for d in DOMAINS})
    quiz_result_id: str | None = None

    @property
    def rationale(self) -> str:
        return build_rationale(self.top_categories, self.tags)

    def payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {d: self.items.get(d, []) for d in DOMAINS}
        out["topCategories"] = list(self.top_categories)
        out["tags"] = list(self.tags)
        return out


class RecommendationPipeline:
    """
    raw answers / scores -> top categories -> tags -> linked ids
    -> entities (six domains, concurrently) -> explained items.
    Read failures propagate to the caller.
    """

    def __init__(self, store, *, top_limit: int = TOP_CATEGORY_LIMIT, domain_limit: int = DOMAIN_RESULT_LIMIT):
        self.store = store
        self.top_limit = top_limit
        self.domain_limit = domain_limit

    async def _aggregate(self, raw_answers: Any) -> tuple[list[CategoryScore], list[str]]:
        answers = normalize_answer_set(raw_answers)
        if not answers:
            return [], []
        questions = await self.store.questions_by_ids(answers.keys())
        scores = aggregate_answers(answers, questions)
        return scores, top_categories(scores, self.top_limit)

    async def resolve_categories(self, request) -> tuple[list[CategoryScore], list[str], str | None]:
        ref = request.quiz_result_id or request.result_id
        quiz_result = await self.store.quiz_result(ref) if ref else None
        if ref and quiz_result is None:
            logger.warning("Quiz result %s could not be resolved", ref)
        quiz_result_id = quiz_result.id if quiz_result is not None else None

        explicit_scores, explicit = explicit_top_categories(request.top_categories, self.top_limit)
        if explicit:
            return explicit_scores, explicit, quiz_result_id

        submitted = request.category_scores if request.category_scores is not None else request.results
        if submitted is not None:
            scores, top = top_categories_from_results(submitted, self.top_limit)
            if top:
                return scores, top, quiz_result_id

        if quiz_result is not None:
            scores, top = top_categories_from_results(quiz_result.results, self.top_limit)
            if not top:
                scores, top = await self._aggregate(quiz_result.answers)
            if top:
                return scores, top, quiz_result_id

        if request.answers is not None:
            scores, top = await self._aggregate(request.answers)
            return scores, top, quiz_result_id

        return [], [], quiz_result_id

    async def run(self, request) -> PipelineResult:
        scores, top, quiz_result_id = await self.resolve_categories(request)
        result = PipelineResult(scores=scores, top_categories=top, quiz_result_id=quiz_result_id)
        if not top:
            logger.info("No categories derived for quizType=%s; nothing to recommend", request.quiz_type)
            return result

        result.tags = tags_for_categories(top)
        links = await resolve_linked_ids(self.store, result.tags)
        bundle = await fetch_entities(self.store, links, self.domain_limit)
        result.items = normalize_bundle(bundle, result.tags, top)
        logger.info(
            "Recommendations for %s: %s",
            top, {d: len(v) for d, v in result.items.items()},
        )
        return result
