from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class RoadmapStep:
    key: str
    title: str
    description: str
    category: str
    weight: float

    def as_dict(self) -> dict:
        return asdict(self)


LEADING_STEPS = (
    RoadmapStep("onboarding", "Complete Profile", "Fill your profile details", "onboarding", 1),
    RoadmapStep("assessment", "Take Assessment", "Complete interest and aptitude quiz", "assessment", 1),
)

TRAILING_STEPS = (
    RoadmapStep("shortlist", "Shortlist Colleges & Programs", "Pick a few programs to apply", "planning", 0.8),
    RoadmapStep("exams", "Prepare for Entrance Exams", "Note exam dates and start preparing", "planning", 0.75),
    RoadmapStep("mentor", "Connect with Mentor", "Book a session with an advisor", "mentor", 0.6),
    RoadmapStep("apply", "Apply to Programs", "Submit applications before deadlines", "execution", 0.7),
    RoadmapStep("track", "Track Progress", "Update milestones as you proceed", "progress", 0.5),
)

MAX_REVIEWED_STREAMS = 3


def _field(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _recommended_streams(quiz_result: Any) -> list:
    if quiz_result is None:
        return []
    streams = _field(quiz_result, "recommended_streams")
    if streams is None:
        streams = _field(quiz_result, "recommendedStreams")
    return list(streams or [])


def review_step(quiz_result: Any) -> RoadmapStep | None:
    streams = _recommended_streams(quiz_result)
    if not streams:
        return None
    top = [str(_field(s, "stream") or "Stream") for s in streams[:MAX_REVIEWED_STREAMS]]
    return RoadmapStep("review-results", "Review Results", f"Top fit: {', '.join(top)}", "analysis", 0.9)


def build_roadmap_steps(quiz_result: Any = None) -> list[RoadmapStep]:
    """
    Fixed template with one optional insertion: a "Review Results" step
    after the assessment when the quiz result recommends streams.
    Depends only on its input.
    """
    steps = list(LEADING_STEPS)
    review = review_step(quiz_result)
    if review:
        steps.append(review)
    steps.extend(TRAILING_STEPS)
    return steps
