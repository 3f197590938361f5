from matching.engine.hierarchy import TaggedActivity, aggregate_for_topic
from matching.engine.items import MatchItem, MatchPair, detect_modality
from matching.engine.loader import MatchDefinition, classify_kind, load
from matching.engine.orchestrator import ActivityRunner
from matching.engine.pools import Pools, build
from matching.engine.scoring import AnswerKey, ScoreResult, score
from matching.engine.state import MatchSession, MatchState

__all__ = [
    "ActivityRunner",
    "AnswerKey",
    "MatchDefinition",
    "MatchItem",
    "MatchPair",
    "MatchSession",
    "MatchState",
    "Pools",
    "ScoreResult",
    "TaggedActivity",
    "aggregate_for_topic",
    "build",
    "classify_kind",
    "detect_modality",
    "load",
    "score",
]
