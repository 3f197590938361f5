import logging
from dataclasses import dataclass
from typing import Any, Optional

from matching.engine.loader import field_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaggedActivity:
    activity: Any
    topic_name: Optional[str]
    is_from_subtopic: bool

    @property
    def id(self):
        return str(field_value(self.activity, "id"))


def _dedupe(tagged):
    seen = set()
    unique = []
    for item in tagged:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


def find_topic(topic_id, topics):
    for topic in topics or []:
        if str(field_value(topic, "id")) == str(topic_id):
            return topic
    return None


def is_parent_topic(topic):
    return topic is not None and not field_value(topic, "parentid")


def aggregate_for_topic(topic_id, topics, all_activities, direct_activities):
    """
    Matching activities to list for a topic.

    A parent topic (one without a parentid) gathers its own activities and
    those of every direct subtopic. Leaf topics, and topics missing from
    ``topics``, list only their direct activities. Duplicates by id are
    dropped, first occurrence wins.
    """
    topic_id = str(topic_id)
    current = find_topic(topic_id, topics)

    if not is_parent_topic(current) or all_activities is None:
        if current is None:
            logger.info(f"Topic {topic_id} not found, treating it as a leaf")
        current_name = field_value(current, "topic")
        return _dedupe(
            TaggedActivity(activity=activity, topic_name=current_name, is_from_subtopic=False)
            for activity in direct_activities or []
        )

    names = {str(field_value(topic, "id")): field_value(topic, "topic") for topic in topics}
    subtopic_ids = [
        str(field_value(topic, "id"))
        for topic in topics
        if str(field_value(topic, "parentid") or "") == topic_id
    ]
    relevant_ids = [topic_id] + subtopic_ids
    logger.debug(f"Topic {topic_id} aggregates subtopics {subtopic_ids}")

    tagged = []
    for activity in all_activities:
        activity_topic = field_value(activity, "topicid")
        if not activity_topic or str(activity_topic) not in relevant_ids:
            continue
        activity_topic = str(activity_topic)
        tagged.append(
            TaggedActivity(
                activity=activity,
                topic_name=names.get(activity_topic),
                is_from_subtopic=activity_topic != topic_id,
            )
        )

    unique = _dedupe(tagged)
    logger.info(f"Topic {topic_id}: {len(unique)} matching activities after aggregation")
    return unique
