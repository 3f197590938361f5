import logging
from django.db import DatabaseError

from matching.exceptions import ActivityNotFound, MatchingDataError
from matching.models import Content, MatchingActivity, Topic

logger = logging.getLogger(__name__)


class MatchingRepository:
    """
    Read-only access to topics, content and matching activities.
    Database failures are re-raised as MatchingDataError; an empty result is
    just an empty list.
    """

    def _fetch(self, description, query):
        try:
            return list(query)
        except DatabaseError as e:
            logger.error(f"Failed to fetch {description}: {str(e)}")
            raise MatchingDataError(f"Failed to fetch {description}") from e

    def all_topics(self):
        return self._fetch("topics", Topic.objects.all())

    def all_matching(self):
        activities = self._fetch("matching activities", MatchingActivity.objects.all())
        logger.debug(f"Fetched all matching activities: {len(activities)} total")
        return activities

    def matching_for_topic(self, topic_id):
        activities = self._fetch(
            f"matching activities for topic {topic_id}",
            MatchingActivity.objects.filter(topicid=topic_id),
        )
        logger.debug(f"Found {len(activities)} matching activities for topic {topic_id}")
        return activities

    def matching_by_id(self, matching_id):
        activities = self._fetch(
            f"matching activity {matching_id}",
            MatchingActivity.objects.filter(id=matching_id),
        )
        if not activities:
            raise ActivityNotFound(f"Matching activity {matching_id} not found")
        return activities[0]

    def content_by_id(self, content_id):
        """Full ids match exactly; 8 character short ids match by prefix."""
        if len(content_id) == 8:
            query = Content.objects.filter(id__istartswith=content_id)[:1]
        else:
            query = Content.objects.filter(id__iexact=content_id)[:1]
        found = self._fetch(f"content {content_id}", query)
        return found[0] if found else None

    def content_lookup(self):
        cache = {}

        def lookup(content_id):
            if content_id not in cache:
                cache[content_id] = self.content_by_id(content_id)
            return cache[content_id]

        return lookup
