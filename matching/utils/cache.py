# utils/cache.py
from django.conf import settings
from django.core.cache import cache
import logging

logger = logging.getLogger(__name__)


class RunCache:
    """
    Keeps in-progress matching runners between requests.
    A runner lives until the learner moves on or the TTL runs out.
    """

    @staticmethod
    def ttl():
        return getattr(settings, 'MATCHING_ENGINE', {}).get('RUN_TTL', 3600)

    @staticmethod
    def generate_key(run_id):
        """
        Format: v2_matching_run_{run_id}
        """
        return f"v2_matching_run_{run_id}".lower()

    @staticmethod
    def get(run_id):
        """
        Returns the stored runner snapshot or None
        """
        key = RunCache.generate_key(run_id)
        try:
            return cache.get(key)
        except Exception as e:
            logger.error(f"Cache get failed for key {key}: {str(e)}")
            return None

    @staticmethod
    def set(run_id, snapshot):
        key = RunCache.generate_key(run_id)
        try:
            cache.set(key, snapshot, timeout=RunCache.ttl())
            logger.debug(f"Stored runner {run_id} in cache")
            return True
        except Exception as e:
            logger.error(f"Cache update failed for key {key}: {str(e)}")
            return False

    @staticmethod
    def clear(run_id):
        """
        Drops a finished or abandoned runner
        """
        key = RunCache.generate_key(run_id)
        try:
            cache.delete(key)
            logger.info(f"Cleared cache key: {key}")
            return True
        except Exception as e:
            logger.error(f"Cache clear failed for key {key}: {str(e)}")
            return False
