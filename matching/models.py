import uuid
from django.db import models

from matching.config.matching_types import PROMPT_FIELDS, SEQUENTIAL_PHASES


class Topic(models.Model):
    id = models.CharField(max_length=64, primary_key=True)
    topic = models.CharField(max_length=255)
    parentid = models.CharField(max_length=64, null=True, blank=True, db_index=True)

    class Meta:
        ordering = ['topic']

    def __str__(self):
        return self.topic


class Content(models.Model):
    id = models.CharField(max_length=64, primary_key=True)
    title = models.CharField(max_length=255)
    short_description = models.TextField(null=True, blank=True)
    imageid = models.CharField(max_length=1024, null=True, blank=True)
    topicid = models.CharField(max_length=64, null=True, blank=True, db_index=True)

    def __str__(self):
        return self.title


class MatchingActivity(models.Model):
    id = models.CharField(max_length=64, primary_key=True)
    type = models.CharField(max_length=100, null=True, blank=True)
    subject = models.CharField(max_length=100, null=True, blank=True)
    topic = models.CharField(max_length=255, null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    topicid = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    prompt1 = models.TextField(null=True, blank=True)
    prompt2 = models.TextField(null=True, blank=True)
    prompt3 = models.TextField(null=True, blank=True)
    prompt4 = models.TextField(null=True, blank=True)
    prompt5 = models.TextField(null=True, blank=True)
    prompt6 = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name_plural = "Matching activities"

    @property
    def prompts(self):
        return [getattr(self, name) for name in PROMPT_FIELDS]

    def __str__(self):
        return self.topic or self.id


class MatchingAttempt(models.Model):
    PHASE_CHOICES = [(phase, phase) for phase in SEQUENTIAL_PHASES]

    attempt_id = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    run_id = models.UUIDField(db_index=True)
    student_id = models.CharField(max_length=64, null=True, blank=True)
    matching = models.ForeignKey(MatchingActivity, on_delete=models.CASCADE, related_name='attempts')
    phase = models.CharField(max_length=30, choices=PHASE_CHOICES, null=True, blank=True)
    answers = models.JSONField(default=dict)
    correctness = models.JSONField(default=dict)
    correct_count = models.PositiveIntegerField(default=0)
    total = models.PositiveIntegerField(default=0)
    score = models.PositiveSmallIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.matching_id} - {self.correct_count}/{self.total}"
