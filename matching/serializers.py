# matching/serializers.py
from rest_framework import serializers

from matching.config.matching_types import KIND_INSTRUCTIONS, TEXT
from matching.models import MatchingActivity, MatchingAttempt, Topic


class TopicSerializer(serializers.ModelSerializer):
    class Meta:
        model = Topic
        fields = ['id', 'topic', 'parentid']


class MatchingActivitySerializer(serializers.ModelSerializer):
    class Meta:
        model = MatchingActivity
        fields = [
            'id', 'type', 'subject', 'topic', 'description', 'topicid',
            'prompt1', 'prompt2', 'prompt3', 'prompt4', 'prompt5', 'prompt6',
        ]


class TaggedActivitySerializer(serializers.Serializer):
    """A matching activity listed under a topic, with where it came from."""

    def to_representation(self, instance):
        data = MatchingActivitySerializer(instance.activity).data
        data['topicName'] = instance.topic_name
        data['isFromSubtopic'] = instance.is_from_subtopic
        return data


class MatchingAttemptSerializer(serializers.ModelSerializer):
    class Meta:
        model = MatchingAttempt
        fields = [
            'attempt_id', 'run_id', 'student_id', 'matching', 'phase',
            'answers', 'correctness', 'correct_count', 'total', 'score', 'created_at',
        ]
        read_only_fields = fields


class StartRunSerializer(serializers.Serializer):
    matching_title = serializers.CharField(required=False, allow_blank=True, max_length=255)
    student_id = serializers.CharField(required=False, allow_blank=True, max_length=64)


class AssignSerializer(serializers.Serializer):
    left = serializers.CharField(trim_whitespace=False)
    # null means the item was dropped outside every drop zone
    right = serializers.CharField(trim_whitespace=False, allow_null=True)


class UnassignSerializer(serializers.Serializer):
    left = serializers.CharField(trim_whitespace=False)


def serialize_run(run_id, runner, title=None):
    state = runner.session.state
    return {
        'run_id': str(run_id),
        'matching_id': runner.definition.activity_id,
        'title': title or runner.definition.title,
        'kind': runner.definition.kind,
        'phase': runner.current_phase,
        'phases': list(runner.definition.phases),
        'instructions': KIND_INSTRUCTIONS.get(runner.current_phase or runner.definition.kind, KIND_INSTRUCTIONS[TEXT]),
        'completed_phases': list(runner.completed_phases),
        'status': state.status,
        'total': state.total,
        'pairing': dict(state.pairing),
        'can_submit': runner.session.can_submit,
        'result': state.result.to_dict() if state.result else None,
        'actions': runner.available_actions(),
        'is_finished': runner.is_finished,
        'pools': runner.pools.presentation(runner.current_phase or runner.definition.kind),
    }
