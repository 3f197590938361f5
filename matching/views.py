from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny
from django.conf import settings
from django.db import DatabaseError
import random
import uuid
import logging

from .engine import ActivityRunner, aggregate_for_topic, load
from .exceptions import ActivityNotFound, MatchingDataError, RunNotFound
from .models import MatchingAttempt
from .repository import MatchingRepository
from .serializers import (
    AssignSerializer,
    MatchingActivitySerializer,
    MatchingAttemptSerializer,
    StartRunSerializer,
    TaggedActivitySerializer,
    TopicSerializer,
    UnassignSerializer,
    serialize_run,
)
from .utils.cache import RunCache

logger = logging.getLogger(__name__)

repository = MatchingRepository()


def data_unavailable(e):
    return Response({'error': str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


class TopicListAPI(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            topics = repository.all_topics()
        except MatchingDataError as e:
            return data_unavailable(e)
        return Response(TopicSerializer(topics, many=True).data)


class MatchingListAPI(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            activities = repository.all_matching()
        except MatchingDataError as e:
            return data_unavailable(e)
        return Response(MatchingActivitySerializer(activities, many=True).data)


class MatchingDetailAPI(APIView):
    permission_classes = [AllowAny]

    def get(self, request, matching_id):
        try:
            activity = repository.matching_by_id(matching_id)
        except ActivityNotFound:
            return Response({'error': 'Matching activity not found'},
                          status=status.HTTP_404_NOT_FOUND)
        except MatchingDataError as e:
            return data_unavailable(e)
        return Response(MatchingActivitySerializer(activity).data)


class TopicMatchingAPI(APIView):
    permission_classes = [AllowAny]

    def get(self, request, topic_id):
        """
        Matching activities for a topic. Parent topics also list the
        activities of their direct subtopics, tagged with
        "topicName" and "isFromSubtopic".
        """
        try:
            topics = repository.all_topics()
            direct = repository.matching_for_topic(topic_id)
            all_activities = repository.all_matching()
        except MatchingDataError as e:
            return data_unavailable(e)

        tagged = aggregate_for_topic(topic_id, topics, all_activities, direct)
        return Response(TaggedActivitySerializer(tagged, many=True).data)


class MatchingAttemptsAPI(APIView):
    permission_classes = [AllowAny]

    def get(self, request, matching_id):
        attempts = MatchingAttempt.objects.filter(matching_id=matching_id)
        student_id = request.query_params.get('student_id')
        if student_id:
            attempts = attempts.filter(student_id=student_id)
        try:
            data = MatchingAttemptSerializer(attempts, many=True).data
        except DatabaseError as e:
            logger.error(f"Failed to load attempts for {matching_id}: {str(e)}")
            return data_unavailable(e)
        return Response(data)


def _engine_settings():
    return getattr(settings, 'MATCHING_ENGINE', {})


def _finish_run(runner, context):
    logger.info(
        f"Run {context.get('run_id')} finished activity {runner.definition.activity_id} "
        f"(phases: {runner.completed_phases or 'single'})"
    )
    RunCache.clear(context.get('run_id'))


def _load_definition(matching_id):
    activity = repository.matching_by_id(matching_id)
    return activity, load(activity, content_lookup=repository.content_lookup())


class StartRunAPI(APIView):
    permission_classes = [AllowAny]

    def post(self, request, matching_id):
        """
        Opens a matching activity chosen from a list.
        Returns the runner: pools, status and the actions on offer.
        """
        serializer = StartRunSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data

        try:
            activity, definition = _load_definition(matching_id)
        except ActivityNotFound:
            return Response({'error': 'Matching activity not found'},
                          status=status.HTTP_404_NOT_FOUND)
        except MatchingDataError as e:
            return data_unavailable(e)

        if not definition.pairs:
            logger.warning(f"Matching activity {matching_id} has no usable pairs")
            return Response({'error': 'Matching activity has no usable pairs'},
                          status=status.HTTP_422_UNPROCESSABLE_ENTITY)

        run_id = uuid.uuid4()
        seed = _engine_settings().get('SHUFFLE_SEED')
        runner = ActivityRunner(
            definition,
            equivalence=_engine_settings().get('TEXT_EQUIVALENCE', 'exact'),
            rng=random.Random(seed) if seed is not None else None,
            on_complete=_finish_run,
            context={
                'run_id': str(run_id),
                'student_id': data.get('student_id') or None,
                'matching_title': data.get('matching_title') or activity.topic or 'Matching Activity',
            },
        )

        if not RunCache.set(run_id, runner.snapshot()):
            return Response({'error': 'Could not start matching activity'},
                          status=status.HTTP_503_SERVICE_UNAVAILABLE)

        logger.info(f"Started run {run_id} for matching activity {matching_id}")
        return Response(serialize_run(run_id, runner, runner.context['matching_title']),
                        status=status.HTTP_201_CREATED)


class RunAPI(APIView):
    """
    Base for every request against an open runner. Subclasses implement
    ``perform`` and return an engine Transition.
    """
    permission_classes = [AllowAny]
    request_serializer = None

    def _load_runner(self, run_id):
        snapshot = RunCache.get(run_id)
        if snapshot is None:
            raise RunNotFound(f"Run {run_id} not found")
        return ActivityRunner.restore(snapshot, on_complete=_finish_run)

    def _respond(self, run_id, runner, transition=None):
        payload = serialize_run(run_id, runner, runner.context.get('matching_title'))
        if transition is not None and not transition.accepted:
            payload = {'error': transition.reason, 'run': payload}
            return Response(payload, status=status.HTTP_409_CONFLICT)
        return Response(payload)

    def get(self, request, run_id):
        try:
            runner = self._load_runner(run_id)
        except RunNotFound:
            return Response({'error': 'Matching run not found'}, status=status.HTTP_404_NOT_FOUND)
        return self._respond(run_id, runner)

    def post(self, request, run_id):
        data = None
        if self.request_serializer is not None:
            serializer = self.request_serializer(data=request.data)
            if not serializer.is_valid():
                return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
            data = serializer.validated_data

        try:
            runner = self._load_runner(run_id)
        except RunNotFound:
            return Response({'error': 'Matching run not found'}, status=status.HTTP_404_NOT_FOUND)

        transition = self.perform(run_id, runner, data)
        if transition.accepted and not runner.is_finished:
            if not RunCache.set(run_id, runner.snapshot()):
                return Response({'error': 'Could not save matching run'},
                              status=status.HTTP_503_SERVICE_UNAVAILABLE)
        if transition.accepted:
            self.after_save(run_id, runner)
        return self._respond(run_id, runner, transition)

    def perform(self, run_id, runner, data):
        raise NotImplementedError

    def after_save(self, run_id, runner):
        """Runs once the accepted transition is stored."""


class RunDetailAPI(RunAPI):
    http_method_names = ['get', 'options']


class AssignAPI(RunAPI):
    request_serializer = AssignSerializer
    http_method_names = ['post', 'options']

    def perform(self, run_id, runner, data):
        return runner.session.assign(data['left'], data['right'])


class UnassignAPI(RunAPI):
    request_serializer = UnassignSerializer
    http_method_names = ['post', 'options']

    def perform(self, run_id, runner, data):
        return runner.session.unassign(data['left'])


class ResetAPI(RunAPI):
    http_method_names = ['post', 'options']

    def perform(self, run_id, runner, data):
        return runner.session.reset()


class CheckResultsAPI(RunAPI):
    http_method_names = ['post', 'options']

    def perform(self, run_id, runner, data):
        return runner.session.submit()

    def after_save(self, run_id, runner):
        result = runner.session.result
        try:
            MatchingAttempt.objects.create(
                run_id=run_id,
                student_id=runner.context.get('student_id'),
                matching_id=runner.definition.activity_id,
                phase=runner.current_phase,
                answers=runner.session.pairing,
                correctness=result.correctness,
                correct_count=result.correct_count,
                total=result.total,
                score=result.percent,
            )
        except DatabaseError as e:
            logger.error(f"Failed to record matching attempt for run {run_id}: {str(e)}")


class NextPhaseAPI(RunAPI):
    http_method_names = ['post', 'options']

    def perform(self, run_id, runner, data):
        return runner.advance_phase()


class NextActivityAPI(RunAPI):
    http_method_names = ['post', 'options']

    def perform(self, run_id, runner, data):
        return runner.advance_activity()
