# matching/urls.py
from django.urls import path
from .views import (
    AssignAPI,
    CheckResultsAPI,
    MatchingAttemptsAPI,
    MatchingDetailAPI,
    MatchingListAPI,
    NextActivityAPI,
    NextPhaseAPI,
    ResetAPI,
    RunDetailAPI,
    StartRunAPI,
    TopicListAPI,
    TopicMatchingAPI,
    UnassignAPI,
)

urlpatterns = [
    path('topics/', TopicListAPI.as_view(), name='topic-list'),
    path('matching/', MatchingListAPI.as_view(), name='matching-list'),
    path('matching/topic/<str:topic_id>/', TopicMatchingAPI.as_view(), name='topic-matching'),
    path('matching/<str:matching_id>/', MatchingDetailAPI.as_view(), name='matching-detail'),
    path('matching/<str:matching_id>/runs/', StartRunAPI.as_view(), name='start-run'),
    path('matching/<str:matching_id>/attempts/', MatchingAttemptsAPI.as_view(), name='matching-attempts'),
    path('runs/<uuid:run_id>/', RunDetailAPI.as_view(), name='run-detail'),
    path('runs/<uuid:run_id>/assign/', AssignAPI.as_view(), name='run-assign'),
    path('runs/<uuid:run_id>/unassign/', UnassignAPI.as_view(), name='run-unassign'),
    path('runs/<uuid:run_id>/reset/', ResetAPI.as_view(), name='run-reset'),
    path('runs/<uuid:run_id>/check/', CheckResultsAPI.as_view(), name='run-check'),
    path('runs/<uuid:run_id>/next-phase/', NextPhaseAPI.as_view(), name='run-next-phase'),
    path('runs/<uuid:run_id>/next-activity/', NextActivityAPI.as_view(), name='run-next-activity'),
]
