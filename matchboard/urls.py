from django.urls import path, include
from django.http import JsonResponse
def root_view(request):
    return JsonResponse({"status": "ok", "message": "Matchboard API is live"})
urlpatterns = [
    path('', root_view),
    path('api/', include('matching.urls')),
]
