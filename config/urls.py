"""
URL configuration for the Task service.
"""
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.urls import path
from ninja import NinjaAPI

from apps.core.exceptions import GENERIC_ERROR_MESSAGE, register_exception_handlers
from apps.tasks.api import build_router
from apps.tasks.services import TaskStore

WELCOME_BANNER = "Welcome to the Todo API! Use /tasks for managing tasks."

api = NinjaAPI(
    title="Todo API",
    version="1.0.0",
    description="Task records with completion filtering and pagination",
    docs_url="/docs",
)
register_exception_handlers(api)

# One store for the lifetime of the process, injected into the handlers
store = TaskStore()
api.add_router("/tasks", build_router(store))


def welcome(request: HttpRequest) -> HttpResponse:
    return HttpResponse(WELCOME_BANNER, content_type="text/plain; charset=utf-8")


urlpatterns = [
    path('', welcome, name='welcome'),
    path('', api.urls),
]


# Django-level fallbacks for URLs outside the API (e.g. /tasks/)
def not_found(request: HttpRequest, exception=None) -> JsonResponse:
    return JsonResponse({"message": "Not found"}, status=404)


def server_error(request: HttpRequest) -> JsonResponse:
    return JsonResponse({"error": GENERIC_ERROR_MESSAGE}, status=500)


handler404 = not_found
handler500 = server_error
