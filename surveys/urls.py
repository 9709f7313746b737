from django.urls import path
from asgiref.sync import async_to_sync

from .views import results_views, submission_views

app_name = "surveys"

urlpatterns = [
    # Envíos: POST público (intake) y GET del dueño (listado)
    path("<str:public_id>/submissions/", submission_views.survey_submissions_view, name="submissions"),

    # Resultados
    path(
        "<str:public_id>/results/analytics/",
        async_to_sync(results_views.survey_analytics_view),
        name="results_analytics",
    ),
]
