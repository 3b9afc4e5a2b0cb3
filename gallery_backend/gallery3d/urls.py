# gallery3d/urls.py

from django.urls import path

from gallery3d.views import PickView, SceneView, StepView

app_name = "gallery3d"

urlpatterns = [
    path("scene/", SceneView.as_view(), name="scene"),
    path("pick/", PickView.as_view(), name="pick"),
    path("step/", StepView.as_view(), name="step"),
]
