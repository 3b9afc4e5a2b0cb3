# exhibitions/urls.py

from rest_framework.routers import SimpleRouter

from exhibitions.views import ExhibitionViewSet

app_name = "exhibitions"

router = SimpleRouter()
router.register(r"", ExhibitionViewSet, basename="exhibition")

urlpatterns = router.urls
