from rest_framework.routers import DefaultRouter

from .api.views import JobTitleViewSet, UserViewSet

app_name = "core"

router = DefaultRouter()
router.register(r"job-titles", JobTitleViewSet, basename="job-title")
router.register(r"users", UserViewSet, basename="user")

urlpatterns = router.urls
