"""Sales coordinator URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.coordinators.views import CoordinatorViewSet

router = DefaultRouter(trailing_slash=True)
router.register("coordinators", CoordinatorViewSet, basename="coordinator")

urlpatterns = router.urls
