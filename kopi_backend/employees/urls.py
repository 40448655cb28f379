# employees/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from employees.views import EmployeeViewSet

router = SimpleRouter()
router.register(r"", EmployeeViewSet, basename="employees")

urlpatterns = [
    path("", include(router.urls)),
]
