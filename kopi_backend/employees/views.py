# employees/views.py

"""
EMPLOYEE VIEWSET

Purpose:
- Staff list for the checkout cashier picker.
- /active/ returns only employees that can be selected at checkout.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from employees.models import Employee
from employees.serializers import EmployeeSerializer


@extend_schema(tags=["employees"])
class EmployeeViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Employee.objects.all()
    serializer_class = EmployeeSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["role", "is_active"]
    pagination_class = None

    @action(detail=False, methods=["get"])
    def active(self, request):
        employees = self.get_queryset().filter(is_active=True)
        return Response(self.get_serializer(employees, many=True).data)
