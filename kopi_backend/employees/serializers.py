# employees/serializers.py

from rest_framework import serializers

from employees.models import Employee


class EmployeeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Employee
        fields = ["id", "name", "role", "phone_number", "is_active"]
        read_only_fields = fields
