from django.contrib import admin

from employees.models import Employee


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("name", "role", "phone_number", "is_active", "created_at")
    list_filter = ("role", "is_active")
    search_fields = ("name", "phone_number")
