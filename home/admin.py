from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from home.models import User


# Staff accounts carry a role; only brooder managers may approve, reject,
# dispatch or cancel requests.
@admin.register(User)
class StaffUserAdmin(UserAdmin):
    model = User
    list_display = ('username', 'get_full_name', 'role', 'phone_number', 'is_active')
    list_filter = ('role',) + UserAdmin.list_filter
    search_fields = UserAdmin.search_fields + ('phone_number',)
    fieldsets = UserAdmin.fieldsets + (
        ('Role', {
            'fields': ('role', 'phone_number', 'dob')
        }),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Role', {
            'fields': ('role', 'phone_number')
        }),
    )
