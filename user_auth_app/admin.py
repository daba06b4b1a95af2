from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User

from reviews_app.services import recompute_aggregate, styles_reviewed_by
from .models import UserProfile


class UserProfileInline(admin.StackedInline):
    model = UserProfile
    can_delete = False
    verbose_name_plural = 'Profile'
    fk_name = 'user'


class CustomUserAdmin(BaseUserAdmin):
    inlines = (UserProfileInline,)

    def get_role(self, instance):
        return instance.profile.role
    get_role.short_description = 'Role'

    def get_is_blocked(self, instance):
        return instance.profile.is_blocked
    get_is_blocked.short_description = 'Blocked'
    get_is_blocked.boolean = True

    list_display = ('username', 'email', 'first_name', 'get_role', 'get_is_blocked')
    list_filter = BaseUserAdmin.list_filter + ('profile__role', 'profile__is_blocked')

    # Deleting a user deletes their reviews, so the styles they reviewed need a fresh aggregate.
    def delete_model(self, request, obj):
        style_ids = styles_reviewed_by([obj])
        super().delete_model(request, obj)
        for style_id in style_ids:
            recompute_aggregate(style_id)

    def delete_queryset(self, request, queryset):
        style_ids = styles_reviewed_by(queryset)
        super().delete_queryset(request, queryset)
        for style_id in style_ids:
            recompute_aggregate(style_id)


admin.site.unregister(User)
admin.site.register(User, CustomUserAdmin)
