from django.contrib import admin

from .models import HijabStyle


class HijabStyleAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'average_rating', 'review_count', 'created_at')
    search_fields = ('name', 'description')
    # Derived from the reviews; editing them here would break the aggregate.
    readonly_fields = ('average_rating', 'review_count', 'created_at')


admin.site.register(HijabStyle, HijabStyleAdmin)
