from django.contrib import admin

from .models import Review
from .services import recompute_aggregate


class ReviewAdmin(admin.ModelAdmin):
    list_display = ('id', 'hijab_style', 'user', 'rating', 'comment', 'created_at')
    list_filter = ('rating',)
    search_fields = ('comment', 'user__email', 'hijab_style__name')

    def get_readonly_fields(self, request, obj=None):
        # A review stays with its style and author once written.
        if obj is not None:
            return ('hijab_style', 'user', 'created_at')
        return ('created_at',)

    # Reviews edited through the admin must keep the style aggregate in sync as well.
    def save_model(self, request, obj, form, change):
        previous_style_id = None
        if change:
            previous_style_id = (
                Review.objects.filter(pk=obj.pk).values_list('hijab_style_id', flat=True).first()
            )

        super().save_model(request, obj, form, change)

        recompute_aggregate(obj.hijab_style_id)
        if previous_style_id is not None and previous_style_id != obj.hijab_style_id:
            recompute_aggregate(previous_style_id)

    def delete_model(self, request, obj):
        style_id = obj.hijab_style_id
        super().delete_model(request, obj)
        recompute_aggregate(style_id)

    def delete_queryset(self, request, queryset):
        style_ids = set(queryset.values_list('hijab_style_id', flat=True))
        super().delete_queryset(request, queryset)
        for style_id in style_ids:
            recompute_aggregate(style_id)


admin.site.register(Review, ReviewAdmin)
