from django.contrib import admin
from .models import Activity

@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ('user', 'type', 'repository', 'created_at')
    list_filter = ('type',)
    search_fields = ('user__username', 'repository__name')
    readonly_fields = ('created_at',)
