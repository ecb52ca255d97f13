from django.contrib import admin

from .models import NotificationLog


@admin.register(NotificationLog)
class NotificationLogAdmin(admin.ModelAdmin):
    list_display = ("event_code", "recipient", "status", "attempts", "sent_at", "created_at")
    list_filter = ("event_code", "status")
    search_fields = ("event_code", "recipient", "subject")
    raw_id_fields = ("user",)
    readonly_fields = ("created_at", "updated_at", "sent_at", "attempts")
