from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = [
        "message",
        "type",
        "document_id",
        "document_type",
        "is_read",
        "created_at",
    ]

    list_filter = ["type", "document_type", "is_read", "created_at"]

    search_fields = ["message", "document_id"]

    readonly_fields = ["created_at", "message", "type", "document_id", "document_type"]

    list_per_page = 50

    actions = ["mark_as_read"]

    def mark_as_read(self, request, queryset):
        updated = queryset.update(is_read=True)
        self.message_user(request, f"{updated} notification(s) marquée(s) comme lue(s).")

    mark_as_read.short_description = "Marquer comme lu"
