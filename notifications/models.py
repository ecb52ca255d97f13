from django.conf import settings
from django.db import models

from core.models import BaseModel


class NotificationLog(BaseModel):
    """Un registro por cada email despachado (o intentado)."""

    class Status(models.TextChoices):
        QUEUED = "QUEUED", "Encolada"
        SENT = "SENT", "Enviada"
        FAILED = "FAILED", "Fallida"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notification_logs",
    )
    event_code = models.SlugField(max_length=64)
    recipient = models.EmailField(max_length=255)
    subject = models.CharField(max_length=255)
    body = models.TextField()
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.QUEUED)
    error_message = models.TextField(blank=True)
    sent_at = models.DateTimeField(null=True, blank=True)
    attempts = models.PositiveSmallIntegerField(default=0)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        verbose_name = "Registro de Notificación"
        verbose_name_plural = "Registros de Notificación"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["event_code", "created_at"], name="notif_event_created_idx"),
            models.Index(fields=["status", "sent_at"], name="notif_status_sent_idx"),
        ]

    def __str__(self):
        return f"{self.event_code} -> {self.recipient} ({self.status})"
