import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone

from notifications.models import NotificationLog

logger = logging.getLogger(__name__)


@shared_task(bind=True, autoretry_for=(Exception,), retry_backoff=True, retry_kwargs={"max_retries": 3})
def send_email_task(self, log_id):
    try:
        log = NotificationLog.objects.get(id=log_id)
    except NotificationLog.DoesNotExist:
        return "Log desaparecido"

    if log.status == NotificationLog.Status.SENT:
        return "Ya enviado"

    log.attempts += 1
    try:
        send_mail(
            log.subject,
            log.body,
            settings.DEFAULT_FROM_EMAIL,
            [log.recipient],
            fail_silently=False,
        )
    except Exception as exc:
        log.status = NotificationLog.Status.FAILED
        log.error_message = str(exc)
        log.save(update_fields=["status", "error_message", "attempts", "updated_at"])
        if self.request.retries >= self.max_retries:
            logger.error(
                "Email %s descartado después de %s intentos: %s",
                log.id, log.attempts, exc,
            )
            return "dead_letter"
        logger.warning("Error enviando email %s (intento %s): %s", log.id, log.attempts, exc)
        raise

    log.status = NotificationLog.Status.SENT
    log.sent_at = timezone.now()
    log.error_message = ""
    log.save(update_fields=["status", "sent_at", "error_message", "attempts", "updated_at"])
    return "Enviado"


@shared_task
def cleanup_old_notification_logs():
    """
    Elimina logs de emails enviados hace más de 90 días.
    Mantiene logs fallidos por 180 días para análisis.
    Ejecutar diariamente vía Celery Beat.
    """
    sent_cutoff = timezone.now() - timedelta(days=90)
    sent_deleted, _ = NotificationLog.objects.filter(
        status=NotificationLog.Status.SENT,
        sent_at__lt=sent_cutoff
    ).delete()

    failed_cutoff = timezone.now() - timedelta(days=180)
    failed_deleted, _ = NotificationLog.objects.filter(
        status=NotificationLog.Status.FAILED,
        created_at__lt=failed_cutoff
    ).delete()

    logger.info(
        "Limpieza de NotificationLog: %d enviados, %d fallidos eliminados",
        sent_deleted, failed_deleted
    )

    return {
        "sent_deleted": sent_deleted,
        "failed_deleted": failed_deleted,
        "total_deleted": sent_deleted + failed_deleted,
    }
