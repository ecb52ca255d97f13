import logging

from django.db import transaction
from django.template import TemplateDoesNotExist, TemplateSyntaxError
from django.template.loader import render_to_string

from notifications.models import NotificationLog

logger = logging.getLogger(__name__)


class EmailRenderer:
    """
    Renderiza emails de texto plano a partir de un par de templates:
    ``<prefix>_subject.txt`` y ``<prefix>_body.txt``.
    """

    @staticmethod
    def render(template_prefix, context):
        try:
            subject = render_to_string(f"{template_prefix}_subject.txt", context)
            body = render_to_string(f"{template_prefix}_body.txt", context)
        except (TemplateDoesNotExist, TemplateSyntaxError) as exc:
            logger.error("Template de email inválido %s: %s", template_prefix, exc)
            raise ValueError(f"Template inválido: {exc}") from exc

        # El asunto de un email no admite saltos de línea
        subject = " ".join(subject.split())
        return subject, body.strip()


class EmailNotificationService:
    @classmethod
    def send_email(cls, *, event_code, recipient, subject, body, user=None, metadata=None):
        """
        Registra el email en NotificationLog y encola su envío cuando la
        transacción en curso confirme.
        """
        log = NotificationLog.objects.create(
            user=user,
            event_code=event_code,
            recipient=recipient,
            subject=subject[:255],
            body=body,
            metadata=metadata or {},
        )

        from notifications.tasks import send_email_task

        log_id = str(log.id)
        transaction.on_commit(lambda: send_email_task.delay(log_id))
        logger.info("Email %s encolado para %s (log %s)", event_code, recipient, log_id)
        return log

    @classmethod
    def send_templated_email(cls, *, event_code, recipient, template_prefix, context, user=None):
        subject, body = EmailRenderer.render(template_prefix, context)
        return cls.send_email(
            event_code=event_code,
            recipient=recipient,
            subject=subject,
            body=body,
            user=user,
        )
