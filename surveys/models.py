"""
surveys/models.py
Modelos principales para formularios, preguntas, envíos y respuestas.
"""
import secrets
from django.db import models
from django.conf import settings

from core.analytics.types import QUESTION_TYPE_CHOICES, QuestionType


class Survey(models.Model):
    """Un formulario publicado: secuencia ordenada de preguntas."""
    STATUS_CHOICES = [
        ('draft', 'Draft'),
        ('active', 'Active'),
        ('closed', 'Closed'),
        ('paused', 'Paused'),
    ]

    # Constantes para uso en código
    STATUS_DRAFT = 'draft'
    STATUS_ACTIVE = 'active'
    STATUS_PAUSED = 'paused'
    STATUS_CLOSED = 'closed'

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='surveys')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_DRAFT)

    # Identificador público seguro
    public_id = models.CharField(max_length=12, unique=True, editable=False, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['author', 'status'], name='survey_author_status_idx'),
        ]

    def save(self, *args, **kwargs):
        if not self.public_id:
            self.public_id = secrets.token_urlsafe(8)[:12]
        super().save(*args, **kwargs)

    def __str__(self):
        return self.title

    @property
    def accepts_submissions(self):
        return self.status == self.STATUS_ACTIVE


class Question(models.Model):
    survey = models.ForeignKey(Survey, on_delete=models.CASCADE, related_name='questions')
    title = models.TextField()
    description = models.TextField(blank=True, null=True)
    type = models.CharField(max_length=20, choices=QUESTION_TYPE_CHOICES, default=QuestionType.SHORT_TEXT.value)
    required = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)

    # Propiedades específicas del tipo (opciones, escala, maxRating, ...)
    properties = models.JSONField(default=dict, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['order', 'id']
        indexes = [
            models.Index(fields=['survey', 'order'], name='question_survey_order_idx'),
        ]

    def __str__(self):
        return f"{self.title[:50]} ({self.get_type_display()})"


class Submission(models.Model):
    """El paso de un encuestado por un formulario."""
    survey = models.ForeignKey(Survey, on_delete=models.CASCADE, related_name='submissions')
    completed = models.BooleanField(default=False)

    # Metadatos libres del cliente (timestamp, userAgent, device)
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['survey', 'created_at'], name='submission_survey_created_idx'),
        ]

    def __str__(self):
        return f"Submission {self.pk} -> {self.survey_id}"


class Answer(models.Model):
    submission = models.ForeignKey(Submission, on_delete=models.CASCADE, related_name='answers')
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name='answers')
    value = models.TextField(blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['submission', 'question'], name='unique_answer_per_question'),
        ]
        indexes = [
            models.Index(fields=['question', 'submission'], name='answer_question_sub_idx'),
        ]

    def __str__(self):
        return f"Ans: {self.question_id} -> {self.value[:40]}"
