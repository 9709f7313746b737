# surveys/admin.py
from django.contrib import admin
from django.utils.html import format_html
from django.db.models import Count
from django.urls import reverse
from .models import Survey, Question, Submission, Answer


class QuestionInline(admin.StackedInline):
    model = Question
    extra = 0
    fields = ('title', 'type', 'required', 'order', 'properties')
    ordering = ['order']
    show_change_link = True


class AnswerInline(admin.TabularInline):
    model = Answer
    extra = 0
    fields = ('question', 'value')
    readonly_fields = ('question', 'value')
    can_delete = False
    max_num = 0  # No permitir agregar nuevos


@admin.register(Survey)
class SurveyAdmin(admin.ModelAdmin):
    list_display = ('title', 'status_badge', 'author', 'submission_count', 'public_id', 'created_at')
    list_filter = ('status', 'created_at', 'author')
    search_fields = ('title', 'description', 'author__username', 'public_id')
    inlines = [QuestionInline]
    readonly_fields = ('public_id', 'created_at', 'updated_at')
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('title', 'description', 'status', 'author', 'public_id')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(_submission_count=Count('submissions', distinct=True))

    def status_badge(self, obj):
        colors = {
            'draft': '#6c757d',
            'active': '#28a745',
            'paused': '#ffc107',
            'closed': '#dc3545',
        }
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            colors.get(obj.status, '#6c757d'),
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def submission_count(self, obj):
        count = obj._submission_count if hasattr(obj, '_submission_count') else obj.submissions.count()
        return format_html('<strong>{}</strong>', count)
    submission_count.short_description = 'Submissions'
    submission_count.admin_order_field = '_submission_count'


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ('title_preview', 'survey_link', 'type', 'order', 'required')
    list_filter = ('type', 'required', 'survey__status')
    search_fields = ('title', 'survey__title')
    list_per_page = 50

    def title_preview(self, obj):
        return obj.title[:60] + '...' if len(obj.title) > 60 else obj.title
    title_preview.short_description = 'Question'

    def survey_link(self, obj):
        url = reverse('admin:surveys_survey_change', args=[obj.survey_id])
        return format_html('<a href="{}">{}</a>', url, obj.survey.title)
    survey_link.short_description = 'Survey'


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ('id', 'survey_link', 'completed', 'answer_count', 'created_at')
    list_filter = ('completed', 'survey', 'created_at')
    search_fields = ('survey__title',)
    readonly_fields = ('created_at', 'updated_at', 'metadata')
    inlines = [AnswerInline]
    date_hierarchy = 'created_at'

    def survey_link(self, obj):
        url = reverse('admin:surveys_survey_change', args=[obj.survey_id])
        return format_html('<a href="{}">{}</a>', url, obj.survey.title)
    survey_link.short_description = 'Survey'

    def answer_count(self, obj):
        return format_html('<strong>{}</strong> answers', obj.answers.count())
    answer_count.short_description = 'Answers'
