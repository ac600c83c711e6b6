"""
Django Admin para o Diário de Bordo.

Consulta de tickets via interface web. Encerramento continua
exclusivo do fluxo de validação: tags, testemunha e auditoria são
somente leitura e o status não pode ser mudado para Resolvido aqui.
"""

from django import forms
from django.contrib import admin
from django.utils.html import format_html

from .models import TicketModel, TicketStatusChoices

_BADGE = (
    '<span style="background-color: {}; color: white; padding: 3px 8px; '
    'border-radius: 3px; font-size: 11px;">{}</span>'
)


class TicketAdminForm(forms.ModelForm):
    """Formulário do admin; recusa encerrar fora do fluxo de validação."""

    class Meta:
        model = TicketModel
        fields = '__all__'

    def clean_status(self):
        status = self.cleaned_data.get('status')
        anterior = None if self.instance._state.adding else self.instance.status
        if status == TicketStatusChoices.RESOLVIDO and anterior != TicketStatusChoices.RESOLVIDO:
            raise forms.ValidationError(
                "Encerramento exige validação com testemunha."
            )
        return status


@admin.register(TicketModel)
class TicketAdmin(admin.ModelAdmin):
    """Admin para TicketModel."""

    form = TicketAdminForm

    list_display = [
        'id_curto',
        'task_ticket',
        'client_name',
        'analyst_name',
        'status_badge',
        'prioridade_badge',
        'subject_code',
        'tags',
        'created_at',
    ]

    list_filter = [
        'status',
        'priority',
        'subject_code',
        'created_at',
    ]

    search_fields = [
        'id',
        'client_name',
        'task_ticket',
        'service_request',
        'analyst_action',
    ]

    readonly_fields = [
        'id',
        'created_at',
        'tag_vldd',
        'tag_nvldd',
        'customer_witness_name',
        'customer_witness_id',
        'validated_by',
        'validated_at',
    ]

    fieldsets = [
        ('Identificação', {
            'fields': [
                'id', 'client_name', 'analyst_name', 'location_name',
                'task_ticket', 'service_request',
            ],
        }),
        ('Atendimento', {
            'fields': [
                'support_start_time', 'support_end_time', 'subject_code',
                'priority', 'status', 'description', 'analyst_action', 'ai_analysis',
            ],
        }),
        ('Checklist', {
            'fields': [
                'ligacao_devida', 'utilizou_acfs', 'ocorreu_entintamento',
                'trocou_peca', 'peca_trocada',
            ],
        }),
        ('Validação', {
            'fields': [
                'tag_vldd', 'tag_nvldd', 'customer_witness_name',
                'customer_witness_id', 'validated_by', 'validated_at',
            ],
        }),
        ('Timestamps', {
            'fields': ['created_at'],
            'classes': ['collapse'],
        }),
    ]

    ordering = ['-created_at']

    date_hierarchy = 'created_at'

    def get_readonly_fields(self, request, obj=None):
        """Ticket resolvido não muda de status pelo admin."""
        campos = list(super().get_readonly_fields(request, obj))
        if obj is not None and obj.status == TicketStatusChoices.RESOLVIDO:
            campos.append('status')
        return campos

    def id_curto(self, obj):
        """Exibe ID curto (primeiros 8 caracteres)."""
        return obj.id[:8] + '...'
    id_curto.short_description = 'ID'

    def status_badge(self, obj):
        """Exibe status com badge colorido."""
        colors = {
            'Aberto': '#17a2b8',
            'Em Atendimento': '#ffc107',
            'Escalado': '#fd7e14',
            'Resolvido': '#28a745',
        }
        return format_html(_BADGE, colors.get(obj.status, '#6c757d'), obj.status)
    status_badge.short_description = 'Status'

    def prioridade_badge(self, obj):
        """Exibe prioridade com badge colorido."""
        colors = {
            'Baixa': '#28a745',
            'Média': '#ffc107',
            'Alta': '#fd7e14',
            'Crítica': '#dc3545',
        }
        return format_html(_BADGE, colors.get(obj.priority, '#6c757d'), obj.priority)
    prioridade_badge.short_description = 'Prioridade'

    def tags(self, obj):
        """Tags de validação gravadas no encerramento."""
        marcadas = [
            tag for tag, ativa in (('#VLDD#', obj.tag_vldd), ('#NLVDD#', obj.tag_nvldd))
            if ativa
        ]
        return ' '.join(marcadas) or '-'
    tags.short_description = 'Tags'
