"""
Django Models para o domínio de Tickets.

Estes models são ADAPTERS - implementam a persistência para as
entidades de domínio definidas em src/core/tickets/entities.py.

IMPORTANTE:
- Models NÃO contêm lógica de negócio
- Lógica de negócio fica nas Entities do Core
- Models são mapeados para/de Entities via Mappers

A tabela e as colunas ("clientName", "tagVLDD"...) são as mesmas
criadas no Supabase por scripts/setup_database.py, então os dois
backends são intercambiáveis.
"""

import uuid

from django.db import models
from django.utils import timezone


class TicketStatusChoices(models.TextChoices):
    """Choices para status de ticket (espelha TicketStatus do Core)."""
    ABERTO = 'Aberto', 'Aberto'
    EM_ATENDIMENTO = 'Em Atendimento', 'Em Atendimento'
    RESOLVIDO = 'Resolvido', 'Resolvido'
    ESCALADO = 'Escalado', 'Escalado'


class TicketPriorityChoices(models.TextChoices):
    """Choices para prioridade de ticket (espelha TicketPriority do Core)."""
    BAIXA = 'Baixa', 'Baixa'
    MEDIA = 'Média', 'Média'
    ALTA = 'Alta', 'Alta'
    CRITICA = 'Crítica', 'Crítica'


class SubjectCodeChoices(models.TextChoices):
    """Choices para assunto (espelha SubjectCode do Core)."""
    CODE_1100 = '1100 - Codigo', '1100 - Codigo'
    CODE_1101 = '1101 - Codigo de peças', '1101 - Codigo de peças'
    CODE_1102 = '1102 - Codigo de midia', '1102 - Codigo de midia'
    CODE_1200 = '1200 - Duvida técnica', '1200 - Duvida técnica'
    CODE_1201 = '1201 - Interpretação defeito', '1201 - Interpretação defeito'
    CODE_1202 = '1202 - Testes perifericos', '1202 - Testes perifericos'
    CODE_1203 = '1203 - Sistema de ensinamento', '1203 - Sistema de ensinamento'
    CODE_1204 = '1204 - Status sensores', '1204 - Status sensores'
    CODE_1205 = '1205 - Diag não carrega', '1205 - Diag não carrega'
    CODE_1206 = '1206 - Erro de HW', '1206 - Erro de HW'
    CODE_1207 = '1207 - Duvida em configuração', '1207 - Duvida em configuração'


def _novo_id() -> str:
    return str(uuid.uuid4())


class TicketModel(models.Model):
    """
    Model Django para persistência de Tickets.

    Este model é um ADAPTER que persiste dados do TicketEntity.
    NÃO contém lógica de negócio - apenas estrutura de dados.

    id e createdAt são atribuídos na inserção.
    """

    # Primary Key - UUID gerado na inserção
    id = models.CharField(
        max_length=36,
        primary_key=True,
        default=_novo_id,
        editable=False,
        help_text="UUID único do ticket"
    )

    # Dados descritivos
    client_name = models.CharField(max_length=128, db_column='clientName', db_index=True)
    analyst_name = models.CharField(max_length=128, db_column='analystName')
    location_name = models.CharField(max_length=128, db_column='locationName')
    task_ticket = models.CharField(max_length=64, db_column='taskTicket', db_index=True)
    service_request = models.CharField(max_length=64, db_column='serviceRequest')

    # Período informado pelo analista
    support_start_time = models.CharField(max_length=64, blank=True, default='', db_column='supportStartTime')
    support_end_time = models.CharField(max_length=64, blank=True, default='', db_column='supportEndTime')

    # Classificação
    subject_code = models.CharField(
        max_length=128,
        choices=SubjectCodeChoices.choices,
        default=SubjectCodeChoices.CODE_1200,
        db_column='subjectCode',
    )

    priority = models.CharField(
        max_length=32,
        choices=TicketPriorityChoices.choices,
        default=TicketPriorityChoices.MEDIA,
        db_index=True,
    )

    status = models.CharField(
        max_length=32,
        choices=TicketStatusChoices.choices,
        default=TicketStatusChoices.ABERTO,
        db_index=True,
    )

    # Narrativa
    description = models.TextField(help_text="Relato do problema")
    analyst_action = models.TextField(blank=True, default='', db_column='analystAction')
    ai_analysis = models.TextField(null=True, blank=True, db_column='aiAnalysis')

    # Checklist
    ligacao_devida = models.BooleanField(default=False, db_column='ligacaoDevida')
    utilizou_acfs = models.BooleanField(default=False, db_column='utilizouACFS')
    ocorreu_entintamento = models.BooleanField(default=False, db_column='ocorreuEntintamento')
    trocou_peca = models.BooleanField(default=False, db_column='trocouPeca')
    peca_trocada = models.CharField(max_length=256, null=True, blank=True, db_column='pecaTrocada')

    # Tags de validação
    tag_vldd = models.BooleanField(default=False, db_column='tagVLDD')
    tag_nvldd = models.BooleanField(default=False, db_column='tagNVLDD')

    # Testemunha
    customer_witness_name = models.CharField(max_length=128, blank=True, default='', db_column='customerWitnessName')
    customer_witness_id = models.CharField(max_length=64, blank=True, default='', db_column='customerWitnessID')

    # Auditoria do encerramento
    validated_by = models.CharField(max_length=128, null=True, blank=True, db_column='validatedBy')
    validated_at = models.CharField(max_length=64, null=True, blank=True, db_column='validatedAt')

    # Timestamp
    created_at = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        db_column='createdAt',
        help_text="Data/hora de criação"
    )

    class Meta:
        db_table = 'tickets'
        verbose_name = 'Ticket'
        verbose_name_plural = 'Tickets'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='tickets_status_created_idx'),
            models.Index(fields=['priority', 'status'], name='tickets_priority_status_idx'),
        ]

    def __str__(self):
        return f"[{self.id[:8]}] {self.task_ticket} - {self.client_name}"

    def __repr__(self):
        return f"<TicketModel id={self.id[:8]} status={self.status}>"
