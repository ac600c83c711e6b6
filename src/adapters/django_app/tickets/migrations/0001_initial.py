"""
Migration inicial para o domínio de Tickets.

Cria a tabela:
- tickets: Registro dos atendimentos (colunas camelCase)
"""

from django.db import migrations, models
import django.utils.timezone
import src.adapters.django_app.tickets.models


class Migration(migrations.Migration):
    """Migration inicial."""

    initial = True

    dependencies = [
    ]

    operations = [
        # =================================================================
        # Tabela: tickets
        # =================================================================
        migrations.CreateModel(
            name='TicketModel',
            fields=[
                ('id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    editable=False,
                    default=src.adapters.django_app.tickets.models._novo_id,
                    help_text='UUID único do ticket'
                )),
                ('client_name', models.CharField(max_length=128, db_column='clientName', db_index=True)),
                ('analyst_name', models.CharField(max_length=128, db_column='analystName')),
                ('location_name', models.CharField(max_length=128, db_column='locationName')),
                ('task_ticket', models.CharField(max_length=64, db_column='taskTicket', db_index=True)),
                ('service_request', models.CharField(max_length=64, db_column='serviceRequest')),
                ('support_start_time', models.CharField(max_length=64, blank=True, default='', db_column='supportStartTime')),
                ('support_end_time', models.CharField(max_length=64, blank=True, default='', db_column='supportEndTime')),
                ('subject_code', models.CharField(
                    max_length=128,
                    choices=[
                        ('1100 - Codigo', '1100 - Codigo'),
                        ('1101 - Codigo de peças', '1101 - Codigo de peças'),
                        ('1102 - Codigo de midia', '1102 - Codigo de midia'),
                        ('1200 - Duvida técnica', '1200 - Duvida técnica'),
                        ('1201 - Interpretação defeito', '1201 - Interpretação defeito'),
                        ('1202 - Testes perifericos', '1202 - Testes perifericos'),
                        ('1203 - Sistema de ensinamento', '1203 - Sistema de ensinamento'),
                        ('1204 - Status sensores', '1204 - Status sensores'),
                        ('1205 - Diag não carrega', '1205 - Diag não carrega'),
                        ('1206 - Erro de HW', '1206 - Erro de HW'),
                        ('1207 - Duvida em configuração', '1207 - Duvida em configuração'),
                    ],
                    default='1200 - Duvida técnica',
                    db_column='subjectCode',
                )),
                ('priority', models.CharField(
                    max_length=32,
                    choices=[
                        ('Baixa', 'Baixa'),
                        ('Média', 'Média'),
                        ('Alta', 'Alta'),
                        ('Crítica', 'Crítica'),
                    ],
                    default='Média',
                    db_index=True,
                )),
                ('status', models.CharField(
                    max_length=32,
                    choices=[
                        ('Aberto', 'Aberto'),
                        ('Em Atendimento', 'Em Atendimento'),
                        ('Resolvido', 'Resolvido'),
                        ('Escalado', 'Escalado'),
                    ],
                    default='Aberto',
                    db_index=True,
                )),
                ('description', models.TextField(help_text='Relato do problema')),
                ('analyst_action', models.TextField(blank=True, default='', db_column='analystAction')),
                ('ai_analysis', models.TextField(null=True, blank=True, db_column='aiAnalysis')),
                ('ligacao_devida', models.BooleanField(default=False, db_column='ligacaoDevida')),
                ('utilizou_acfs', models.BooleanField(default=False, db_column='utilizouACFS')),
                ('ocorreu_entintamento', models.BooleanField(default=False, db_column='ocorreuEntintamento')),
                ('trocou_peca', models.BooleanField(default=False, db_column='trocouPeca')),
                ('peca_trocada', models.CharField(max_length=256, null=True, blank=True, db_column='pecaTrocada')),
                ('tag_vldd', models.BooleanField(default=False, db_column='tagVLDD')),
                ('tag_nvldd', models.BooleanField(default=False, db_column='tagNVLDD')),
                ('customer_witness_name', models.CharField(max_length=128, blank=True, default='', db_column='customerWitnessName')),
                ('customer_witness_id', models.CharField(max_length=64, blank=True, default='', db_column='customerWitnessID')),
                ('validated_by', models.CharField(max_length=128, null=True, blank=True, db_column='validatedBy')),
                ('validated_at', models.CharField(max_length=64, null=True, blank=True, db_column='validatedAt')),
                ('created_at', models.DateTimeField(
                    default=django.utils.timezone.now,
                    db_index=True,
                    db_column='createdAt',
                    help_text='Data/hora de criação'
                )),
            ],
            options={
                'verbose_name': 'Ticket',
                'verbose_name_plural': 'Tickets',
                'db_table': 'tickets',
                'ordering': ['-created_at'],
            },
        ),

        # Índices compostos
        migrations.AddIndex(
            model_name='ticketmodel',
            index=models.Index(fields=['status', 'created_at'], name='tickets_status_created_idx'),
        ),
        migrations.AddIndex(
            model_name='ticketmodel',
            index=models.Index(fields=['priority', 'status'], name='tickets_priority_status_idx'),
        ),
    ]
