"""
Testes dos textos de resumo (validação e atendimento).
"""

from src.core.tickets.dtos import CriarTicketInputDTO
from src.core.tickets.summaries import gerar_resumo_atendimento, gerar_resumo_validacao
from src.core.tickets.validation import FormularioValidacao, SicValidation


class TestResumoValidacao:
    """Resumo exibido antes de confirmar o encerramento."""

    def test_formato_completo(self, ticket_factory):
        ticket = ticket_factory(
            client_name="Banco Alfa",
            location_name="Agência Centro",
            task_ticket="TASK-001",
            description="Terminal não dispensa cédulas",
        )
        form = FormularioValidacao.from_ticket(ticket).com_edicoes(
            witness_name="Ana",
            witness_id="M-1",
            edited_analyst_action="Trocado dispensador",
            part_replaced=True,
            part_name="Dispensador",
            card_test=True,
            sic_validation=SicValidation(saques=True, depositos=True),
        )

        resumo = gerar_resumo_validacao(ticket, form)

        assert resumo == "\n".join([
            "RESUMO DE VALIDAÇÃO",
            "-" * 32,
            "STATUS: #VLDD#",
            "CLIENTE: Banco Alfa",
            "LOCAL: Agência Centro",
            "TASK: TASK-001",
            "DEFEITO RECLAMADO: Terminal não dispensa cédulas",
            "AÇÃO TÉCNICO: Trocado dispensador",
            "",
            "VALIDAÇÃO TÉCNICA:",
            "- Houve Troca de Peça: Sim (Dispensador)",
            "- Teste com Cartão: Sim",
            "",
            "VALIDAÇÃO SIC:",
            "- Itens validados: Saques, Depósitos",
            "",
            "VALIDADO POR: Ana (Matrícula: M-1)",
            "-" * 32,
        ])

    def test_descricao_longa_truncada(self, ticket_factory):
        ticket = ticket_factory(description="x" * 150)
        form = FormularioValidacao.from_ticket(ticket)

        resumo = gerar_resumo_validacao(ticket, form)

        assert f"DEFEITO RECLAMADO: {'x' * 100}..." in resumo

    def test_sem_troca_e_sem_itens_sic(self, ticket_factory):
        ticket = ticket_factory()
        form = FormularioValidacao.from_ticket(ticket).com_edicoes(tag="#NLVDD#")

        resumo = gerar_resumo_validacao(ticket, form)

        assert "STATUS: #NLVDD#" in resumo
        assert "- Houve Troca de Peça: Não" in resumo
        assert "- Teste com Cartão: Não" in resumo
        assert "- Itens validados: Nenhum" in resumo


class TestResumoAtendimento:
    """Resumo do atendimento para os grupos de mensagens."""

    def test_formato(self):
        dto = CriarTicketInputDTO(
            client_name="Banco Alfa",
            analyst_name="João",
            location_name="Agência Centro",
            task_ticket="TASK-001",
            service_request="SR-001",
            support_start_time="2024-05-10T14:30",
            support_end_time="2024-05-10T15:10",
            description="Terminal travado",
            analyst_action="Reiniciado",
            priority="Alta",
            tag_vldd=True,
            trocou_peca=True,
            peca_trocada="Fonte",
            customer_witness_name="Ana",
            customer_witness_id="M-1",
        )

        linhas = gerar_resumo_atendimento(dto).split("\n")

        assert linhas[0] == "*RESUMO DO ATENDIMENTO*"
        assert linhas[1] == "-" * 26
        assert "*Task:* TASK-001 | *SR:* SR-001" in linhas
        assert "*Início:* 2024-05-10 14:30 | *Fim:* 2024-05-10 15:10" in linhas
        assert "*Assunto:* 1200 - Duvida técnica" in linhas
        assert "*Prioridade:* Alta" in linhas
        assert "*Tags:* #VLDD# " in linhas
        assert "Nome: Ana | Matrícula: M-1" in linhas
        assert "- Troca de Peça: Sim (Fonte)" in linhas
        assert "- Ligação Devida: Não" in linhas
        assert linhas[-1] == "-" * 26
