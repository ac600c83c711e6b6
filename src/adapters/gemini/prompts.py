"""Prompt e schema de resposta da classificação de tickets."""

from google.genai import types

from src.core.tickets.entities import SubjectCode, TicketPriority


def build_classification_prompt(descricao: str, cliente: str) -> str:
    codigos = "\n".join(f'   - "{codigo.value}"' for codigo in SubjectCode)
    return (
        "Analise o seguinte relato de um chamado técnico e extraia "
        "informações estruturadas.\n"
        f"Cliente: {cliente}\n"
        f"Relato: {descricao}\n"
        "\n"
        "1. Classifique a prioridade.\n"
        "2. Classifique o Assunto (Subject Code) escolhendo OBRIGATORIAMENTE "
        "um destes valores exatos:\n"
        f"{codigos}\n"
        "\n"
        '3. Gere um texto curto para o campo "Ação Analista" resumindo o '
        "problema técnico identificado.\n"
        "4. Sugira um próximo passo imediato.\n"
    )


def build_response_schema() -> types.Schema:
    """Schema JSON com os literais exatos dos enums."""
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "priority": types.Schema(
                type=types.Type.STRING,
                enum=[p.value for p in TicketPriority],
            ),
            "subjectCode": types.Schema(
                type=types.Type.STRING,
                enum=[c.value for c in SubjectCode],
            ),
            "analystAction": types.Schema(type=types.Type.STRING),
            "suggestedNextStep": types.Schema(type=types.Type.STRING),
        },
        required=["priority", "subjectCode", "analystAction", "suggestedNextStep"],
    )


def build_generation_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=build_response_schema(),
    )
