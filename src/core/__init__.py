"""
Core Domain Layer - O Hexágono.

Este pacote contém a lógica de negócio pura do Diário de Bordo,
sem dependências de frameworks.
Características:
- Zero dependências externas (Django, requests, google-genai)
- 100% testável sem banco de dados
- Agnóstico a infraestrutura
"""
