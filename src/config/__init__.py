"""
Configuração do projeto Diário de Bordo.

Módulos:
- settings: Configurações Django
- urls: Rotas principais
- container: Dependency Injection Container
"""
