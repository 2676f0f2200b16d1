# src/bound_config/core/__init__.py
"""
Core do Bound Config.

Componentes principais:
    - schema   → marcadores, derivação de chaves e Schema Descriptor
    - document → árvore em memória, backing file, hashing e Event Log
    - engine   → Bound Config Instances e Mapping Engine
    - registry → ponto de entrada (register / get / flush)

Princípios fundamentais:
    - Nenhuma decisão silenciosa: falhas de flush são logadas e registradas
    - Leituras materializam defaults na árvore
    - Estado compartilhado apenas via o documento raiz de cada schema
"""
