"""Services Layer — catalog reads and the two write sagas.

Invariants:
    - Services depend on core/ Protocols, never on concrete adapters
    - Collaborators and settings are constructor arguments (no process-wide state)

Design Decisions:
    - One file per component: resolver, creation saga, pledge saga, saga runner
"""
