"""
Abacus Backend — Services Package
===================================

    - calculator.py:       operation registry, operand validation, dispatch
    - comment_store.py:    document-store access returning tagged StoreResults
    - comment_service.py:  maps StoreResults to application exceptions
"""
